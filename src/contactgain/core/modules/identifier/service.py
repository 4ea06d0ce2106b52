import secrets
import string

from contactgain.core.core import Service
from contactgain.core.modules.counter.models import CounterName

SHORT_ID_LENGTH = 7
SHORT_ID_ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits


def generate_short_id(length: int = SHORT_ID_LENGTH) -> str:
    """Random alphanumeric token for session links. Not unique by construction."""
    return "".join(secrets.choice(SHORT_ID_ALPHABET) for _ in range(length))


class IdentifierService(Service):
    """Issues shareable link tokens and file sequence numbers for new sessions."""

    def issue_short_id(self) -> str:
        return generate_short_id()

    async def issue_file_sequence_number(self) -> int:
        """Next value of the global VCF counter, taken once per session creation."""
        return await self.core.services.counter.increment_and_read(CounterName.SESSION_VCF_DOWNLOAD_NAME)
