"""vCard 3.0 encoding of collected contacts."""

from collections.abc import Sequence

from contactgain.core.modules.contact.models import Contact

MEDIA_TYPE = "text/vcard;charset=utf-8"
CRLF = "\r\n"


def split_name(name: str) -> tuple[str, str]:
    """Split a full name into (first, last) on the first whitespace run."""
    parts = name.split(None, 1)
    first_name = parts[0] if parts else ""
    last_name = parts[1] if len(parts) > 1 else ""
    return first_name, last_name


def encode_contact(contact: Contact) -> str:
    first_name, last_name = split_name(contact.name)
    lines = [
        "BEGIN:VCARD",
        "VERSION:3.0",
        f"N:{last_name};{first_name};;;",
        f"FN:{contact.name}",
    ]
    if contact.phone:
        lines.append(f"TEL;TYPE=CELL:{contact.phone}")
    if contact.email:
        lines.append(f"EMAIL:{contact.email}")
    lines.append("END:VCARD")
    return "".join(line + CRLF for line in lines)


def encode(contacts: Sequence[Contact]) -> str:
    """Encode contacts as concatenated vCard records in the given order.

    Returns an empty string for an empty list.
    """
    return "".join(encode_contact(contact) for contact in contacts)


def filename_for(base_label: str, sequence_number: int) -> str:
    """Download filename, stable for a given session sequence number."""
    return f"{base_label}{sequence_number:03d}.vcf"
