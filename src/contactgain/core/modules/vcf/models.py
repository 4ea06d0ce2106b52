from pydantic import BaseModel


class VcfDownload(BaseModel):
    """Encoded contact-card document ready to be served as an attachment."""

    content: str
    filename: str
    contact_count: int
