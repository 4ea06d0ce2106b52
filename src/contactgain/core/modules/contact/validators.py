import re

from contactgain.errors import InvalidPhoneError, ValidationError

# Leading +, 1-3 digit country code not starting with 0, then 8-15 subscriber digits. ASCII digits only
PHONE_RE = re.compile(r"^\+[1-9]\d{0,2}\d{8,15}$", re.ASCII)
WHITESPACE_RE = re.compile(r"\s+")
# Line breaks and other control characters would start a new vCard property
CONTROL_CHARS_RE = re.compile(r"[\x00-\x1f\x7f]")


def normalize_phone(phone: str) -> str:
    """Remove all whitespace from a phone number."""
    return WHITESPACE_RE.sub("", phone)


def is_valid_phone(phone: str) -> bool:
    return bool(PHONE_RE.fullmatch(normalize_phone(phone)))


def name_key(name: str) -> str:
    """Case-insensitive uniqueness key for a contact name."""
    return name.strip().casefold()


def validate_contact_fields(name: str, phone: str, email: str | None) -> tuple[str, str, str | None]:
    """Validate and normalize submitted contact fields.

    Returns:
        Tuple of (trimmed name, whitespace-free phone, trimmed email or None)

    Raises:
        ValidationError: If name or phone is blank, or name or email contains control characters
        InvalidPhoneError: If the phone number is not in international format
    """
    name = name.strip()
    phone = phone.strip()
    if not name or not phone:
        raise ValidationError("Please enter both name and phone number")

    email = email.strip() if email else None
    if CONTROL_CHARS_RE.search(name) or (email and CONTROL_CHARS_RE.search(email)):
        raise ValidationError("Name and email must not contain line breaks or control characters")

    if not is_valid_phone(phone):
        raise InvalidPhoneError
    return name, normalize_phone(phone), email or None
