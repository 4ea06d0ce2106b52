"""Tests for contact field validation."""

import pytest

from contactgain.core.modules.contact.validators import is_valid_phone, name_key, normalize_phone, validate_contact_fields
from contactgain.errors import InvalidPhoneError, ValidationError


class TestPhoneFormat:
    @pytest.mark.parametrize(
        "phone",
        [
            "+233501234567",
            "+2335012 34567",
            " +233 50 123 4567 ",
            "+12345678901",
            "+123456789012345678",
        ],
    )
    def test_valid(self, phone):
        assert is_valid_phone(phone)

    @pytest.mark.parametrize(
        "phone",
        [
            "233501234567",  # no leading +
            "+0233501234567",  # country code starts with 0
            "+1234567",  # too short
            "+1234567890123456789",  # too long
            "+23350-1234567",
            "+23350123456a",
            "+2٣٣٥٠١٢٣٤٥٦٧",  # Arabic-Indic digits
            "+２３３５０１２３４５６７",  # fullwidth digits
            "",
        ],
    )
    def test_invalid(self, phone):
        assert not is_valid_phone(phone)

    def test_normalize_strips_all_whitespace(self):
        assert normalize_phone(" +233 50\t123 4567\n") == "+233501234567"


class TestValidateContactFields:
    def test_returns_normalized_values(self):
        name, phone, email = validate_contact_fields("  Jane Doe ", "+2335012 34567", " jane@example.com ")

        assert name == "Jane Doe"
        assert phone == "+233501234567"
        assert email == "jane@example.com"

    def test_blank_email_becomes_none(self):
        _, _, email = validate_contact_fields("Jane Doe", "+233501234567", "   ")
        assert email is None

    def test_missing_email_is_none(self):
        _, _, email = validate_contact_fields("Jane Doe", "+233501234567", None)
        assert email is None

    @pytest.mark.parametrize(("name", "phone"), [("", "+233501234567"), ("   ", "+233501234567"), ("Jane", ""), ("Jane", "  ")])
    def test_blank_required_field(self, name, phone):
        with pytest.raises(ValidationError) as exc_info:
            validate_contact_fields(name, phone, None)
        assert not isinstance(exc_info.value, InvalidPhoneError)

    def test_bad_phone_raises_invalid_phone(self):
        with pytest.raises(InvalidPhoneError):
            validate_contact_fields("Jane Doe", "233501234567", None)

    def test_non_ascii_digits_raise_invalid_phone(self):
        with pytest.raises(InvalidPhoneError):
            validate_contact_fields("Jane Doe", "+2٣٣٥٠١٢٣٤٥٦٧", None)

    @pytest.mark.parametrize(
        ("name", "email"),
        [
            ("Jane\r\nEMAIL:evil@example.com", None),
            ("Jane\nDoe", None),
            ("Jane\x00Doe", None),
            ("Jane Doe", "jane@example.com\r\nTEL:+10000000000"),
        ],
    )
    def test_control_characters_rejected(self, name, email):
        with pytest.raises(ValidationError) as exc_info:
            validate_contact_fields(name, "+233501234567", email)
        assert not isinstance(exc_info.value, InvalidPhoneError)


class TestNameKey:
    def test_case_insensitive_and_trimmed(self):
        assert name_key("Jane Doe") == name_key("  jane doe ")

    def test_different_names_differ(self):
        assert name_key("Jane Doe") != name_key("Jane Do")
