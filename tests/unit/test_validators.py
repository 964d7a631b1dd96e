"""Tests for Pydantic credential validation"""
import pytest

from glossary_reminders.exceptions import ValidationError
from glossary_reminders.validators import validate_login, validate_signup


class TestSignupValidation:

    def test_valid_credentials(self):
        credentials = validate_signup("amina_99-x", "correct-horse")
        assert credentials.username == "amina_99-x"

    def test_missing_fields(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_signup(None, None)
        assert exc_info.value.user_message == "Username and password are required"

    def test_short_password(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_signup("amina", "1234567")
        assert exc_info.value.field == "password"

    def test_minimum_password_length_accepted(self):
        assert validate_signup("amina", "12345678").password == "12345678"

    @pytest.mark.parametrize("username", ["has space", "semi;colon", "émile", "a" * 65, "amina\n"])
    def test_invalid_usernames(self, username):
        with pytest.raises(ValidationError) as exc_info:
            validate_signup(username, "correct-horse")
        assert exc_info.value.field == "username"


class TestLoginValidation:

    def test_no_strength_rule(self):
        assert validate_login("amina", "short").password == "short"

    def test_missing_password(self):
        with pytest.raises(ValidationError):
            validate_login("amina", "")
