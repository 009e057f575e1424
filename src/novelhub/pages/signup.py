"""Registration page."""

from __future__ import annotations

from novelhub.core.exceptions import ValidationError
from novelhub.services.validation import validate_password, validate_passwords_match

from .base import FormPage

PASSWORDS_DIFFER = "Passwords do not match"
PASSWORD_TOO_SHORT = "Password must be at least 6 characters long"


def password_form_error(
    password: str, confirmation: str, length_first: bool = False
) -> str | None:
    """Signup checks the mismatch first; password reset checks length first."""
    try:
        if length_first:
            validate_password(password, PASSWORD_TOO_SHORT)
        validate_passwords_match(password, confirmation, PASSWORDS_DIFFER)
        validate_password(password, PASSWORD_TOO_SHORT)
    except ValidationError as e:
        return e.message
    return None


class SignupPage(FormPage):
    heading = "Sign Up"
    fields = ("username", "email", "password", "confirm_password")

    async def submit(self) -> None:
        self.error = password_form_error(self.form["password"], self.form["confirm_password"])
        if self.error:
            return

        result = await self._call(
            self.context.auth.register(
                self.form["username"], self.form["email"], self.form["password"]
            )
        )
        if result.ok:
            self.go("/")
