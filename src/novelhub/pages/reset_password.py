"""Set a new password from an emailed reset link."""

from __future__ import annotations

from .base import FormPage, PageContext
from .signup import password_form_error

INVALID_TOKEN_MESSAGE = (
    "Invalid or missing reset token. Please request a new password reset link."
)


class ResetPasswordPage(FormPage):
    heading = "Reset Password"
    fields = ("password", "confirm_password")

    def __init__(self, context: PageContext):
        super().__init__(context)
        self.token = context.query.get("token", "")
        self.invalid_token = not self.token
        if self.invalid_token:
            self.error = INVALID_TOKEN_MESSAGE

    async def submit(self) -> None:
        if self.invalid_token:
            self.error = INVALID_TOKEN_MESSAGE
            return
        self.error = password_form_error(
            self.form["password"], self.form["confirm_password"], length_first=True
        )
        if self.error:
            return

        result = await self._call(
            self.context.auth_service.reset_password(self.token, self.form["password"])
        )
        if result.ok:
            self.success = "Password reset successful"
            self.go("/login")

    def request_new_link(self) -> None:
        self.go("/login")
