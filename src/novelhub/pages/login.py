"""Sign-in page with the forgot-password dialog."""

from __future__ import annotations

from novelhub.core.cancellation import RequestTracker
from novelhub.core.result import attempt

from .base import FormPage, PageContext


def _local_path(value: object) -> str | None:
    if isinstance(value, str) and value.startswith("/") and not value.startswith("//"):
        return value
    return None


class LoginPage(FormPage):
    heading = "Login"
    fields = ("email", "password")

    def __init__(self, context: PageContext):
        super().__init__(context)
        self.show_password = False
        self.forgot_open = False
        self.forgot_email = ""
        self.forgot_loading = False
        self.forgot_error: str | None = None
        self.forgot_success: str | None = None
        self._forgot = RequestTracker()

    @property
    def from_path(self) -> str:
        """Where to go after signing in: the page that sent us here, or home."""
        return (
            _local_path(self.context.state.get("from"))
            or _local_path(self.context.query.get("redirect"))
            or "/"
        )

    def toggle_password(self) -> None:
        self.show_password = not self.show_password

    async def submit(self) -> None:
        result = await self._call(
            self.context.auth.login(self.form["email"], self.form["password"])
        )
        if result.ok:
            self.go(self.from_path)

    # Forgot-password dialog.

    def open_forgot(self) -> None:
        self.forgot_open = True
        self.forgot_email = self.form["email"]
        self.forgot_error = None
        self.forgot_success = None

    def close_forgot(self) -> None:
        self.forgot_open = False
        self._forgot.cancel()

    async def send_reset(self) -> None:
        self.forgot_error = None
        self.forgot_success = None
        token = self._forgot.begin()
        self.forgot_loading = True
        result = await attempt(
            self.context.auth_service.forgot_password(self.forgot_email), token
        )
        if result.superseded:
            return

        self.forgot_loading = False
        if result.error is not None:
            self.forgot_error = result.error.message
        else:
            self.forgot_success = "Password reset instructions sent to your email"

    def teardown(self) -> None:
        super().teardown()
        self._forgot.cancel()
