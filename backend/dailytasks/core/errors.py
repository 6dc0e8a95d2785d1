class DailyTasksError(Exception):
    """Base class for errors raised by dailytasks itself."""


class AuthFailure(DailyTasksError):
    """Sign-in, sign-up or principal lookup failed.

    ``message`` is short and human readable; routers pass it straight to the client.
    """

    def __init__(self, message: str = "Authentication failed"):
        super().__init__(message)
        self.message = message


class InvalidToken(AuthFailure):
    def __init__(self, message: str = "Could not validate credentials"):
        super().__init__(message)
