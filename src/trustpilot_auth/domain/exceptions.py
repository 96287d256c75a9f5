class AuthenticatorError(Exception):
    """
    Raised for every failure of an OAuth call against Trustpilot.

    Callers can catch this type, or one of the subclasses below to branch on
    what went wrong without matching on the message.

    Attributes:
        message: Human-readable description
        status_code: HTTP status for HttpStatusError, 0 for TransportError, None otherwise
        cause: The underlying exception, when there is one
    """

    status_code: int | None = None

    def __init__(self, message: str, status_code: int | None = None, cause: BaseException | None = None):
        super().__init__(message)

        self.message = message
        self.cause = cause

        if status_code is not None:
            self.status_code = status_code

    @property
    def kind(self) -> str:
        return type(self).__name__

    def __str__(self) -> str:
        return self.message


class TransportError(AuthenticatorError):
    """The request never produced a complete response (connection, TLS, DNS, timeout, read)."""

    status_code = 0


class HttpStatusError(AuthenticatorError):
    """Trustpilot answered with an error status."""

    def __init__(self, message: str, status_code: int, cause: BaseException | None = None):
        super().__init__(message, status_code=status_code, cause=cause)


class DecodeError(AuthenticatorError):
    """The response body is not valid JSON."""


class ProtocolError(AuthenticatorError):
    """The response is JSON but not the shape of a token response."""


class ConstructionError(AuthenticatorError):
    """The token response could not be turned into an AccessToken."""
