# expo_push/errors.py

from typing import Optional


class PushError(Exception):
    """Bazowy błąd klienta push."""
    pass


class PushEmptyError(PushError):
    """Próba wysłania paczki bez żadnego elementu."""

    def __init__(self, message: str = "Cannot serialize an empty chunk"):
        super().__init__(message)


class PushSerializationError(PushError):
    """Obiekt domenowy nie daje się zapisać jako JSON."""
    pass


class PushCompressionError(PushError):
    """Błąd enkodera gzip przy budowie ciała żądania."""
    pass


class PushDecodeError(PushError):
    """Odpowiedź bramki nie pasuje do oczekiwanej koperty."""
    pass


class PushTransportError(PushError):
    """
    Błąd połączenia, timeout albo status spoza 2xx.
    `status_code` jest None, jeśli odpowiedź w ogóle nie dotarła.
    """

    def __init__(self, message: str, status_code: Optional[int] = None, body: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.body = body

    @property
    def retryable(self) -> bool:
        if self.status_code is None:
            return True
        return self.status_code == 429 or self.status_code >= 500


class PushTokenError(PushError, ValueError):
    """Niepoprawny format tokenu Expo."""
    pass
