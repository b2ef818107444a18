from typing import Optional


class AppError(Exception):
    """Base class for all application exceptions."""
    pass

class StoreError(AppError):
    """
    Raised when the remote bills store rejects a call.

    Carries the HTTP-style status (None for transport failures) and the
    message reported by the store.
    """
    def __init__(self, message: str, status: Optional[int] = None):
        self.message = message
        self.status = status
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.status is None:
            return self.message
        return f"Erreur {self.status}: {self.message}"

class InvalidSessionError(AppError):
    """Error when the current user cannot be read from the session context."""
    def __init__(self, reason: str):
        self.message = f"Session utilisateur invalide: {reason}"
        self.reason = reason
        super().__init__(self.message)
