from typing import List


class EstoqueError(Exception):
    """Base class for all domain errors."""
    pass


class ValidationError(EstoqueError):
    """Raised when user input is rejected before anything is mutated."""
    pass


class RequiredFieldsMissing(ValidationError):
    """Raised when required columns have no value. Carries every missing name."""

    def __init__(self, fields: List[str]):
        self.fields = list(fields)
        super().__init__(
            "Campos obrigatórios não preenchidos: " + ", ".join(self.fields)
        )


class NotSignedIn(EstoqueError):
    """Raised when a session context is requested before sign-in."""
    pass


class CollaboratorError(EstoqueError):
    """Raised when an external service (database, OAuth provider) fails."""
    pass
