class RepositoryError(RuntimeError):
    """Base class for errors raised by the storage layer."""


class ValidationError(RepositoryError):
    """Input violates a constraint (uniqueness, missing reference, illegal status move)."""


class NotFoundError(RepositoryError):
    """The referenced row does not exist."""

    def __init__(self, entity: str, entity_id: int) -> None:
        super().__init__(f"{entity} not found")
        self.entity = entity
        self.entity_id = entity_id


class StorageError(RepositoryError):
    """Backend failure or data-integrity fault."""
