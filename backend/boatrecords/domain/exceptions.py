"""Domain-specific exceptions — framework-independent."""


class EntityNotFoundError(Exception):
    """Raised when an operation requires an entity that does not exist."""

    def __init__(self, entity_type: str, entity_id: str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class DuplicateEntityError(Exception):
    """Raised when attempting to create a duplicate entity."""

    def __init__(self, entity_type: str, field: str, value: str):
        self.entity_type = entity_type
        self.field = field
        self.value = value
        super().__init__(f"{entity_type} with {field}='{value}' already exists")


class ConflictError(Exception):
    """Raised by a save whose version does not supersede the stored one.

    The caller must re-fetch, re-apply its change and retry; nothing is
    retried automatically.
    """

    def __init__(self, entity_id: str, stored_version: int, incoming_version: int):
        self.entity_id = entity_id
        self.stored_version = stored_version
        self.incoming_version = incoming_version
        super().__init__(
            f"Entity {entity_id} was modified by another process. "
            f"Current version {stored_version}, attempted version {incoming_version}"
        )


class DomainRuleViolationError(Exception):
    """Raised when a mutation would break a repository-owned invariant."""

    def __init__(self, entity_type: str, rule: str):
        self.entity_type = entity_type
        self.rule = rule
        super().__init__(f"{entity_type}: {rule}")


class InvalidQueryError(ValueError):
    """Raised when a query filter cannot be evaluated against a record type."""


class StorageIOError(Exception):
    """Raised when a durable storage medium fails to read or write."""

    def __init__(self, key: str, operation: str, message: str):
        self.key = key
        self.operation = operation
        super().__init__(f"Storage {operation} failed for '{key}': {message}")


class InvalidArchiveError(ValueError):
    """Raised when a backup archive is unreadable or lacks its manifest."""
