"""Store exceptions.

These are hard faults raised by the store layer. Business-rule failures
never use them; they propagate unchanged to the caller, which owns any
retry policy.
"""


class StoreError(Exception):
    """Base exception for all key-value store errors."""

    def __init__(self, message: str = "Key-value store error"):
        self.message = message
        super().__init__(self.message)


class ConditionalCheckFailedError(StoreError):
    """Raised when a conditional write is rejected by the store."""

    def __init__(self, table: str, condition: str):
        self.table = table
        self.condition = condition
        super().__init__(f"Condition '{condition}' failed on table {table}")


class EntityAlreadyExistsError(StoreError):
    """Raised when inserting an entity whose identity key is already taken."""

    def __init__(self, entity_type: str, entity_id: str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} already exists: {entity_id}")


class AttributeDecodeError(StoreError):
    """Raised when a registered scalar attribute cannot be converted back."""

    def __init__(self, attribute: str, raw: object, reason: str):
        self.attribute = attribute
        self.raw = raw
        super().__init__(f"Cannot decode attribute {attribute}={raw!r}: {reason}")
