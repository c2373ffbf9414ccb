"""Exceptions used by dddkit collaborators and domain code."""


class DddKitError(RuntimeError):
    """Base class for dddkit exceptions."""


class DomainError(DddKitError):
    """Raised by domain code when an operation breaks the model's rules."""


class BusinessRuleViolation(DomainError):
    """Raised when a named business rule rejects an operation."""

    def __init__(self, rule: str, message: str | None = None) -> None:
        super().__init__(message or f"Business rule '{rule}' violated")
        self.rule = rule


class EntityNotFound(DomainError):
    """Raised when an entity cannot be located by its identifier."""

    def __init__(self, entity: str, entity_id: object) -> None:
        super().__init__(f"{entity} {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class InvalidValue(DomainError):
    """Raised when a value object is built from unusable input."""


class ProcessorAlreadyRegistered(DddKitError):
    """Raised when a queue already has a processor for a job name."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Processor for job '{name}' already registered")
        self.name = name
