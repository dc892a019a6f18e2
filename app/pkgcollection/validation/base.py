"""Abstract base class for collection validators."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum

from pkgcollection.models.collection import Collection


class ValidationLevel(Enum):
    """Severity of a validation message."""

    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class ValidationMessage:
    """A single validation finding.

    Attributes:
        message: Human-readable description.
        level: Severity.
        property: Document property the message refers to, if any.
    """

    message: str
    level: ValidationLevel
    property: str | None = field(default=None)

    @classmethod
    def error(cls, message: str, property: str | None = None) -> "ValidationMessage":
        """Create an error-level message."""
        return cls(message=message, level=ValidationLevel.ERROR, property=property)

    @classmethod
    def warning(cls, message: str, property: str | None = None) -> "ValidationMessage":
        """Create a warning-level message."""
        return cls(message=message, level=ValidationLevel.WARNING, property=property)

    def __str__(self) -> str:
        if self.property:
            return f"{self.property}: {self.message}"
        return self.message


class CollectionValidator(ABC):
    """Abstract base class for collection validators."""

    @abstractmethod
    def validate(self, collection: Collection) -> list[ValidationMessage]:
        """Validate a collection.

        Validation is exhaustive: every finding is reported, not only the
        first one.

        Args:
            collection: Collection to validate.

        Returns:
            All validation messages; empty if the collection is valid.
        """
