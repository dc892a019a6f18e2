"""Collection validators."""

from pkgcollection.validation.base import CollectionValidator, ValidationLevel, ValidationMessage
from pkgcollection.validation.rules import RuleBasedCollectionValidator

__all__ = [
    "CollectionValidator",
    "RuleBasedCollectionValidator",
    "ValidationLevel",
    "ValidationMessage",
]
