"""Exception hierarchy for rx-cache-triage."""

from .base import TriageError
from .collection import CollectionError, NodeCollectionError
from .config import ConfigurationError, InvalidConfigError

__all__ = [
    "TriageError",
    "ConfigurationError",
    "InvalidConfigError",
    "CollectionError",
    "NodeCollectionError",
]
