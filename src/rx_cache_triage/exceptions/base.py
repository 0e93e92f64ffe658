"""Root of the rx-cache-triage exception hierarchy.

The CLI maps each branch to its own exit code: ConfigurationError to 81,
CollectionError to 82. Per-node failures (NodeCollectionError) never reach
the CLI; the fan-out records them and the run continues.
"""

from typing import Dict, Optional


class TriageError(Exception):
    """Base exception for all rx-cache-triage errors.

    `details` holds the structured context (node, command, config key...)
    that is appended to the message as `(key=value, ...)`.
    """

    def __init__(self, message: str, details: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if not self.details:
            return self.message
        context = ", ".join(f"{key}={value}" for key, value in self.details.items())
        return f"{self.message} ({context})"
