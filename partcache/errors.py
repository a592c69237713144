"""Exception taxonomy for the cache layer.

Every failure surfaces to the immediate caller; nothing in this package
retries or swallows these errors.
"""

from __future__ import annotations

from typing import Any


class CacheError(Exception):
    """Base class for every error raised by partcache."""


class UnsupportedOperation(CacheError):
    """Raised when a repository has no endpoint for the requested verb."""


class PreconditionFailed(CacheError):
    """Raised when a part is not in the lifecycle state an operation needs."""


class AttributeNotFound(CacheError, AttributeError):
    """Raised when a part has no stored value and no resolver for a name."""

    def __init__(self, part_name: str, attribute: str) -> None:
        self.part_name = part_name
        self.attribute = attribute
        super().__init__(f"{part_name} has no attribute {attribute!r}")


class EndpointBindingError(CacheError):
    """Raised when an endpoint placeholder cannot be resolved.

    This is a configuration error, not a data error.
    """

    def __init__(self, template: str, missing: list[str]) -> None:
        self.template = template
        self.missing = missing
        super().__init__(
            f"Unresolved placeholders {', '.join(missing)} in endpoint {template}"
        )


class RemoteRequestFailed(CacheError):
    """Raised when the remote API returns an error."""

    def __init__(self, status_code: int, message: str, body: Any = None) -> None:
        self.status_code = status_code
        self.message = message
        self.body = body
        super().__init__(f"API error {status_code}: {message}")
