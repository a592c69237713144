"""Factory for parts and repositories.

The factory is the only place parts are constructed. It injects the shared
HTTP client, fills the raw data and wires every child repository a part
declares before handing the part out.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping, TypeVar

from partcache.parts.part import Part
from partcache.repository import repository_class

if TYPE_CHECKING:
    from partcache.cache import Cache
    from partcache.http.client import ApiClient
    from partcache.repository.base import AbstractRepository

P = TypeVar("P", bound=Part)
R = TypeVar("R", bound="AbstractRepository")


class Factory:
    """Builds fully wired parts and repositories."""

    def __init__(self, http: "ApiClient", cache: "Cache | None" = None) -> None:
        self.http = http
        # Non-owning handle to the cache root, used for back-reference lookups
        self.cache = cache

    def create(
        self,
        part_class: type[P],
        data: Mapping[str, Any] | None = None,
        created: bool = False,
    ) -> P:
        """Build a part from raw data.

        Args:
            part_class: The part type to build
            data: Raw attributes (from the API or the caller)
            created: True when the data came from a server response

        Returns:
            A part whose child repositories are ready to use

        Raises:
            PreconditionFailed: If created is True and the data carries no
                discriminator value.
        """
        part = part_class(self, self.http)
        part.fill(data or {})

        child_vars = part.get_child_vars()
        for name, class_name in part_class.repositories.items():
            part.attach_repository(
                name, self.repository(repository_class(class_name), child_vars)
            )

        part.created = created
        return part

    def repository(
        self, repository_cls: type[R], vars: Mapping[str, Any] | None = None
    ) -> R:
        """Build a repository sharing this factory's HTTP client."""
        return repository_cls(self.http, self, dict(vars or {}))
