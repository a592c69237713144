"""Base repository: an ordered part cache synchronized with the remote API.

Repositories store parts keyed by their discriminator and own every CRUD
request for their part type. Each operation is a coroutine; failures are
raised to the awaiting caller and never retried here.
"""

from __future__ import annotations

from collections import OrderedDict
from typing import TYPE_CHECKING, Any, Callable, ClassVar, Iterator

from partcache.errors import PreconditionFailed, UnsupportedOperation
from partcache.http.endpoint import Endpoint, merge_vars
from partcache.logger import logger
from partcache.parts.part import Part
from partcache.utils.ids import normalize_key

if TYPE_CHECKING:
    from partcache.factory import Factory
    from partcache.http.client import ApiClient


# Repository class name -> class, used by parts to declare child repositories
REPOSITORIES: dict[str, type["AbstractRepository"]] = {}


def repository_class(name: str) -> type["AbstractRepository"]:
    """Look up a repository class by name."""
    try:
        return REPOSITORIES[name]
    except KeyError:
        raise UnsupportedOperation(f"Unknown repository {name!r}") from None


class AbstractRepository:
    """Keyed cache of one part type with CRUD synchronization.

    Subclasses declare ``part_class`` and the ``endpoints`` they support
    (any of ``all``, ``get``, ``create``, ``update``, ``delete``).
    """

    part_class: ClassVar[type[Part]] = Part
    endpoints: ClassVar[dict[str, str]] = {}

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        REPOSITORIES[cls.__name__] = cls

    def __init__(
        self,
        http: "ApiClient",
        factory: "Factory",
        vars: dict[str, Any] | None = None,
    ) -> None:
        self.http = http
        self.factory = factory
        self.vars: dict[str, Any] = dict(vars or {})
        self._items: OrderedDict[str, Part] = OrderedDict()
        self.validate_endpoints()

    @property
    def discriminator(self) -> str:
        return self.part_class.discriminator

    @property
    def name(self) -> str:
        return type(self).__name__

    def validate_endpoints(self) -> None:
        """Check every endpoint template can be bound.

        Raises:
            EndpointBindingError: If a placeholder is neither a repository
                var nor a repository attribute of the part class.
        """
        available = set(self.vars) | set(self.part_class.repository_keys())
        for template in self.endpoints.values():
            Endpoint.validate(template, available)

    def _endpoint(self, operation: str, part: Part | None = None) -> Endpoint:
        """Bind the endpoint for an operation.

        Raises:
            UnsupportedOperation: If the operation has no endpoint.
        """
        template = self.endpoints.get(operation)
        if template is None:
            raise UnsupportedOperation(
                f"{self.name} does not support the {operation!r} operation"
            )
        attributes = part.get_repository_attributes() if part is not None else {}
        return Endpoint(template).bind_assoc(merge_vars(attributes, self.vars))

    # -------------------------------------------------------------------------
    # Collection
    # -------------------------------------------------------------------------

    def push(self, *parts: Part) -> "AbstractRepository":
        """Cache parts, replacing any entry with the same discriminator."""
        for part in parts:
            self._items[normalize_key(part.key)] = part
        return self

    def pull(self, key: Any, default: Any = None) -> Any:
        """Remove and return the part cached under key."""
        return self._items.pop(normalize_key(key), default)

    def get(self, key: Any, default: Any = None) -> Any:
        return self._items.get(normalize_key(key), default)

    def __contains__(self, key: Any) -> bool:
        if isinstance(key, Part):
            key = key.key
        return normalize_key(key) in self._items

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Part]:
        return iter(list(self._items.values()))

    def keys(self) -> list[str]:
        return list(self._items.keys())

    def values(self) -> list[Part]:
        return list(self._items.values())

    def filter(self, predicate: Callable[[Part], bool]) -> list[Part]:
        return [part for part in self._items.values() if predicate(part)]

    def find(self, predicate: Callable[[Part], bool]) -> Part | None:
        for part in self._items.values():
            if predicate(part):
                return part
        return None

    def first(self) -> Part | None:
        return next(iter(self._items.values()), None)

    def clear(self) -> None:
        self._items.clear()

    def live(self) -> Iterator[Part]:
        """Iterate entries that still have a remote counterpart."""
        return (part for part in self.values() if part.created)

    def prune(self) -> int:
        """Evict stale entries left behind by delete.

        Returns:
            Number of entries removed.
        """
        stale = [key for key, part in self._items.items() if not part.created]
        for key in stale:
            del self._items[key]
        return len(stale)

    def to_list(self) -> list[dict[str, Any]]:
        return [part.to_dict() for part in self._items.values()]

    # -------------------------------------------------------------------------
    # CRUD
    # -------------------------------------------------------------------------

    async def freshen(self) -> "AbstractRepository":
        """Replace the whole cache with the listing from the API.

        Raises:
            UnsupportedOperation: If no ``all`` endpoint is configured.
        """
        endpoint = self._endpoint("all")
        response = await self.http.get(endpoint)

        self.clear()
        for value in response or []:
            part = self.factory.create(
                self.part_class, {**self.vars, **value}, created=True
            )
            self.push(part)

        logger.freshened(self.name, len(self))
        return self

    def create(self, attributes: dict[str, Any] | None = None, created: bool = False) -> Part:
        """Build a new part with the repository vars merged in."""
        return self.factory.create(
            self.part_class, merge_vars(attributes or {}, self.vars), created=created
        )

    async def save(self, part: Part) -> Part:
        """Create or update a part remotely and cache the result.

        Transient parts are POSTed to the ``create`` endpoint; persisted parts
        are PATCHed to the ``update`` endpoint.
        """
        if part.created:
            endpoint = self._endpoint("update", part)
            response = await self.http.patch(endpoint, part.get_updatable_attributes())
        else:
            endpoint = self._endpoint("create", part)
            response = await self.http.post(endpoint, part.get_creatable_attributes())

        part.fill(response or {})
        part.created = True
        part.deleted = False
        self.push(part)
        return part

    async def delete(self, part: Part | Any) -> Part:
        """Delete a part remotely.

        The part stays cached with ``created`` False; see ``prune``.

        Raises:
            PreconditionFailed: If the part has no remote counterpart.
            UnsupportedOperation: If no ``delete`` endpoint is configured.
        """
        if not isinstance(part, Part):
            part = self.get(part) or self.factory.create(
                self.part_class, {**self.vars, self.discriminator: part}, created=True
            )

        if not part.created:
            raise PreconditionFailed(
                f"Cannot delete {type(part).__name__} {part.key!r}: it was never created"
            )

        endpoint = self._endpoint("delete", part)
        await self.http.delete(endpoint)

        part.created = False
        part.deleted = True
        return part

    async def fresh(self, part: Part) -> Part:
        """Reload a persisted part's attributes in place.

        Raises:
            PreconditionFailed: If the part has no remote counterpart.
            UnsupportedOperation: If no ``get`` endpoint is configured.
        """
        if not part.created:
            raise PreconditionFailed(
                f"Cannot refresh {type(part).__name__} {part.key!r}: it was never created"
            )

        endpoint = self._endpoint("get", part)
        response = await self.http.get(endpoint)
        part.fill(response or {})
        return part

    async def fetch(self, key: Any, force_refresh: bool = False) -> Part:
        """Return the cached part, requesting it only when absent or forced.

        Raises:
            UnsupportedOperation: If a request is needed and no ``get``
                endpoint is configured.
        """
        if not force_refresh:
            cached = self.get(key)
            if cached is not None:
                return cached

        placeholder = self.factory.create(
            self.part_class, {**self.vars, self.discriminator: key}
        )
        endpoint = self._endpoint("get", placeholder)
        response = await self.http.get(endpoint)

        part = self.factory.create(
            self.part_class,
            {**self.vars, self.discriminator: key, **(response or {})},
            created=True,
        )
        self.push(part)
        return part

    def __repr__(self) -> str:
        return f"<{self.name} {len(self)} parts vars={self.vars!r}>"
