"""Base class for cached remote entities ("parts").

A part is attribute data plus derivation logic. It performs no I/O itself;
repositories own every request, and the factory wires the dependencies a
part's child repositories need.

Subclasses declare:
- ``fillable``: attribute names kept in the persisted view
- ``discriminator``: the attribute used as the repository key
- ``repository_attributes``: endpoint placeholder -> attribute name
- ``immutable``: attributes never sent on update
- ``repositories``: child repository name -> repository class name
- computed attributes, registered with ``@computed("name")``
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, ClassVar, Mapping

from partcache.errors import AttributeNotFound, PreconditionFailed
from partcache.utils.json import compact_json

if TYPE_CHECKING:
    from partcache.factory import Factory
    from partcache.http.client import ApiClient
    from partcache.repository.base import AbstractRepository


Resolver = Callable[["Part"], Any]


def computed(name: str) -> Callable[[Resolver], Resolver]:
    """Register a method as the resolver for a computed attribute."""

    def decorator(func: Resolver) -> Resolver:
        func.__computed_attribute__ = name  # type: ignore[attr-defined]
        return func

    return decorator


class Part:
    """A locally cached representation of a remote object."""

    fillable: ClassVar[tuple[str, ...]] = ()
    discriminator: ClassVar[str] = "id"
    repository_attributes: ClassVar[dict[str, str]] = {}
    immutable: ClassVar[tuple[str, ...]] = ()
    updatable_computed: ClassVar[tuple[str, ...]] = ()
    repositories: ClassVar[dict[str, str]] = {}

    _resolvers: ClassVar[dict[str, Resolver]] = {}

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        resolvers: dict[str, Resolver] = {}
        for klass in reversed(cls.__mro__):
            for value in vars(klass).values():
                name = getattr(value, "__computed_attribute__", None)
                if name:
                    resolvers[name] = value
        cls._resolvers = resolvers

    def __init__(self, factory: "Factory", http: "ApiClient") -> None:
        object.__setattr__(self, "factory", factory)
        object.__setattr__(self, "http", http)
        object.__setattr__(self, "attributes", {})
        object.__setattr__(self, "extra", {})
        object.__setattr__(self, "_repositories", {})
        object.__setattr__(self, "_created", False)
        object.__setattr__(self, "deleted", False)

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    @property
    def created(self) -> bool:
        """Whether the part has a persisted remote counterpart."""
        return self._created

    @created.setter
    def created(self, value: bool) -> None:
        if value and self.attributes.get(self.discriminator) is None:
            raise PreconditionFailed(
                f"{type(self).__name__} cannot be marked created without "
                f"a {self.discriminator!r} value"
            )
        object.__setattr__(self, "_created", bool(value))

    @property
    def key(self) -> Any:
        """The discriminator value."""
        return self.attributes.get(self.discriminator)

    # -------------------------------------------------------------------------
    # Attributes
    # -------------------------------------------------------------------------

    def fill(self, data: Mapping[str, Any]) -> "Part":
        """Merge raw fields into the part.

        Whitelisted keys land in ``attributes``; everything else is kept in
        ``extra`` for computed attributes but is never sent back.
        """
        for key, value in data.items():
            if key in self.fillable:
                self.attributes[key] = value
            else:
                self.extra[key] = value

        if self._repositories:
            child_vars = self.get_child_vars()
            for repository in self._repositories.values():
                repository.vars.update(
                    {k: v for k, v in child_vars.items() if v is not None}
                )
        return self

    def get(self, name: str) -> Any:
        """Return a stored, child repository or computed attribute.

        Raises:
            AttributeNotFound: If nothing is stored or registered for name.
        """
        if name in self.attributes:
            return self.attributes[name]
        if name in self._repositories:
            return self._repositories[name]
        resolver = self._resolvers.get(name)
        if resolver is not None:
            return resolver(self)
        if name in self.extra:
            return self.extra[name]
        raise AttributeNotFound(type(self).__name__, name)

    def set(self, name: str, value: Any) -> None:
        if name in self.fillable:
            self.attributes[name] = value
        else:
            self.extra[name] = value

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        return self.get(name)

    def __setattr__(self, name: str, value: Any) -> None:
        if name in self.fillable:
            self.attributes[name] = value
        else:
            object.__setattr__(self, name, value)

    def __getitem__(self, name: str) -> Any:
        return self.get(name)

    # -------------------------------------------------------------------------
    # Request payloads & endpoint bindings
    # -------------------------------------------------------------------------

    def get_creatable_attributes(self) -> dict[str, Any]:
        """Attributes sent when the part is created remotely."""
        return compact_json(
            {k: v for k, v in self.attributes.items() if k != self.discriminator}
        )

    def get_updatable_attributes(self) -> dict[str, Any]:
        """Attributes sent when the part is updated remotely."""
        attributes = {
            k: v
            for k, v in self.attributes.items()
            if k != self.discriminator and k not in self.immutable
        }
        for name in self.updatable_computed:
            attributes[name] = self.get(name)
        return attributes

    @classmethod
    def repository_keys(cls) -> tuple[str, ...]:
        """Placeholder names this part can bind."""
        return tuple(cls.repository_attributes or {cls.discriminator: cls.discriminator})

    def get_repository_attributes(self) -> dict[str, Any]:
        """Placeholder values binding this part into its endpoints."""
        mapping = self.repository_attributes or {self.discriminator: self.discriminator}
        return {
            placeholder: self.attributes.get(attribute)
            for placeholder, attribute in mapping.items()
        }

    def get_child_vars(self) -> dict[str, Any]:
        """Vars handed to the repositories this part owns."""
        return self.get_repository_attributes()

    # -------------------------------------------------------------------------
    # Child repositories
    # -------------------------------------------------------------------------

    def attach_repository(self, name: str, repository: "AbstractRepository") -> None:
        self._repositories[name] = repository

    def to_dict(self) -> dict[str, Any]:
        return dict(self.attributes)

    def __repr__(self) -> str:
        return (
            f"<{type(self).__name__} {self.discriminator}={self.key!r} "
            f"created={self.created} deleted={self.deleted}>"
        )
