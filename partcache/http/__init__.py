"""HTTP collaborator and endpoint templates."""

from partcache.http.client import ApiClient, RateLimit
from partcache.http.endpoint import Endpoint, merge_vars

__all__ = ["ApiClient", "Endpoint", "RateLimit", "merge_vars"]
