"""Error taxonomy for URL map reconciliation."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable


class UrlMapError(Exception):
    """Base class for all errors raised while reconciling URL maps."""


class UrlMapNotFoundError(UrlMapError, LookupError):
    """Raised by providers when the requested URL map does not exist."""

    def __init__(self, name: str) -> None:
        super().__init__(f"URL map {name} not found")
        self.name = name


class ProviderError(UrlMapError):
    """Raised by providers for any failure other than a missing URL map."""


class RemoteError(UrlMapError):
    """A provider call failed; carries the operation and resource it failed on."""

    def __init__(self, operation: str, resource_name: str, cause: BaseException) -> None:
        super().__init__(f"error in {operation} of URL map {resource_name}: {cause}")
        self.operation = operation
        self.resource_name = resource_name


class DesiredStateError(UrlMapError):
    """The desired URL map could not be computed from the ingress."""


class BackendNotFoundError(DesiredStateError, LookupError):
    """No backend service exists for a service referenced by the ingress."""

    def __init__(self, service_name: str) -> None:
        super().__init__(
            f"no backend service found for service: {service_name}, "
            "must have been an error in ensuring backend services"
        )
        self.service_name = service_name


class BackendResolutionError(DesiredStateError):
    """Aggregate of every backend reference that failed to resolve."""

    def __init__(self, errors: Iterable[DesiredStateError]) -> None:
        self.errors = tuple(errors)
        details = "; ".join(str(error) for error in self.errors)
        super().__init__(f"{len(self.errors)} ingress backend(s) could not be resolved: {details}")


class MissingDefaultBackendError(DesiredStateError):
    """The ingress has no usable default backend, so no URL map can be built."""

    def __init__(self, message: str, *, errors: Iterable[DesiredStateError] = ()) -> None:
        super().__init__(message)
        self.errors = tuple(errors)


class ConflictWithoutForceError(UrlMapError):
    """An existing URL map differs from the desired one and overwrite was not allowed."""

    def __init__(self, name: str) -> None:
        super().__init__(f"will not overwrite differing URL map {name} without force")
        self.name = name


class StatusDecodeError(UrlMapError, ValueError):
    """A URL map description could not be parsed into a load balancer status."""
