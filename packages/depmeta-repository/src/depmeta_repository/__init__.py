"""depmeta-repository: Artifact repository clients for depmeta.

This package implements the depmeta-core RepositoryClient protocol with:
- A filesystem client for Maven-style local repositories
- An HTTP client with retry policies and exponential backoff
- Structured logging via structlog
- OpenTelemetry span tracing

Example:
    >>> from depmeta_repository import create_repository
    >>> repository = create_repository("https://repo.example.com/releases")
    >>> repository.list_versions(Coordinate(group="com.acme", name="lib"))
    ['1.0.0', '1.1.0']
"""

from __future__ import annotations

__version__ = "0.1.0"

__all__ = [
    # Factory functions
    "create_repository",
    "create_fetcher",
    # Clients
    "LocalRepository",
    "RemoteRepository",
    # Configuration models
    "RemoteRepositoryConfig",
    "RetryConfig",
    # Observability
    "configure_logging",
]


def __getattr__(name: str) -> object:
    """Lazy import of public API members."""
    if name in ("create_repository", "create_fetcher"):
        from depmeta_repository import factory as factory_module

        return getattr(factory_module, name)
    if name == "LocalRepository":
        from depmeta_repository.local import LocalRepository

        return LocalRepository
    if name == "RemoteRepository":
        from depmeta_repository.remote import RemoteRepository

        return RemoteRepository
    if name in ("RemoteRepositoryConfig", "RetryConfig"):
        from depmeta_repository import config as config_module

        return getattr(config_module, name)
    if name == "configure_logging":
        from depmeta_repository.observability import configure_logging

        return configure_logging

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
