"""Protocol definitions for component and collaborator interfaces.

This module defines the interface protocols used across the search hub. The
lifecycle protocols are implemented by the component base classes; the
collaborator protocols describe what the merge pipeline consumes from the
content management system (query execution, item lookup, visibility and
settings). They use typing.Protocol for structural subtyping, so any object
with the right methods can be plugged in.
"""

from abc import abstractmethod
from collections.abc import Callable, Iterable, Iterator
from typing import (
    Any,
    Protocol,
    TypeVar,
    runtime_checkable,
)

from .base import HealthStatus
from .hits import ContentItem, Hit
from .query import MergePolicy, SearchType
from .results import ResultSet

# Type variables for generic protocols
T = TypeVar("T")
ConfigT = TypeVar("ConfigT")
MetricsT = TypeVar("MetricsT", bound=dict[str, Any])


@runtime_checkable
class ServiceLifecycle(Protocol):
    """Core lifecycle protocol that all service components should implement."""

    @abstractmethod
    async def initialize(self) -> None:
        """Initialize the component, setting up required resources."""
        ...

    @abstractmethod
    async def cleanup(self) -> None:
        """Clean up resources used by the component."""
        ...

    @abstractmethod
    async def reset(self) -> None:
        """Reset the component to its initial state."""
        ...


@runtime_checkable
class HealthCheck(Protocol):
    """Health checking protocol for components."""

    @abstractmethod
    async def check_health(self) -> tuple[HealthStatus, str]:
        """
        Check the health status of the component.

        Returns:
            A tuple of (status, message) where status is one of
            HealthStatus.HEALTHY, HealthStatus.DEGRADED, or HealthStatus.UNHEALTHY
        """
        ...

    @abstractmethod
    def is_healthy(self) -> bool:
        """Check if the component is in a healthy state."""
        ...


@runtime_checkable
class ConfigurableComponent(Protocol[ConfigT]):
    """Protocol for components that can be configured."""

    @abstractmethod
    def configure(self, config: ConfigT) -> None: ...

    @abstractmethod
    def get_config(self) -> ConfigT: ...


@runtime_checkable
class MetricsProvider(Protocol[MetricsT]):
    """Protocol for components that provide metrics."""

    @abstractmethod
    def get_metrics(self) -> MetricsT: ...

    @abstractmethod
    def reset_metrics(self) -> None: ...


@runtime_checkable
class AsyncExecutable(Protocol[T]):
    """Protocol for components that can be executed asynchronously."""

    @abstractmethod
    async def execute(self, *args: Any, **kwargs: Any) -> T:
        """Execute the component's primary function."""
        ...

    @abstractmethod
    async def execute_with_timeout(
        self, timeout_ms: int, *args: Any, **kwargs: Any
    ) -> T:
        """
        Execute with a specific timeout.

        Args:
            timeout_ms: Timeout in milliseconds
            *args: Positional arguments
            **kwargs: Keyword arguments

        Returns:
            The result of execution

        Raises:
            TimeoutError: If execution exceeds the timeout
        """
        ...

    @abstractmethod
    def cancel(self) -> bool:
        """Cancel an ongoing execution."""
        ...


# Content management collaborators


@runtime_checkable
class QueryExecutor(Protocol):
    """Executes a text query against an index and yields raw hits lazily."""

    @abstractmethod
    def execute(
        self,
        query_text: str | None,
        root: str | None = None,
        search_type: SearchType = SearchType.OTHER,
        language: str | None = None,
    ) -> Iterator[Hit]:
        """
        Execute a query.

        An empty or missing query text yields no hits. When ``root`` is given
        and the search type is not ``content_editor``, only hits below the
        root are yielded. Errors in the query expression surface while the
        returned iterator is consumed.

        Args:
            query_text: Full-text query
            root: Optional identity of the item to scope the search to
            search_type: Result-type mode of the request
            language: Optional content language filter

        Returns:
            Lazy iterator of hits
        """
        ...


@runtime_checkable
class ItemRepository(Protocol):
    """Resolves items from the content repository."""

    @abstractmethod
    def get_item(self, item_id: str) -> ContentItem | None:
        """Return the item, or None if it does not exist or is access-denied."""
        ...


@runtime_checkable
class VisibilityFilter(Protocol):
    """Decides whether a hit must be withheld from the caller."""

    @abstractmethod
    def is_hidden_and_unauthorized(self, item_id: str) -> bool: ...


@runtime_checkable
class SettingsProvider(Protocol):
    """Supplies configured fallbacks for display formatting."""

    @abstractmethod
    def default_icon(self) -> str | None:
        """
        Return the configured default icon.

        Raises:
            ConfigurationError: If the setting is required but missing
        """
        ...


# Result processing interfaces


@runtime_checkable
class ResultMergerProtocol(
    ServiceLifecycle,
    ConfigurableComponent,
    Protocol,
):
    """Protocol for result mergers."""

    @abstractmethod
    def merge(
        self,
        hits: Iterable[Hit],
        policy: MergePolicy,
        is_hidden_and_unauthorized: Callable[[Hit], bool],
        query_text: str | None = None,
    ) -> ResultSet:
        """
        Merge a raw hit stream into a capped, deduplicated result set.

        Args:
            hits: Lazy sequence of raw hits
            policy: Dedup policy for this merge
            is_hidden_and_unauthorized: Predicate excluding hits from the caller
            query_text: Query text, reported with query errors

        Returns:
            The finalized result set
        """
        ...
