"""Component base classes.

The result merger is assembled from these: a named component with an
initialize/cleanup lifecycle and a health check, a typed configuration that
can be swapped at runtime, and async execution with timeout and cancellation.
"""

import asyncio
import time
from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

from .base import HealthStatus
from .interfaces import HealthCheck, ServiceLifecycle
from .results import ResultSet

ConfigT = TypeVar("ConfigT")
ResultT = TypeVar("ResultT")


class Component(ABC, ServiceLifecycle, HealthCheck):
    """Named component with lifecycle and health state."""

    def __init__(self, name: str):
        self.name = name
        self.initialized = False
        self.health_message = "Not initialized"
        self.last_health_check = 0.0

    async def initialize(self) -> None:
        self.initialized = True
        self.health_message = "Initialized"

    async def cleanup(self) -> None:
        self.initialized = False
        self.health_message = "Cleaned up"

    async def reset(self) -> None:
        """Clean up, then initialize again."""
        await self.cleanup()
        await self.initialize()

    async def check_health(self) -> tuple[HealthStatus, str]:
        self.last_health_check = time.time()
        if not self.initialized:
            return HealthStatus.UNHEALTHY, f"{self.name} not initialized"
        return HealthStatus.HEALTHY, self.health_message

    def is_healthy(self) -> bool:
        return self.initialized


class ConfigurableComponentBase(Component, Generic[ConfigT]):
    """Component holding a configuration object.

    Subclasses must read settings from ``self.config`` at use time so that
    ``configure`` takes effect immediately.
    """

    def __init__(self, name: str, config: ConfigT | None = None, **kwargs: Any):
        super().__init__(name, **kwargs)
        self.config = config

    def configure(self, config: ConfigT) -> None:
        self.config = config

    def get_config(self) -> ConfigT:
        """Return the configuration, raising ValueError if none was set."""
        if self.config is None:
            raise ValueError(f"Component {self.name} has not been configured")
        return self.config


class AsyncExecutableBase(Component, Generic[ResultT]):
    """Component whose main operation can be awaited, bounded and cancelled."""

    def __init__(self, name: str, **kwargs: Any):
        super().__init__(name, **kwargs)
        self.running_task: asyncio.Task | None = None

    async def execute(self, *args: Any, **kwargs: Any) -> ResultT:
        """Run the operation, initializing the component first if needed."""
        if not self.initialized:
            await self.initialize()

        self.running_task = asyncio.current_task()
        try:
            return await self._do_execute(*args, **kwargs)
        finally:
            self.running_task = None

    async def execute_with_timeout(
        self, timeout_ms: int, *args: Any, **kwargs: Any
    ) -> ResultT:
        """
        Run the operation with a deadline.

        Raises:
            TimeoutError: If the operation does not finish within ``timeout_ms``
        """
        async with asyncio.timeout(timeout_ms / 1000.0):
            return await self.execute(*args, **kwargs)

    def cancel(self) -> bool:
        """Cancel the running operation, if any."""
        if self.running_task and not self.running_task.done():
            self.running_task.cancel()
            return True
        return False

    @abstractmethod
    async def _do_execute(self, *args: Any, **kwargs: Any) -> ResultT:
        """
        Perform the operation.

        Blocking work must leave the event loop (for example through
        ``asyncio.to_thread``) so that timeouts and cancellation can fire.
        """
        ...


class ResultMergerBase(
    ConfigurableComponentBase[ConfigT],
    AsyncExecutableBase[ResultSet],
    Generic[ConfigT],
):
    """Base class for result mergers."""
