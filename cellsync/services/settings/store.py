"""
Settings Store

Owns the single live Configuration, syncs it with the agent and tells
observers about every accepted update.

Responsible for:
- Constructor-time defaults for missing sections
- load()/save() round-trips through RemoteConfigClient
- Wholesale, in-place replacement of the sections from the agent reply
- Synchronous fan-out to registered observers
"""

import asyncio
import contextlib
from pathlib import Path
from typing import Any, Awaitable, Callable, Mapping

from ...common.config import Configuration
from ...common.exceptions import ObserverError
from ...common.logging_setup import get_service_logger

from .client import RemoteConfigClient, RemoteResult
from .observers import Observer, ObserverRegistry
from .seed import load_seed
from .validator import SettingsValidator

logger = get_service_logger("settings.store")
notify_logger = logger.bind(operation="notify")


class SettingsStore:
    """
    Settings Store

    The Configuration instance is created once and only its sections
    are swapped afterwards, so references handed out earlier always see
    the latest values.

    Failed round-trips raise RemoteError and leave the Configuration and
    the observers untouched. Observer exceptions are logged and do not
    stop delivery to the next observers; with strict_observers=True an
    ObserverError is raised once every observer has been called.
    Round-trips run one at a time unless serialize=False.
    """

    def __init__(
        self,
        data: Mapping[str, Any] | None = None,
        client: RemoteConfigClient | None = None,
        registry: ObserverRegistry | None = None,
        validator: SettingsValidator | None = None,
        strict_observers: bool = False,
        serialize: bool = True,
    ):
        self._configuration = Configuration.from_dict(data)
        self.client = client or RemoteConfigClient()
        self.observers = registry if registry is not None else ObserverRegistry()
        self.validator = validator or SettingsValidator()
        self.strict_observers = strict_observers
        self.serialize = serialize
        self._lock: asyncio.Lock | None = None
        self._lock_loop: asyncio.AbstractEventLoop | None = None

    @classmethod
    def from_seed(cls, path: str | Path, **kwargs: Any) -> "SettingsStore":
        """Build a store whose initial sections come from a YAML seed file"""
        return cls(load_seed(path), **kwargs)

    @property
    def configuration(self) -> Configuration:
        return self._configuration

    async def close(self) -> None:
        await self.client.close()

    async def __aenter__(self) -> "SettingsStore":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def load(self) -> Configuration:
        """Fetch the agent settings and make them the current state"""
        return await self._sync("load", self.client.fetch_configuration)

    async def save(self) -> Configuration:
        """
        Send the current state and adopt the agent's reply.

        The request body is captured when save() is called, so edits made
        before the call are what gets sent even if a load is still running.
        """
        body = self._configuration.to_dict()
        return await self._sync("save", lambda: self.client.persist_configuration(body))

    def observe(self, callback: Observer) -> None:
        self.observers.add(callback)

    def stop_observing(self, callback: Observer) -> None:
        self.observers.remove(callback)

    def notify(self, state: Configuration) -> None:
        """Call every observer with `state`, in registration order"""
        failures: list[tuple[Observer, BaseException]] = []

        for observer in self.observers:
            try:
                observer(state)
            except Exception as e:
                notify_logger.error(f"Settings observer {observer!r} failed: {e}", exc_info=True)
                failures.append((observer, e))

        if failures and self.strict_observers:
            raise ObserverError(failures)

    def _guard(self):
        """Round-trip lock for the running loop; an asyncio.Lock cannot cross loops"""
        if not self.serialize:
            return contextlib.nullcontext()
        loop = asyncio.get_running_loop()
        if self._lock is None or self._lock_loop is not loop:
            self._lock = asyncio.Lock()
            self._lock_loop = loop
        return self._lock

    async def _sync(
        self,
        operation: str,
        request: Callable[[], Awaitable[RemoteResult]],
    ) -> Configuration:
        async with self._guard():
            result = await request()
            # RemoteError propagates to the caller unchanged
            body = result.unwrap()

            self._configuration.replace_from(body)
            logger.info(
                f"Settings {operation} accepted",
                extra={"operation": operation},
            )
            self.validator.validate(self._configuration)
            self.notify(self._configuration)

        return self._configuration
