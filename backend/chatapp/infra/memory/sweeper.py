"""Background purge of expired registry entries."""

from __future__ import annotations

import logging
import threading
from datetime import timedelta

from chatapp.services._shared.ports import TokenRegistry

log = logging.getLogger(__name__)


class RegistrySweeper:
    """
    Daemon thread calling ``registry.purge_expired()`` at a fixed interval.

    :param registry: Registry to purge.
    :param interval: Delay between two sweeps.
    """

    def __init__(self, registry: TokenRegistry, *, interval: timedelta) -> None:
        if interval.total_seconds() <= 0:
            raise ValueError("Sweep interval must be positive.")
        self._registry = registry
        self._interval = interval
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def sweep_once(self) -> int:
        purged = self._registry.purge_expired()
        if purged:
            log.info(
                "Purged expired tokens",
                extra={"event": "registry.purged", "purged": purged},
            )
        return purged

    def start(self) -> None:
        if self.running:
            return
        self._stop.clear()
        self._thread = threading.Thread(
            target=self._run, name="token-registry-sweeper", daemon=True
        )
        self._thread.start()

    def stop(self, timeout: float | None = None) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None

    def _run(self) -> None:
        # ``wait`` returns True once stop() is called.
        while not self._stop.wait(self._interval.total_seconds()):
            try:
                self.sweep_once()
            except Exception:
                log.exception("Registry sweep failed", extra={"event": "registry.sweep_failed"})
