"""Backend usability flags and the background checker that maintains them."""

import logging
import threading
from collections.abc import Callable

from app.core.config import settings

logger = logging.getLogger(__name__)


class BackendHealth:
    """Thread-safe "is cache/search usable" flags.

    Synchronizers only read these; the HealthChecker (or a test) writes them.
    """

    def __init__(self, cache_usable: bool = False, search_usable: bool = False):
        self._lock = threading.Lock()
        self._cache_usable = cache_usable
        self._search_usable = search_usable

    def is_cache_usable(self) -> bool:
        with self._lock:
            return self._cache_usable

    def is_search_usable(self) -> bool:
        with self._lock:
            return self._search_usable

    def set_cache_usable(self, usable: bool) -> bool:
        """Set the flag. Returns True if the value changed."""
        with self._lock:
            changed = self._cache_usable != usable
            self._cache_usable = usable
        return changed

    def set_search_usable(self, usable: bool) -> bool:
        with self._lock:
            changed = self._search_usable != usable
            self._search_usable = usable
        return changed

    def snapshot(self) -> dict[str, bool]:
        with self._lock:
            return {"cache": self._cache_usable, "search": self._search_usable}


class HealthChecker:
    """Daemon thread polling the backends every `interval` seconds."""

    def __init__(
        self,
        health: BackendHealth,
        cache_probe: Callable[[], bool],
        search_probe: Callable[[], bool],
        interval: float | None = None,
    ):
        self.health = health
        self.cache_probe = cache_probe
        self.search_probe = search_probe
        self.interval = interval if interval is not None else settings.HEALTH_CHECK_INTERVAL_SECONDS
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    @staticmethod
    def _probe(probe: Callable[[], bool], backend: str) -> bool:
        try:
            return bool(probe())
        except Exception as e:
            logger.warning(
                "backend_probe_failed",
                extra={"event": "backend_probe_failed", "backend": backend, "error": str(e)},
            )
            return False

    def check_once(self) -> dict[str, bool]:
        cache_ok = self._probe(self.cache_probe, "cache")
        search_ok = self._probe(self.search_probe, "search")
        if self.health.set_cache_usable(cache_ok):
            logger.info(
                "backend_health_changed",
                extra={"event": "backend_health_changed", "backend": "cache", "usable": cache_ok},
            )
        if self.health.set_search_usable(search_ok):
            logger.info(
                "backend_health_changed",
                extra={"event": "backend_health_changed", "backend": "search", "usable": search_ok},
            )
        return self.health.snapshot()

    def _run(self) -> None:
        while not self._stop.is_set():
            self.check_once()
            self._stop.wait(self.interval)

    def start(self) -> None:
        if self._thread is not None and self._thread.is_alive():
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="backend-health-checker", daemon=True)
        self._thread.start()

    def stop(self, timeout: float = 5.0) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout=timeout)
            self._thread = None


_backend_health: BackendHealth | None = None


def get_backend_health() -> BackendHealth:
    """Process-wide flags, seeded from which backends are enabled."""
    global _backend_health
    if _backend_health is None:
        _backend_health = BackendHealth(
            cache_usable=settings.REDIS_ENABLED,
            search_usable=settings.ELASTICSEARCH_ENABLED,
        )
    return _backend_health
