"""Change notification for in-memory stores."""
import threading
from typing import Any, Callable, Optional

from storefront.logging import get_logger

logger = get_logger(__name__)

Listener = Callable[[Any], None]


class ChangeNotifier:
    """
    Publish/subscribe mixin.

    Stores call _notify(state, version) after each mutation that changed
    something; every subscriber receives the new state snapshot synchronously.

    Versions come from _next_version(), taken under the store's own lock.
    Dispatch is serialized, and a snapshot older than one already delivered
    is dropped, so when two threads mutate at once listeners always end on
    the newest state.
    """

    def __init__(self) -> None:
        self._listeners: list[Listener] = []
        self._dispatch_lock = threading.RLock()
        self._version = 0
        self._delivered_version = 0

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener. Returns a function that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def _next_version(self) -> int:
        # Caller holds the store lock
        self._version += 1
        return self._version

    def _notify(self, state: Any, version: Optional[int] = None) -> None:
        with self._dispatch_lock:
            if version is not None:
                if version < self._delivered_version:
                    logger.debug("Dropping stale snapshot v%d (delivered v%d)", version, self._delivered_version)
                    return
                self._delivered_version = version
            # Copy so a listener may unsubscribe itself mid-dispatch
            for listener in list(self._listeners):
                try:
                    listener(state)
                except Exception:
                    logger.exception("Store listener %r failed", listener)
