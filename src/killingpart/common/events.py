import threading
from collections import defaultdict
from collections.abc import Callable
from enum import Enum

import structlog

from killingpart.logger import LogLike


class AppEvent(Enum):
    SESSION_EXPIRED = 'session_expired'
    DIARY_CHANGED = 'diary_changed'


Listener = Callable[[AppEvent], None]


class EventBus:
    """Explicit subscription point for client-level events.

    The UI layer subscribes to ``SESSION_EXPIRED`` to go back to login, and
    to ``DIARY_CHANGED`` to reload feeds.
    """

    def __init__(self, logger: LogLike | None = None):
        self._listeners: dict[AppEvent, list[Listener]] = defaultdict(list)
        self._lock = threading.Lock()
        self._logger = logger or structlog.get_logger('events')

    def subscribe(self, event: AppEvent, listener: Listener) -> Callable[[], None]:
        with self._lock:
            self._listeners[event].append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners[event]:
                    self._listeners[event].remove(listener)

        return unsubscribe

    def emit(self, event: AppEvent) -> None:
        with self._lock:
            listeners = list(self._listeners[event])

        for listener in listeners:
            try:
                listener(event)
            except Exception:
                self._logger.exception("event_listener_failed", app_event=event.value)
