# rentwise/adapters/realtime.py
from __future__ import annotations

import logging
from typing import Callable

log = logging.getLogger(__name__)

Listener = Callable[[bool], None]


class ConnectionStatus:
    """
    Live-updates connection flag. The socket adapter flips it; the UI only reads
    `connected` (or subscribes). The socket protocol itself lives elsewhere.
    """

    def __init__(self) -> None:
        self._connected = False
        self._listeners: list[Listener] = []

    @property
    def connected(self) -> bool:
        return self._connected

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def mark(self, connected: bool) -> None:
        if connected == self._connected:
            return
        self._connected = connected
        log.info("realtime connection %s", "up" if connected else "down")
        for listener in list(self._listeners):
            listener(connected)
