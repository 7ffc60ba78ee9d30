from __future__ import annotations

import logging
import os
import threading
from typing import Callable

LOGGER = logging.getLogger(__name__)

COLOR_SCHEME_ENV = "LIFEGRID_COLOR_SCHEME"

ThemeListener = Callable[[bool], None]


def env_prefers_dark() -> bool:
    return os.environ.get(COLOR_SCHEME_ENV, "").strip().lower() == "dark"


class SystemThemeSignal:
    """Process-wide "prefers dark" value with an explicit sample/re-sample lifecycle.

    The value is sampled once on construction. Hosts call ``refresh`` when the
    platform reports a colour-scheme change; listeners fire only when the sampled
    value actually flips.
    """

    def __init__(self, provider: Callable[[], bool] = env_prefers_dark) -> None:
        self._provider = provider
        self._lock = threading.Lock()
        self._listeners: list[ThemeListener] = []
        self._prefers_dark = bool(provider())

    @property
    def prefers_dark(self) -> bool:
        with self._lock:
            return self._prefers_dark

    def refresh(self) -> bool:
        """Re-sample the provider. Returns True when the value changed."""

        value = bool(self._provider())
        with self._lock:
            changed = value != self._prefers_dark
            self._prefers_dark = value
            listeners = list(self._listeners)
        if not changed:
            return False
        for listener in listeners:
            try:
                listener(value)
            except Exception as exc:  # noqa: BLE001
                LOGGER.warning("theme listener %r failed: %s", listener, exc)
        return True

    def subscribe(self, listener: ThemeListener) -> Callable[[], None]:
        with self._lock:
            self._listeners.append(listener)

        def _unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return _unsubscribe
