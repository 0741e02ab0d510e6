"""
One-shot loader for the external calendar picker script.

The picker script ships with the host editor and is only fetched when a
field needs it and the host has not loaded it already. Every field sharing
a loader gets the same single request; callbacks registered after the
script arrived run straight away.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Callable, List, Optional

import requests

from settings_store import get_setting


LOG = logging.getLogger("calendar_loader")

SCRIPT_PATH = "libs/zebra_datepicker.min.js"


@dataclass(frozen=True)
class LoadOutcome:
    success: bool
    reason: Optional[str] = None


@dataclass
class CalendarScriptLoader:
    base_path: Optional[str] = None
    timeout: Optional[int] = None
    title: str = "DateTime"
    session: requests.Session = field(default_factory=requests.Session)
    _executor: ThreadPoolExecutor = field(
        default_factory=lambda: ThreadPoolExecutor(max_workers=1), init=False
    )
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False)
    _future: Optional["Future[LoadOutcome]"] = field(default=None, init=False)
    _outcome: Optional[LoadOutcome] = field(default=None, init=False)
    _callbacks: List[Callable[[], None]] = field(default_factory=list, init=False)
    script: Optional[str] = field(default=None, init=False)

    def __post_init__(self) -> None:
        if self.base_path is None:
            self.base_path = get_setting("calendar_base_path")
        if self.timeout is None:
            self.timeout = int(get_setting("loader_timeout"))

    @property
    def script_url(self) -> str:
        return f"{self.base_path.rstrip('/')}/{SCRIPT_PATH}"

    @property
    def is_available(self) -> bool:
        return self._outcome is not None and self._outcome.success

    def load(self, callback: Optional[Callable[[], None]] = None) -> "Future[LoadOutcome]":
        """
        Fetch the script once and call `callback` when it is available.

        A failed load is logged and its callbacks are dropped; the field keeps
        working as a plain text input.
        """
        run_now = False
        with self._lock:
            if self._outcome is not None:
                run_now = self._outcome.success and callback is not None
            elif callback is not None:
                self._callbacks.append(callback)

            if self._future is None:
                self._future = self._executor.submit(self._fetch)
            future = self._future

        if run_now:
            callback()
        return future

    def _fetch(self) -> LoadOutcome:
        LOG.debug("Loading calendar script from %s", self.script_url)
        try:
            resp = self.session.get(self.script_url, timeout=self.timeout)
            resp.raise_for_status()
            self.script = resp.text
            outcome = LoadOutcome(success=True)
        except requests.RequestException as exc:
            LOG.warning("%s: error loading libraries. %s", self.title, exc)
            outcome = LoadOutcome(success=False, reason=str(exc))

        with self._lock:
            self._outcome = outcome
            callbacks, self._callbacks = self._callbacks, []

        if outcome.success:
            for callback in callbacks:
                callback()
        return outcome

    def shutdown(self) -> None:
        self._executor.shutdown(wait=False)
