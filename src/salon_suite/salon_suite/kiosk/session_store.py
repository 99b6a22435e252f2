from __future__ import annotations

import threading
from contextlib import contextmanager
from datetime import datetime, timedelta
from typing import Iterator

from ..core.constants import DEFAULT_KIOSK_IDLE_SECONDS
from ..core.enums import KioskStage
from .model import KioskSession


class KioskSessionStore:
    """In-memory kiosk sessions keyed by device id (process local, not persisted).

    The store lock only guards the device maps. Each device has its own lock,
    held while its session is in use, so a slow lookup on one kiosk never
    blocks another.
    """

    def __init__(self, *, idle_seconds: int = DEFAULT_KIOSK_IDLE_SECONDS):
        self._idle = timedelta(seconds=int(idle_seconds))
        self._sessions: dict[str, KioskSession] = {}
        self._device_locks: dict[str, threading.Lock] = {}
        self._lock = threading.Lock()

    def _device_lock(self, device_id: str) -> threading.Lock:
        with self._lock:
            lock = self._device_locks.get(device_id)
            if lock is None:
                lock = self._device_locks[device_id] = threading.Lock()
            return lock

    @contextmanager
    def session(self, device_id: str, location_id: int, now: datetime) -> Iterator[KioskSession]:
        """Yield the device's session with that device locked.

        A session left untouched longer than the idle timeout, or one that was
        moved to another location, starts over at idle.
        """

        with self._device_lock(device_id):
            with self._lock:
                s = self._sessions.get(device_id)
                if s is None or s.location_id != location_id:
                    s = KioskSession(device_id=device_id, location_id=location_id, updated_at=now)
                    self._sessions[device_id] = s
            if s.stage != KioskStage.IDLE and s.updated_at and now - s.updated_at > self._idle:
                s.clear(now)
            yield s

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
