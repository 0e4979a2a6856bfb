#!/usr/bin/env python3
"""
Latest-wins status mailbox.

The mailbox is not a history queue: consumers only ever care about the most
recent snapshot. Publishing into a full mailbox evicts the stale entry
instead of blocking the processor.

A capacity of 0 behaves like an unbuffered channel: an offer only succeeds
while a reader is blocked in get().
"""

import queue
import threading
from collections import deque
from typing import Any, Callable, Dict, Optional


class StatusMailbox:
    """Bounded, non-blocking-offer channel of status snapshots."""

    def __init__(self, capacity: int = 1):
        if capacity < 0:
            raise ValueError("capacity must be >= 0")
        self.capacity = capacity
        self._items = deque()
        self._waiting_readers = 0
        self._cond = threading.Condition()

    def offer(self, item: Any) -> bool:
        """Try to place item without blocking. Returns False when full."""
        with self._cond:
            limit = self.capacity if self.capacity > 0 else self._waiting_readers
            if len(self._items) >= limit:
                return False
            self._items.append(item)
            self._cond.notify()
            return True

    def get_nowait(self) -> Any:
        """Take the pending item. Raises queue.Empty if there is none."""
        with self._cond:
            if not self._items:
                raise queue.Empty
            return self._items.popleft()

    def get(self, timeout: Optional[float] = None) -> Any:
        """Wait for an item. Raises queue.Empty on timeout."""
        with self._cond:
            self._waiting_readers += 1
            try:
                if not self._cond.wait_for(lambda: self._items, timeout):
                    raise queue.Empty
                return self._items.popleft()
            finally:
                self._waiting_readers -= 1

    def qsize(self) -> int:
        with self._cond:
            return len(self._items)


class StatusStream:
    """Receive-only view handed to consumers.

    The view resolves its mailbox on every call, so a stream obtained from the
    service keeps following the current run across stop/start cycles.
    """

    def __init__(self, resolve: Callable[[], StatusMailbox]):
        self._resolve = resolve

    @property
    def capacity(self) -> int:
        return self._resolve().capacity

    def get(self, timeout: Optional[float] = None) -> Dict[str, str]:
        return self._resolve().get(timeout)

    def get_nowait(self) -> Dict[str, str]:
        return self._resolve().get_nowait()


def publish(mailbox: StatusMailbox, snapshot: Dict[str, str],
            cancel: threading.Event, log=None) -> bool:
    """Publish snapshot with latest-wins eviction.

    Returns:
        True if the snapshot was placed, False if it was dropped or the run
        was cancelled.
    """
    while not cancel.is_set():
        if mailbox.offer(snapshot):
            return True

        if mailbox.capacity == 0:
            # Nothing buffered to evict and no reader waiting
            if log is not None:
                log.warning("Status mailbox unbuffered and no reader, dropping snapshot")
            return False

        try:
            mailbox.get_nowait()
            if log is not None:
                log.debug("Evicted stale status snapshot")
        except queue.Empty:
            # A reader freed the slot in the meantime
            continue
    return False
