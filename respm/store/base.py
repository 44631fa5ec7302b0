"""
Shared machinery for client-side stores.

A store keeps an immutable state snapshot behind a lock. Every network
command runs through the same phases (IDLE -> LOADING -> READY | FAILED) and
takes a sequence token when it starts. Only the command holding the newest
token may change the loading and error flags; read results of older commands
are dropped, so a slow response can never overwrite a newer one.
"""

import dataclasses
import logging
import threading
from typing import Callable, Generic, List, Optional, TypeVar

from ..exceptions import RespmError
from ..status import LoadPhase

logger = logging.getLogger(__name__)

StateT = TypeVar("StateT")

Listener = Callable[[StateT], None]


class BaseStore(Generic[StateT]):
    """Base class for stores with loading/error state and request sequencing."""

    name = "store"

    def __init__(self, client):
        self._client = client
        self._lock = threading.Lock()
        self._seq = 0
        self._listeners: List[Listener] = []
        self._state: StateT = self._initial_state()

    def _initial_state(self) -> StateT:
        raise NotImplementedError

    @property
    def state(self) -> StateT:
        """Current snapshot. Snapshots and the projects in them are frozen."""
        with self._lock:
            return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call listener with every new snapshot; returns an unsubscribe function."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe():
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def close(self) -> None:
        """Drop listeners and state; responses still in flight are ignored."""
        with self._lock:
            self._seq += 1
            self._listeners.clear()
            self._state = self._initial_state()

    # ============================================================
    # State transitions
    # ============================================================

    def _set(self, update: Callable[[StateT], StateT]) -> StateT:
        """Apply a synchronous state change and notify listeners."""
        with self._lock:
            self._state = update(self._state)
            snapshot = self._state
            listeners = list(self._listeners)
        self._notify(listeners, snapshot)
        return snapshot

    def _begin(self) -> int:
        """Start a command: enter LOADING and return its sequence token."""
        with self._lock:
            self._seq += 1
            token = self._seq
            self._state = dataclasses.replace(
                self._state, is_loading=True, error=None, phase=LoadPhase.LOADING
            )
            snapshot = self._state
            listeners = list(self._listeners)
        self._notify(listeners, snapshot)
        return token

    def _succeed(
        self,
        token: int,
        update: Optional[Callable[[StateT], StateT]] = None,
        read: bool = False,
    ) -> bool:
        """Finish a command successfully.

        Args:
            token: Sequence token returned by ``_begin``
            update: Change to apply to the data part of the state
            read: True for fetches; a superseded fetch is discarded entirely

        Returns:
            Whether the result was applied
        """
        with self._lock:
            current = token == self._seq
            if not current and read:
                logger.debug("%s: discarding stale response #%d", self.name, token)
                return False
            state = update(self._state) if update else self._state
            if current:
                state = dataclasses.replace(
                    state, is_loading=False, error=None, phase=LoadPhase.READY
                )
            changed = state is not self._state
            self._state = state
            listeners = list(self._listeners)
        if changed:
            self._notify(listeners, state)
        return True

    def _fail(self, token: int, error: RespmError, context: str) -> None:
        """Finish a command with an error, recorded as a readable message."""
        message = f"{context}: {error}"
        logger.warning("%s: %s", self.name, message)
        with self._lock:
            if token != self._seq:
                return
            self._state = dataclasses.replace(
                self._state, is_loading=False, error=message, phase=LoadPhase.FAILED
            )
            snapshot = self._state
            listeners = list(self._listeners)
        self._notify(listeners, snapshot)

    def _notify(self, listeners: List[Listener], snapshot: StateT) -> None:
        for listener in listeners:
            try:
                listener(snapshot)
            except Exception:
                logger.exception("%s: listener failed", self.name)
