"""Observable container for the coordinator's state."""

import logging
from typing import Callable

from formulary.models.state import FormState

logger = logging.getLogger(__name__)

Listener = Callable[[FormState], None]


class StateStore:
    """Holds the current FormState snapshot and notifies subscribers on change.

    Snapshots are frozen and replaced on every update, so a listener can keep
    the one it was handed. Listeners run synchronously inside update().
    """

    def __init__(self, initial: FormState | None = None):
        self._state = initial or FormState()
        self._listeners: list[Listener] = []

    @property
    def snapshot(self) -> FormState:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns a function that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def update(self, **changes) -> FormState:
        self._state = FormState(**{**dict(self._state), **changes})
        for listener in list(self._listeners):
            try:
                listener(self._state)
            except Exception:
                logger.exception("State listener %r failed", listener)
        return self._state
