from __future__ import annotations

import logging
from typing import Callable, Generic, TypeVar

logger = logging.getLogger(__name__)

StateT = TypeVar("StateT")
ActionT = TypeVar("ActionT")

Listener = Callable[[StateT], None]


class ObservableStore(Generic[StateT, ActionT]):
    """Single-writer state container.

    State only changes through ``_dispatch``, which folds one action into the
    current snapshot with the store's reducer and notifies subscribers. After
    ``close()`` dispatches are dropped, so responses that arrive late cannot
    touch a disposed store.
    """

    def __init__(self, initial: StateT, reducer: Callable[[StateT, ActionT], StateT]) -> None:
        self._state = initial
        self._reducer = reducer
        self._listeners: list[Listener[StateT]] = []
        self._closed = False

    @property
    def state(self) -> StateT:
        return self._state

    @property
    def closed(self) -> bool:
        return self._closed

    def subscribe(self, listener: Listener[StateT]) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def close(self) -> None:
        self._closed = True
        self._listeners.clear()

    def _dispatch(self, action: ActionT) -> None:
        if self._closed:
            logger.debug("store_dispatch_after_close", extra={"action": type(action).__name__})
            return
        self._state = self._reducer(self._state, action)
        for listener in list(self._listeners):
            try:
                listener(self._state)
            except Exception:
                logger.exception("store_listener_error", extra={"action": type(action).__name__})
