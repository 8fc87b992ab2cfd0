from __future__ import annotations

from collections.abc import Iterable
from typing import Any, Callable

from .errors import DispatchError
from .identity import StoreRef, get_store_name

# Store handler already bound to its store instance: called with the payload.
BoundHandler = Callable[[Any], Any]


class Action:
    """One in-flight dispatch of ``name`` with ``payload``."""

    def __init__(self, name: str, payload: Any = None) -> None:
        self.name = name
        self.payload = payload
        self._handlers: dict[str, BoundHandler] | None = None
        self._called: set[str] = set()

    @property
    def is_executing(self) -> bool:
        return self._handlers is not None

    def execute(self, handlers: dict[str, BoundHandler]) -> None:
        """Run every store handler once, in insertion order."""
        self._handlers = handlers
        self._called = set()
        try:
            for store_name in list(handlers):
                self._call_handler(store_name)
        finally:
            self._handlers = None

    def wait_for(self, stores: StoreRef | Iterable[StoreRef], callback: Callable[[], Any] | None = None) -> None:
        if self._handlers is None:
            raise DispatchError(
                "wait_for called even though there is no action dispatching",
                {"action": self.name},
            )
        if isinstance(stores, str) or not isinstance(stores, Iterable):
            stores = [stores]
        for store in stores:
            store_name = get_store_name(store)
            if store_name and store_name in self._handlers:
                self._call_handler(store_name)
        if callback is not None:
            callback()

    def _call_handler(self, store_name: str) -> None:
        if self._handlers is None:
            raise DispatchError("No action is dispatching", {"action": self.name, "store": store_name})
        # a store that is running or done is never re-entered
        if store_name in self._called:
            return
        self._called.add(store_name)
        self._handlers[store_name](self.payload)

    def __repr__(self) -> str:
        return f"Action(name={self.name!r})"
