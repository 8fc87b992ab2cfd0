from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Any, Callable

from .action import Action, BoundHandler
from .errors import DispatchError, StoreNotRegisteredError
from .handler_table import DEFAULT, HandlerBinding
from .identity import StoreRef, get_store_name
from .logging_setup import get_logger

if TYPE_CHECKING:
    from .dispatcher import Dispatcher

logger = get_logger("dispatchr.context")


class StoreInterface:
    """The part of a context a store instance is allowed to touch."""

    def __init__(self, context: "DispatcherContext") -> None:
        self._context = context

    def get_context(self) -> Any:
        return self._context.context

    def get_store(self, store: StoreRef) -> Any:
        return self._context.get_store(store)

    def wait_for(self, stores: StoreRef | Iterable[StoreRef], callback: Callable[[], Any] | None = None) -> None:
        self._context.wait_for(stores, callback)


class DispatcherContext:
    """
    Per-request dispatch state bound to a Dispatcher.

    Store instances are created lazily on first use and cached for the life
    of the context. ``context`` is an opaque value handed back to stores via
    ``StoreInterface.get_context``.
    """

    def __init__(self, dispatcher: "Dispatcher", context: Any = None) -> None:
        self.dispatcher = dispatcher
        self.context = context
        self.store_instances: dict[str, Any] = {}
        self.current_action: Action | None = None
        self.dispatcher_interface = StoreInterface(self)

    def get_store(self, store: StoreRef) -> Any:
        name = get_store_name(store)
        if not name or name not in self.dispatcher.stores:
            raise StoreNotRegisteredError(name)
        if name not in self.store_instances:
            store_class = self.dispatcher.stores[name]
            self.store_instances[name] = store_class(self.dispatcher_interface)
        return self.store_instances[name]

    def dispatch(self, action_name: str, payload: Any = None) -> None:
        if not action_name:
            raise DispatchError("Action name is required to dispatch")
        if self.current_action is not None:
            raise DispatchError(
                f"Cannot call dispatch while another dispatch is executing. "
                f"Attempted to execute `{action_name}` but `{self.current_action.name}` is already executing.",
                {"action": action_name, "current": self.current_action.name},
            )

        handlers = self.dispatcher.handlers
        bindings = handlers[action_name] if action_name in handlers else handlers[DEFAULT]
        logger.debug("Dispatching %s to %d handlers", action_name, len(bindings))

        bound: dict[str, BoundHandler] = {}
        for binding in bindings:
            if binding.name not in bound:
                bound[binding.name] = self._bind(binding)

        action = Action(action_name, payload)
        self.current_action = action
        try:
            action.execute(bound)
        finally:
            self.current_action = None

    def wait_for(self, stores: StoreRef | Iterable[StoreRef], callback: Callable[[], Any] | None = None) -> None:
        if self.current_action is None:
            raise DispatchError("wait_for called even though there is no action dispatching")
        self.current_action.wait_for(stores, callback)

    def dehydrate(self) -> dict[str, Any]:
        stores: dict[str, Any] = {}
        for name, instance in self.store_instances.items():
            dehydrate = getattr(instance, "dehydrate", None)
            if callable(dehydrate):
                stores[name] = dehydrate()
        return {"stores": stores}

    def rehydrate(self, state: dict[str, Any]) -> None:
        for name, store_state in (state.get("stores") or {}).items():
            instance = self.get_store(name)
            rehydrate = getattr(instance, "rehydrate", None)
            if callable(rehydrate):
                rehydrate(store_state)

    def _bind(self, binding: HandlerBinding) -> BoundHandler:
        store = self.get_store(binding.name)
        handler = binding.handler
        if binding.is_method_name:
            method = getattr(store, handler, None)
            if not callable(method):
                raise DispatchError(
                    f"Store `{binding.name}` does not have a method `{handler}`",
                    {"store": binding.name, "handler": handler},
                )
            return method
        return lambda payload: handler(store, payload)
