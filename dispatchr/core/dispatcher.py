from __future__ import annotations

import inspect
from dataclasses import dataclass
from collections.abc import Mapping, Sequence
from typing import Any

from .context import DispatcherContext
from .errors import InvalidStoreError
from .handler_table import DEFAULT, HandlerBinding, HandlerTable
from .identity import StoreRef, get_store_name
from .logging_setup import get_logger
from .registry import NamedRegistry

logger = get_logger("dispatchr.dispatcher")


@dataclass
class DispatcherOptions:
    stores: Sequence[Any] = ()
    domains: Sequence[Any] = ()


class Dispatcher:
    """
    Registry of stores, domains and the action -> handler table.

    Stores declare the actions they care about with a class-level
    ``handlers`` mapping; registering a store appends one binding per
    action, in the mapping's order. Domains only reserve a name.
    """

    def __init__(self, options: DispatcherOptions | None = None) -> None:
        options = options or DispatcherOptions()
        self._stores = NamedRegistry("store")
        self._domains = NamedRegistry("domain")
        self._handlers = HandlerTable()

        for store in options.stores or ():
            self.register_store(store)
        for domain in options.domains or ():
            self.register_domain(domain)

    @property
    def stores(self) -> NamedRegistry:
        return self._stores

    @property
    def domains(self) -> NamedRegistry:
        return self._domains

    @property
    def handlers(self) -> HandlerTable:
        return self._handlers

    def create_context(self, context: Any = None) -> DispatcherContext:
        return DispatcherContext(self, context)

    def register_store(self, store: Any) -> None:
        if not (inspect.isclass(store) or inspect.isfunction(store)):
            logger.warning("Rejected store %r: not a class", store)
            raise InvalidStoreError(
                "register_store requires a class as first parameter",
                {"store": repr(store)},
            )

        handlers = getattr(store, "handlers", None)
        if handlers is not None and not isinstance(handlers, Mapping):
            logger.warning("Rejected store %r: handlers is not a mapping", store)
            raise InvalidStoreError(
                "Store `handlers` must be a mapping of action name to handler",
                {"store": repr(store)},
            )

        try:
            name, existing = self._stores.check(store)
        except ValueError as e:
            logger.warning("Rejected store %r: %s", store, e)
            raise
        if existing:
            # same class registered again, e.g. from a module imported twice
            return

        self._stores._register(store)
        count = self._handlers._add_store(name, handlers) if handlers else 0
        logger.debug("Registered store %s (%d action handlers)", name, count)

    def register_domain(self, domain: Any) -> None:
        try:
            name, existing = self._domains.check(domain)
        except ValueError as e:
            logger.warning("Rejected domain %r: %s", domain, e)
            raise
        if existing:
            return
        self._domains._register(domain)
        logger.debug("Registered domain %s", name)

    def is_registered(self, store: StoreRef) -> bool:
        return self._stores.is_registered(store)

    def is_registered_domain(self, domain: StoreRef) -> bool:
        return self._domains.is_registered(domain)

    def get_store_name(self, store: StoreRef) -> str | None:
        return get_store_name(store)

    def get_store(self, store: StoreRef) -> Any:
        return self._stores.get(get_store_name(store) or "")

    def get_domain(self, domain: StoreRef) -> Any:
        return self._domains.get(get_store_name(domain) or "")

    def get_handlers(self, action_name: str) -> tuple[HandlerBinding, ...]:
        return self._handlers.get_bindings(action_name)

    def get_default_handlers(self) -> tuple[HandlerBinding, ...]:
        return self._handlers[DEFAULT]

    def __repr__(self) -> str:
        return f"Dispatcher(stores={self._stores.names()!r}, domains={self._domains.names()!r})"


def create_dispatcher(options: DispatcherOptions | Mapping[str, Any] | None = None) -> Dispatcher:
    if isinstance(options, Mapping):
        options = DispatcherOptions(
            stores=options.get("stores") or (),
            domains=options.get("domains") or (),
        )
    return Dispatcher(options)
