from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Any, Callable

DEFAULT = "default"

# Either a callable taking (store, payload) or the name of a store method.
Handler = Callable[..., Any] | str


@dataclass(frozen=True)
class HandlerBinding:
    name: str
    handler: Handler

    @property
    def is_method_name(self) -> bool:
        return isinstance(self.handler, str)


class HandlerTable(Mapping[str, tuple[HandlerBinding, ...]]):
    """
    Action name -> ordered handler bindings.

    The ``default`` bucket always exists. Bindings are only ever appended,
    so the order of a list is the order stores were registered in.
    """

    def __init__(self) -> None:
        self._actions: dict[str, list[HandlerBinding]] = {DEFAULT: []}

    def _add(self, action: str, store_name: str, handler: Handler) -> HandlerBinding:
        binding = HandlerBinding(name=store_name, handler=handler)
        self._actions.setdefault(action, []).append(binding)
        return binding

    def _add_store(self, store_name: str, handlers: Mapping[str, Handler]) -> int:
        count = 0
        for action, handler in handlers.items():
            self._add(action, store_name, handler)
            count += 1
        return count

    def get_bindings(self, action: str) -> tuple[HandlerBinding, ...]:
        return tuple(self._actions.get(action, ()))

    def snapshot(self) -> dict[str, list[HandlerBinding]]:
        return {action: list(bindings) for action, bindings in self._actions.items()}

    def __getitem__(self, action: str) -> tuple[HandlerBinding, ...]:
        return tuple(self._actions[action])

    def __iter__(self) -> Iterator[str]:
        return iter(self._actions)

    def __len__(self) -> int:
        return len(self._actions)
