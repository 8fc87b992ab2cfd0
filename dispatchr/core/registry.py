from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any

from .errors import DuplicateRegistrationError, MissingStoreNameError
from .identity import StoreRef, get_store_name


class NamedRegistry(Mapping[str, Any]):
    """Name -> reference table with idempotent re-registration."""

    def __init__(self, kind: str = "store") -> None:
        self.kind = kind
        self._entries: dict[str, Any] = {}

    def resolve_name(self, ref: StoreRef) -> str:
        name = get_store_name(ref)
        if not name:
            raise MissingStoreNameError(
                f"{self.kind.capitalize()} is required to have a `store_name` property.",
                {"kind": self.kind},
            )
        return name

    def check(self, ref: StoreRef) -> tuple[str, bool]:
        """
        Validate ``ref`` without mutating anything.

        Returns ``(name, already_registered)``. Raises when the name is
        missing or bound to a different reference.
        """
        name = self.resolve_name(ref)
        if name in self._entries:
            if self._entries[name] is ref:
                return name, True
            raise DuplicateRegistrationError(name, self.kind)
        return name, False

    def _register(self, ref: StoreRef) -> str:
        name, existing = self.check(ref)
        if not existing:
            self._entries[name] = ref
        return name

    def is_registered(self, ref: StoreRef) -> bool:
        name = get_store_name(ref)
        if not name or name not in self._entries:
            return False
        if not isinstance(ref, str) and self._entries[name] is not ref:
            return False
        return True

    def names(self) -> list[str]:
        return list(self._entries)

    def __getitem__(self, name: str) -> Any:
        return self._entries[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"NamedRegistry(kind={self.kind!r}, names={self.names()!r})"
