from __future__ import annotations

from typing import Any


class DispatcherError(Exception):
    """Base class for registry and dispatch errors. ``details`` carries names for logging."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return self.message


class InvalidStoreError(DispatcherError, TypeError):
    """Store is not a class/function, or its handler map is not a mapping."""


class MissingStoreNameError(DispatcherError, ValueError):
    pass


class DuplicateRegistrationError(DispatcherError, ValueError):
    def __init__(self, name: str, kind: str = "store") -> None:
        super().__init__(
            f"{kind.capitalize()} with name `{name}` has already been registered.",
            {"name": name, "kind": kind},
        )
        self.name = name
        self.kind = kind


class StoreNotRegisteredError(DispatcherError, KeyError):
    def __init__(self, name: str | None) -> None:
        super().__init__(f"Store `{name}` was not registered.", {"name": name})
        self.name = name


class DispatchError(DispatcherError, RuntimeError):
    pass


class ConfigError(DispatcherError):
    pass
