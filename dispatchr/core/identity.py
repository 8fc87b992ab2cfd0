from __future__ import annotations

from typing import Any

# A store/domain can be referred to by its name or by the object itself.
StoreRef = str | Any


def get_store_name(store: StoreRef) -> str | None:
    """
    Canonical name for a store or domain.

    Strings are already names. Objects resolve to ``store_name`` when set,
    then a ``name`` string (class attribute or instance field), then the
    class/function ``__name__``. Returns None when nothing usable is found;
    callers decide whether that is an error.
    """
    if isinstance(store, str):
        return store
    if store is None:
        return None
    for attr in ("store_name", "name", "__name__"):
        value = getattr(store, attr, None)
        if isinstance(value, str) and value:
            return value
    return None
