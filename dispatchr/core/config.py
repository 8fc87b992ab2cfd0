from __future__ import annotations

import importlib
import json
import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from .dispatcher import Dispatcher, DispatcherOptions
from .errors import ConfigError
from .logging_setup import get_logger

logger = get_logger("dispatchr.config")

CONFIG_FILE = "dispatchr.json"


@dataclass
class DispatcherConfig:
    # "package.module:attribute" references, registered in order
    stores: list[str] = field(default_factory=list)
    domains: list[str] = field(default_factory=list)
    log_level: str = "INFO"

    def to_options(self) -> DispatcherOptions:
        return DispatcherOptions(
            stores=[resolve_reference(ref) for ref in self.stores],
            domains=[resolve_reference(ref) for ref in self.domains],
        )


def resolve_reference(ref: str) -> Any:
    module_name, sep, attr_path = ref.partition(":")
    if not sep or not module_name or not attr_path:
        raise ConfigError(f"Invalid reference `{ref}`, expected `module:attribute`", {"ref": ref})
    try:
        obj: Any = importlib.import_module(module_name)
    except ImportError as e:
        raise ConfigError(f"Cannot import module `{module_name}`: {e}", {"ref": ref}) from e
    for part in attr_path.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as e:
            raise ConfigError(f"`{module_name}` has no attribute `{attr_path}`", {"ref": ref}) from e
    return obj


def load_config(path: Path) -> DispatcherConfig:
    if path.is_dir():
        path = path / CONFIG_FILE
    if not path.exists():
        return DispatcherConfig()
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.warning("Ignoring unreadable config %s: %s", path, e)
        return DispatcherConfig()
    if not isinstance(raw, dict):
        logger.warning("Ignoring config %s: top level is not an object", path)
        return DispatcherConfig()

    def _refs(val: Any) -> list[str]:
        if isinstance(val, list) and all(isinstance(v, str) for v in val):
            return list(val)
        return []

    level = str(raw.get("log_level", "INFO")).upper()
    if not isinstance(logging.getLevelName(level), int):
        logger.warning("Unknown log_level %r in %s, using INFO", level, path)
        level = "INFO"

    return DispatcherConfig(
        stores=_refs(raw.get("stores")),
        domains=_refs(raw.get("domains")),
        log_level=level,
    )


def save_config(path: Path, cfg: DispatcherConfig) -> None:
    if path.is_dir():
        path = path / CONFIG_FILE
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(asdict(cfg), indent=2), encoding="utf-8")


def create_dispatcher_from_config(path: Path) -> Dispatcher:
    cfg = load_config(path)
    get_logger().setLevel(cfg.log_level)
    return Dispatcher(cfg.to_options())
