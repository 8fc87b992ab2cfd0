from .core.config import DispatcherConfig, create_dispatcher_from_config, load_config, save_config
from .core.context import DispatcherContext, StoreInterface
from .core.dispatcher import Dispatcher, DispatcherOptions, create_dispatcher
from .core.errors import (
    ConfigError,
    DispatchError,
    DispatcherError,
    DuplicateRegistrationError,
    InvalidStoreError,
    MissingStoreNameError,
    StoreNotRegisteredError,
)
from .core.handler_table import DEFAULT, HandlerBinding, HandlerTable
from .core.identity import get_store_name
from .core.logging_setup import get_logger, setup_logging

__all__ = [
    "DEFAULT",
    "ConfigError",
    "DispatchError",
    "Dispatcher",
    "DispatcherConfig",
    "DispatcherContext",
    "DispatcherError",
    "DispatcherOptions",
    "DuplicateRegistrationError",
    "HandlerBinding",
    "HandlerTable",
    "InvalidStoreError",
    "MissingStoreNameError",
    "StoreInterface",
    "StoreNotRegisteredError",
    "create_dispatcher",
    "create_dispatcher_from_config",
    "get_logger",
    "get_store_name",
    "load_config",
    "save_config",
    "setup_logging",
]
