from __future__ import annotations

import logging
import os
import threading
from contextlib import contextmanager
from typing import Type, TypeVar, Optional, Iterator

from dotenv import dotenv_values, find_dotenv


T = TypeVar("T")

def merge_dicts(a: dict, b: dict) -> dict:
    result = a.copy()
    for key, b_val in b.items():
        if key in result:
            a_val = result[key]
            if isinstance(a_val, dict) and isinstance(b_val, dict):
                result[key] = merge_dicts(a_val, b_val)  # Recurse
            else:
                result[key] = b_val  # Overwrite
        else:
            result[key] = b_val
    return result

class ConfigurationException(Exception):
    pass

class ConfigurationManager:
    """
    Merges the values of all registered sources, later sources win.
    Values are addressed by dotted paths like "assertions.legacy_semantics".
    """
    logger = logging.getLogger(__name__)

    # constructor

    def __init__(self):
        self.sources : list[ConfigurationSource] = []
        self._data = dict()
        self.coercions = {
            int: int,
            float: float,
            bool: lambda v: str(v).lower() in ("1", "true", "yes", "on"),
            str: str,
        }

    # internal

    def _register(self, source: ConfigurationSource):
        self.sources.append(source)

    # public

    def load(self) -> ConfigurationManager:
        self._data = dict()
        for source in self.sources:
            self._data = merge_dicts(self._data, source.load())

        ConfigurationManager.logger.debug(f"loaded configuration from {len(self.sources)} sources")

        return self

    def get(self, path: str, type: Type[T], default=None) -> T:
        def value(path: str, default=None) -> T:
            keys = path.split(".")
            current = self._data
            for key in keys:
                if not isinstance(current, dict) or key not in current:
                    return default
                current = current[key]

            return current

        v = value(path, default)

        if v is None or isinstance(v, type):
            return v

        if type in self.coercions:
            try:
                return self.coercions[type](v)
            except Exception as e:
                raise ConfigurationException(f"cannot coerce '{path}' value {v!r} to {type.__name__}") from e

        raise ConfigurationException(f"unknown coercion to {type}")

    @contextmanager
    def override(self, values: dict) -> Iterator[ConfigurationManager]:
        """
        temporarily layer the passed values on top of the loaded configuration
        """
        saved = self._data
        self._data = merge_dicts(self._data, values)
        try:
            yield self
        finally:
            self._data = saved

class ConfigurationSource:
    def __init__(self, manager: ConfigurationManager):
        manager._register(self)

    def load(self) -> dict:
        return {}

class DictConfigurationSource(ConfigurationSource):
    # constructor

    def __init__(self, manager: ConfigurationManager, data: dict):
        super().__init__(manager)

        self.data = data

    # implement

    def load(self) -> dict:
        return self.data

class EnvConfigurationSource(ConfigurationSource):
    """
    Reads variables starting with the prefix from the environment and from a `.env` file if present.
    The file is read without touching `os.environ`, environment variables take precedence over it.
    `TESTPROXY_ASSERTIONS__LEGACY_SEMANTICS` is exposed as `assertions.legacy_semantics`.
    """
    # constructor

    def __init__(self, manager: ConfigurationManager, prefix: str = "TESTPROXY_", dotenv_path: Optional[str] = None):
        super().__init__(manager)

        self.prefix = prefix
        self.dotenv_path = dotenv_path if dotenv_path is not None else find_dotenv(usecwd=True)

    # implement

    def load(self) -> dict:
        def explode_key(parts, value):
            """Explodes the path parts into nested dictionaries"""
            d = current = {}
            for part in parts[:-1]:
                current[part] = {}
                current = current[part]
            current[parts[-1]] = value
            return d

        exploded = {}

        variables = {key: value for key, value in dotenv_values(self.dotenv_path).items() if value is not None}
        variables.update(os.environ)

        for key, value in variables.items():
            if key.startswith(self.prefix) and len(key) > len(self.prefix):
                parts = key[len(self.prefix):].lower().split("__")
                exploded = merge_dicts(exploded, explode_key(parts, value))

        return exploded

DEFAULTS = {
    "reflection": {
        "include_non_public": True
    },
    "assertions": {
        "legacy_semantics": False
    },
    "logging": {
        "trace": False
    }
}

_manager : Optional[ConfigurationManager] = None
_lock = threading.Lock()

def configuration() -> ConfigurationManager:
    """
    return the process wide manager, built from the defaults and the environment on first use
    """
    global _manager

    if _manager is None:
        with _lock:
            if _manager is None:
                manager = ConfigurationManager()

                DictConfigurationSource(manager, DEFAULTS)
                EnvConfigurationSource(manager)

                _manager = manager.load()

    return _manager
