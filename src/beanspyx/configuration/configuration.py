from __future__ import annotations

import os
from typing import Any, Dict, Optional, Type, TypeVar

from dotenv import load_dotenv

T = TypeVar("T")

class ConfigurationException(Exception):
    """
    Raised if a configuration value cannot be converted to the requested type.
    """
    pass

def merge_dicts(a: dict, b: dict) -> dict:
    """
    return a new dict with `b` merged recursively into `a`, values of `b` win
    """
    result = a.copy()
    for key, b_val in b.items():
        a_val = result.get(key)
        if isinstance(a_val, dict) and isinstance(b_val, dict):
            result[key] = merge_dicts(a_val, b_val)
        else:
            result[key] = b_val

    return result

class ConfigurationManager:
    """
    Collects the values of all registered sources. Sources are merged in registration order,
    so later sources override earlier ones.
    """
    # constructor

    def __init__(self):
        self.sources: list[ConfigurationSource] = []
        self._data: Dict[str, Any] = {}
        self.coercions = {
            int: int,
            float: float,
            bool: lambda v: str(v).lower() in ("1", "true", "yes", "on"),
            str: str,
            list: lambda v: [item.strip() for item in str(v).split(",") if item.strip()]
        }

    # internal

    def _register(self, source: ConfigurationSource):
        self.sources.append(source)

    # public

    def load(self) -> ConfigurationManager:
        self._data = {}
        for source in self.sources:
            self._data = merge_dicts(self._data, source.load())

        return self

    def get(self, path: str, type: Type[T], default: Optional[T] = None) -> Optional[T]:
        """
        return the value stored under the dotted `path`, converted to `type`

        Raises:
            ConfigurationException: if the value cannot be converted
        """
        current = self._data
        for key in path.split("."):
            if not isinstance(current, dict) or key not in current:
                return default

            current = current[key]

        if isinstance(current, type):
            return current

        if type in self.coercions:
            try:
                return self.coercions[type](current)
            except (TypeError, ValueError) as e:
                raise ConfigurationException(f"cannot convert {path}={current!r} to {type.__name__}") from e

        raise ConfigurationException(f"unknown coercion to {type}")

class ConfigurationSource:
    def __init__(self, manager: ConfigurationManager):
        manager._register(self)

    def load(self) -> dict:
        return {}

class DictConfigurationSource(ConfigurationSource):
    """
    Supplies values given programmatically; keys may be dotted paths.
    """
    def __init__(self, manager: ConfigurationManager, values: dict):
        super().__init__(manager)

        self.values = values

    def load(self) -> dict:
        result = {}
        for key, value in self.values.items():
            result = merge_dicts(result, explode_key(key, value))

        return result

def explode_key(key: str, value) -> dict:
    """
    "a.b" or "a/b" -> {"a": {"b": value}}
    """
    parts = key.replace("/", ".").split(".")
    d = current = {}
    for part in parts[:-1]:
        current[part] = {}
        current = current[part]
    current[parts[-1]] = value

    return d

class EnvConfigurationSource(ConfigurationSource):
    """
    Supplies the process environment, after loading a `.env` file if there is one.
    """
    # constructor

    def __init__(self, manager: ConfigurationManager, dotenv_path: Optional[str] = None):
        super().__init__(manager)

        load_dotenv(dotenv_path)

    # implement

    def load(self) -> dict:
        exploded = {}

        for key, value in os.environ.items():
            if "." in key or "/" in key:
                exploded = merge_dicts(exploded, explode_key(key, value))
            else:
                exploded[key] = value

        return exploded
