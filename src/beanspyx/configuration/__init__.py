"""
Configuration values for the introspector.
"""
from .configuration import (
    ConfigurationManager,
    ConfigurationSource,
    ConfigurationException,
    DictConfigurationSource,
    EnvConfigurationSource,
    merge_dicts,
    explode_key
)

__all__ = [
    "ConfigurationManager",
    "ConfigurationSource",
    "ConfigurationException",
    "DictConfigurationSource",
    "EnvConfigurationSource",
    "merge_dicts",
    "explode_key"
]
