"""
Configuration of the library
"""
from .configuration import ConfigurationManager, ConfigurationSource, DictConfigurationSource, EnvConfigurationSource, ConfigurationException, configuration, DEFAULTS

__all__ = [
    "ConfigurationManager",
    "ConfigurationSource",
    "DictConfigurationSource",
    "EnvConfigurationSource",
    "ConfigurationException",
    "configuration",
    "DEFAULTS"
]
