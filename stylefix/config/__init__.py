from .load import CONFIG_FILE, load_config, resolve_rules
from .model import DEFAULT_EXTENSIONS, Config, RuleSettings
from .typed import ConfigLoadError, load_typed

__all__ = [
    "CONFIG_FILE",
    "DEFAULT_EXTENSIONS",
    "Config",
    "ConfigLoadError",
    "RuleSettings",
    "load_config",
    "load_typed",
    "resolve_rules",
]
