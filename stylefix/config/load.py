from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from ..errors import StylefixUserError
from ..rules import get_rule, list_rules
from ..types import Severity
from .model import Config, RuleSettings
from .typed import ConfigLoadError, load_typed

logger = logging.getLogger(__name__)

CONFIG_FILE = ".stylefix.yaml"

_yaml = YAML(typ="safe")


def find_config(root: Path) -> Optional[Path]:
    path = root / CONFIG_FILE
    return path if path.is_file() else None


def load_config(root: Path, explicit: Optional[Path] = None) -> Config:
    """
    Load configuration from an explicit file, or from .stylefix.yaml in root.
    Without a file, defaults are used.
    """
    path = explicit if explicit is not None else find_config(root)
    if path is None:
        logger.debug("No %s in %s, using defaults", CONFIG_FILE, root)
        return Config()
    if not path.is_file():
        raise StylefixUserError(f"Config file not found: {path}")

    try:
        raw = _yaml.load(path.read_text(encoding="utf-8")) or {}
    except YAMLError as e:
        raise ConfigLoadError(f"{path}: invalid YAML: {e}")
    logger.debug("Loaded config from %s", path)
    return load_typed(Config, raw, path=path.name)


def resolve_rules(config: Config, overrides: Optional[Mapping[str, Severity]] = None) -> List[RuleSettings]:
    """
    Resolve every registered rule against configuration.

    Severity comes from the command line override, then the config file,
    then the rule's default. Rules switched off are still listed.
    """
    overrides = {
        name: load_typed(Severity, severity, path=f"overrides.{name}")
        for name, severity in (overrides or {}).items()
    }
    for name in list(config.rules) + list(overrides):
        get_rule(name)  # raises UnknownRuleError

    settings: List[RuleSettings] = []
    for name in list_rules():
        rule_cls = get_rule(name)
        raw: Dict[str, Any] = dict(config.rules.get(name) or {})
        configured = load_typed(Optional[Severity], raw.pop("severity", None), path=f"rules.{name}.severity")
        severity = overrides.get(name) or configured or rule_cls.meta.default_severity
        options = rule_cls.load_options(raw) if raw else rule_cls.default_options()
        settings.append(RuleSettings(name=name, severity=severity, options=options))
    return settings
