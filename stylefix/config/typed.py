"""
Typed loading of raw YAML values into the configuration dataclasses.

Covers the annotations configuration types actually use: dataclasses,
Literal, Optional, Dict, List, str and int. Every error names the dotted
path of the offending value.
"""

from __future__ import annotations

import logging
import typing as t
from dataclasses import fields, is_dataclass
from typing import Any, get_args, get_origin

from ..errors import StylefixUserError

logger = logging.getLogger(__name__)


class ConfigLoadError(StylefixUserError, ValueError):
    """Invalid configuration value; the message starts with its dotted path."""
    pass


def _type_name(tp: Any) -> str:
    return getattr(tp, "__name__", None) or str(tp)


def _load_dataclass(tp: Any, val: Any, path: str) -> Any:
    if not isinstance(val, dict):
        raise ConfigLoadError(f"{path}: expected mapping for {_type_name(tp)}, got {type(val).__name__}")
    hints = t.get_type_hints(tp)
    names = [f.name for f in fields(tp)]
    unknown = sorted(set(val) - set(names))
    if unknown:
        raise ConfigLoadError(f"{path}: unknown key(s): {unknown}")
    # absent keys keep their dataclass defaults
    kwargs = {name: load_typed(hints[name], val[name], path=f"{path}.{name}") for name in names if name in val}
    return tp(**kwargs)


def load_typed(tp: Any, val: Any, *, path: str = "$") -> Any:
    """
    Coerce val to the annotation tp, recursively.

    Raises ConfigLoadError on the first value that does not fit.
    """
    origin = get_origin(tp)

    if tp is Any:
        return val

    if isinstance(tp, type) and is_dataclass(tp):
        return _load_dataclass(tp, val, path)

    if origin is t.Literal:
        allowed = get_args(tp)
        if val in allowed:
            return val
        raise ConfigLoadError(f"{path}: expected one of {list(allowed)}, got {val!r}")

    # Optional[X] is the only union configuration types use
    if origin is t.Union:
        if val is None and type(None) in get_args(tp):
            return None
        (inner,) = [a for a in get_args(tp) if a is not type(None)]
        return load_typed(inner, val, path=path)

    if origin is dict:
        if not isinstance(val, dict):
            raise ConfigLoadError(f"{path}: expected mapping, got {type(val).__name__}")
        kt, vt = get_args(tp) or (Any, Any)
        return {
            load_typed(kt, k, path=f"{path}.<key>"): load_typed(vt, v, path=f"{path}.{k}")
            for k, v in val.items()
        }

    if origin is list:
        if not isinstance(val, list):
            raise ConfigLoadError(f"{path}: expected list, got {type(val).__name__}")
        (et,) = get_args(tp) or (Any,)
        return [load_typed(et, v, path=f"{path}[{i}]") for i, v in enumerate(val)]

    if tp in (str, int):
        # bool is an int subclass, but `true` is never a valid count or name
        if isinstance(val, bool) or not isinstance(val, tp):
            raise ConfigLoadError(f"{path}: expected {tp.__name__}, got {type(val).__name__}")
        return val

    logger.debug("No coercion for %s at %s", _type_name(tp), path)
    raise ConfigLoadError(f"{path}: unsupported annotation {_type_name(tp)}")


__all__ = ["ConfigLoadError", "load_typed"]
