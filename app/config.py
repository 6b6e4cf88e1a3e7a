from __future__ import annotations

from dataclasses import dataclass, field, fields
import logging
import os
from typing import Any, Dict, Optional

import orjson
import yaml

from uml_types import DetailMode

logger = logging.getLogger(__name__)


@dataclass
class DiagramConfig:
    line_type: Optional[str] = "ortho"
    skinparams: Dict[str, str] = field(default_factory=dict)
    overview_detail: DetailMode = DetailMode.FIELDS_AND_METHODS
    package_detail: DetailMode = DetailMode.SUMMARY
    context_detail: DetailMode = DetailMode.SUMMARY
    show_external: bool = True
    public_only: bool = False


@dataclass
class GeneratorConfig:
    diagram: DiagramConfig = field(default_factory=DiagramConfig)
    output_directory: str = "output"
    file_extension: str = ".puml"
    encoding: str = "utf-8"


DEFAULT_CONFIG = GeneratorConfig()


def _detail_mode(value: Any) -> DetailMode:
    if isinstance(value, DetailMode):
        return value
    try:
        return DetailMode(str(value).lower())
    except ValueError:
        raise ValueError(f"Unknown detail mode: {value!r}") from None


def _overlay(target: Any, data: Dict[str, Any], section: str) -> None:
    known = {f.name for f in fields(target)}
    for key, value in data.items():
        if key not in known:
            logger.warning("Ignoring unknown %s option '%s'", section, key)
            continue
        if key.endswith("_detail"):
            value = _detail_mode(value)
        elif key == "skinparams":
            value = {str(k): str(v) for k, v in (value or {}).items()}
        setattr(target, key, value)


def config_from_dict(data: Dict[str, Any]) -> GeneratorConfig:
    cfg = GeneratorConfig()
    data = dict(data or {})
    diagram = data.pop("diagram", None) or {}
    if not isinstance(diagram, dict):
        raise ValueError(f"'diagram' section must be a mapping, got {type(diagram).__name__}")
    _overlay(cfg, data, "generator")
    _overlay(cfg.diagram, diagram, "diagram")
    return cfg


def load_config(path: str) -> GeneratorConfig:
    if not os.path.isfile(path):
        raise FileNotFoundError(f"Config file not found: {path}")
    if path.lower().endswith(('.yml', '.yaml')):
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}
    else:
        with open(path, 'rb') as f:
            data = orjson.loads(f.read())
    if not isinstance(data, dict):
        raise ValueError(f"Config file must hold a mapping: {path}")
    logger.debug("Loaded config from %s", path)
    return config_from_dict(data)


__all__ = [
    "DiagramConfig",
    "GeneratorConfig",
    "DEFAULT_CONFIG",
    "config_from_dict",
    "load_config",
]
