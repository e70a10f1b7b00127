"""
config.py - engine configuration

Load order:
1. dataclass defaults
2. JSON file (explicit path, or the GENOFLOW_CONFIG environment variable)
3. GENOFLOW_MODE / GENOFLOW_HOST / GENOFLOW_PORT environment variables,
   only when no explicit path was given
"""

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .models import InheritanceMode
from .layout import LayoutConfig


@dataclass
class EngineConfig:
    default_mode: InheritanceMode = InheritanceMode.AUTOSOMAL_RECESSIVE
    layout: LayoutConfig = field(default_factory=LayoutConfig)
    host: str = "0.0.0.0"
    port: int = 5000


def _apply(cfg: EngineConfig, data: dict, port_name: str = "port"):
    if data.get('default_mode'):
        cfg.default_mode = InheritanceMode.parse(data['default_mode'])
    if data.get('host'):
        cfg.host = str(data['host'])
    if data.get('port'):
        try:
            cfg.port = int(data['port'])
        except (TypeError, ValueError):
            raise ValueError(f"{port_name} must be an integer, got {data['port']!r}") from None

    layout = data.get('layout') or {}
    for name in ('node_width', 'node_height', 'sibship_offset'):
        if name in layout:
            setattr(cfg.layout, name, float(layout[name]))


def load_config(config_path: Optional[str] = None) -> EngineConfig:
    """
    Args:
        config_path: JSON config file; falls back to $GENOFLOW_CONFIG

    Returns:
        EngineConfig
    """
    cfg = EngineConfig()

    path = config_path or os.environ.get("GENOFLOW_CONFIG")
    if path:
        with open(Path(path), 'r', encoding='utf-8') as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Config file {path} must contain a JSON object")
        _apply(cfg, data, f"port in {path}")

    # an explicit file is authoritative
    if config_path is None:
        _apply(cfg, {
            'default_mode': os.environ.get("GENOFLOW_MODE"),
            'host': os.environ.get("GENOFLOW_HOST"),
            'port': os.environ.get("GENOFLOW_PORT"),
        }, port_name="GENOFLOW_PORT")

    return cfg
