from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict
import yaml

from common.errors import ConfigError

def load_yaml(path: str | Path) -> Dict[str, Any]:
    p = Path(path)
    with p.open("r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"{p}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"{p}: expected a mapping at top level, got {type(data).__name__}")
    return data

@dataclass(frozen=True)
class LoadedConfig:
    session: Dict[str, Any]
    market: Dict[str, Any]

def load_all(
    session_path: str = "config/session.yaml",
    market_path: str = "config/market.yaml",
) -> LoadedConfig:
    return LoadedConfig(
        session=load_yaml(session_path),
        market=load_yaml(market_path),
    )
