from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

VERSION = "1.0.0"
MIPLIB_URL = "https://miplib.zib.de/"


@dataclass
class Config:
    base_url: str
    catalog_path: Optional[Path]
    request_timeout: Optional[float]
    default_jobs: int
    json_path: Path
    csv_path: Path


DEFAULT_CONFIG = {
    "source": {
        "base_url": MIPLIB_URL,
        "catalog": None,
        "request_timeout": None,
    },
    "defaults": {
        "jobs": 8,
    },
    "output": {
        "json": "./miplib2017.json",
        "csv": "./miplib2017.csv",
    },
}


def load_config(config_path: Path | None = None) -> Config:
    base_dir = Path.cwd()
    if config_path is None:
        config_path = base_dir / "config.yaml"

    if config_path.exists():
        data = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    else:
        data = DEFAULT_CONFIG

    source: Dict[str, Any] = data.get("source", {}) or {}
    defaults: Dict[str, Any] = data.get("defaults", {}) or {}
    output: Dict[str, Any] = data.get("output", {}) or {}

    def _p(key: str, fallback: str) -> Path:
        return (base_dir / output.get(key, fallback)).resolve()

    catalog = source.get("catalog")
    timeout = source.get("request_timeout")

    return Config(
        base_url=str(source.get("base_url", MIPLIB_URL)),
        catalog_path=(base_dir / catalog).resolve() if catalog else None,
        request_timeout=float(timeout) if timeout is not None else None,
        default_jobs=int(defaults.get("jobs", 8)),
        json_path=_p("json", "./miplib2017.json"),
        csv_path=_p("csv", "./miplib2017.csv"),
    )


def write_default_config(path: Path) -> None:
    path.write_text(yaml.safe_dump(DEFAULT_CONFIG, sort_keys=False), encoding="utf-8")
