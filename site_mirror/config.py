"""
Loading and validation of SiteMirror crawl settings.
Pydantic describes the schema; YAML or JSON files and CLI overrides feed it.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator


class MirrorConfig(BaseModel):
    """Settings for one mirroring run."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    seed_url: str = Field(..., description="URL to start from; also the prefix bounding the crawl.")
    output_dir: Path = Field(..., description="Directory receiving the mirrored pages.")
    max_parallelism: int = Field(1, ge=1, description="Maximum number of pages processed at once.")
    request_timeout: Optional[float] = Field(
        None, gt=0, description="Total deadline of a single HTTP request (seconds); none if unset."
    )

    @field_validator("seed_url")
    @classmethod
    def _check_scheme(cls, v: str) -> str:
        # kept verbatim: the seed string is the prefix every queued link must match
        if not v.startswith(("http://", "https://")):
            raise ValueError("seed_url must start with `https://` or `http://`")
        return v


_DEFAULT_CFG = Path("configs/default.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of YAML must be a mapping, got {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of JSON must be a mapping, got {type(data).__name__}")
    return data


def _read_file(path_obj: Path) -> dict[str, Any]:
    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        return _read_yaml(path_obj)
    if suffix == ".json":
        return _read_json(path_obj)
    raise ValueError(f"Unsupported config format: {suffix}")


def load_config(path: Union[str, Path, None] = None, **overrides: Any) -> MirrorConfig:
    """
    Build a validated MirrorConfig from a YAML/JSON file and keyword overrides.

    Overrides that are None are ignored, so CLI options left unset fall back
    to the file. Without *path*, ``configs/default.yaml`` is used when it
    exists; otherwise only the overrides are used. An explicit *path* that
    does not exist raises FileNotFoundError.
    """
    data: dict[str, Any] = {}
    if path is None:
        if _DEFAULT_CFG.is_file():
            data = _read_file(_DEFAULT_CFG)
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))
        data = _read_file(path_obj)

    data.update({k: v for k, v in overrides.items() if v is not None})
    return MirrorConfig(**data)
