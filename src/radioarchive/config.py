"""Run configuration loaded once from a YAML file."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml

from .errors import ConfigError

REQUIRED_KEYS = ("api_url", "source_dir", "target_dir", "image_target_dir", "timezone")

DEFAULT_NORMALIZE_COMMAND = ("mp3gain", "-r", "-k", "-q")


@dataclass(frozen=True)
class Config:
    api_url: str
    source_dir: Path
    target_dir: Path
    image_target_dir: Path
    timezone: str
    offset: float = 0.0
    image_base_url: str = ""
    phase: str = "all"
    publisher: str = ""
    genre: str = "Radio"
    bitrate: str = "192k"
    request_timeout: float = 30.0
    ffmpeg: str = "ffmpeg"
    normalize_command: tuple[str, ...] = field(default=DEFAULT_NORMALIZE_COMMAND)

    @property
    def tz(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)

    @classmethod
    def from_dict(cls, d: dict) -> Config:
        missing = [key for key in REQUIRED_KEYS if not d.get(key)]
        if missing:
            raise ConfigError(f"Missing required config key(s): {', '.join(missing)}")

        try:
            ZoneInfo(str(d["timezone"]))
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ConfigError(f"Unknown timezone: {d['timezone']!r}") from e

        try:
            offset = float(d.get("offset") or 0)
            request_timeout = float(d.get("request_timeout", 30))
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid numeric config value: {e}") from e

        command = d.get("normalize_command", DEFAULT_NORMALIZE_COMMAND)
        if isinstance(command, str):
            command = command.split()
        if not command:
            raise ConfigError("normalize_command must not be empty")

        return cls(
            api_url=str(d["api_url"]),
            source_dir=Path(d["source_dir"]).expanduser(),
            target_dir=Path(d["target_dir"]).expanduser(),
            image_target_dir=Path(d["image_target_dir"]).expanduser(),
            timezone=str(d["timezone"]),
            offset=offset,
            image_base_url=str(d.get("image_base_url") or d["api_url"]),
            phase=str(d.get("phase", "all")),
            publisher=str(d.get("publisher", "")),
            genre=str(d.get("genre", "Radio")),
            bitrate=str(d.get("bitrate", "192k")),
            request_timeout=request_timeout,
            ffmpeg=str(d.get("ffmpeg", "ffmpeg")),
            normalize_command=tuple(str(part) for part in command),
        )


def load_config(path: Path) -> Config:
    """Read and validate the YAML config file at path."""
    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")
    return Config.from_dict(data)
