"""Shared fixtures: config, events, fake process runner and HTTP session."""

from __future__ import annotations

import wave
from pathlib import Path

import pytest
import requests

from radioarchive.config import Config
from radioarchive.events import Event
from radioarchive.runner import ProcessResult


def write_wav(path: Path, seconds: float = 1.0, rate: int = 8000) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with wave.open(str(path), "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)
        wf.setframerate(rate)
        wf.writeframes(b"\x00\x00" * int(seconds * rate))
    return path


def make_event(**overrides) -> Event:
    fields = {
        "event_id": 4711,
        "start_datetime": "2025-04-06 10:15:00",
        "end_datetime": "2025-04-06 11:30:00",
        "full_title": "Morning Show: Spring Special",
        "series_name": "Morning Show",
        "title": "Spring Special",
        "episode": "12",
        "location_mapped": "Studio 1",
        "excerpt": "Music and talk for a sunny Sunday.",
        "image": "",
    }
    fields.update(overrides)
    return Event(**fields)


class FakeRunner:
    """Records commands and creates the output file each tool would write.

    Tools listed in crash exit with the given status after leaving a
    truncated output behind, like a process killed halfway.
    """

    def __init__(self, returncode: int = 0, stderr: str = "", crash: dict[str, int] | None = None):
        self.calls: list[list[str]] = []
        self.returncode = returncode
        self.stderr = stderr
        self.crash = crash or {}

    def run(self, args):
        args = list(args)
        self.calls.append(args)
        tool = args[0]
        if tool in self.crash:
            if tool == "ffmpeg":
                Path(args[-1]).write_bytes(b"\xff\xfb")
            return ProcessResult(self.crash[tool], "", self.stderr)
        if self.returncode == 0 and tool == "ffmpeg":
            Path(args[-1]).write_bytes(b"\xff\xfb\x90\x00" + b"\x00" * 64)
        return ProcessResult(self.returncode, "", self.stderr)

    def tool_calls(self, tool: str) -> list[list[str]]:
        return [c for c in self.calls if c[0] == tool]


class FakeResponse:
    def __init__(self, status_code: int = 200, json_data=None, content: bytes = b""):
        self.status_code = status_code
        self._json = json_data
        self.content = content

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")

    def json(self):
        if self._json is None:
            raise ValueError("No JSON object could be decoded")
        return self._json


class FakeSession:
    """Stands in for requests.Session; routes GETs through a handler."""

    def __init__(self, handler):
        self.handler = handler
        self.requests: list[tuple[str, dict]] = []

    def get(self, url, params=None, timeout=None, headers=None):
        self.requests.append((url, dict(params or {})))
        return self.handler(url, params or {})


@pytest.fixture
def config(tmp_path: Path) -> Config:
    return Config(
        api_url="https://radio.example.org/api.php",
        source_dir=tmp_path / "captures",
        target_dir=tmp_path / "archive",
        image_target_dir=tmp_path / "images",
        timezone="Europe/Berlin",
        image_base_url="https://radio.example.org/",
        publisher="Example Radio",
    )
