"""Merge/trim, MP3 encoding, ID3 tagging and loudness normalization."""

from __future__ import annotations

import mimetypes
import wave
from pathlib import Path
from typing import Sequence

from mutagen import MutagenError
from mutagen.id3 import (
    APIC, COMM, ID3, TALB, TCON, TDRC, TIT2, TPE1, TPUB, TRCK, ID3NoHeaderError,
)

from .config import Config
from .errors import StorageError
from .events import Event
from .planner import CutWindow
from .runner import ProcessRunner, run_checked
from .timeutil import parse_local_datetime


def get_wav_duration(path: Path) -> float | None:
    """Get the duration of a WAV file in seconds, or None if unreadable."""
    try:
        with wave.open(str(path), "rb") as wf:
            return wf.getnframes() / wf.getframerate()
    except (OSError, EOFError, wave.Error, ZeroDivisionError):
        return None


def ensure_parent(path: Path) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise StorageError(f"Cannot create directory {path.parent}: {e}") from e


def merge_and_trim(
    runner: ProcessRunner,
    files: Sequence[Path],
    output: Path,
    cut: CutWindow,
    ffmpeg: str = "ffmpeg",
) -> None:
    """Concatenate captures in order and keep only the cut window as WAV."""
    cmd = [ffmpeg, "-y", "-hide_banner", "-loglevel", "error"]
    for f in files:
        cmd.extend(["-i", str(f)])
    inputs = "".join(f"[{i}:a]" for i in range(len(files)))
    cmd.extend([
        "-filter_complex", f"{inputs}concat=n={len(files)}:v=0:a=1[out]",
        "-map", "[out]",
        "-ss", f"{cut.start_offset_seconds:.3f}",
        "-t", f"{cut.duration_seconds:.3f}",
        "-c:a", "pcm_s16le",
        str(output),
    ])
    ensure_parent(output)
    run_checked(runner, cmd)


def wav_to_mp3(
    runner: ProcessRunner,
    wav_path: Path,
    mp3_path: Path,
    bitrate: str = "192k",
    ffmpeg: str = "ffmpeg",
) -> None:
    """Encode a WAV file to MP3 using ffmpeg with libmp3lame."""
    ensure_parent(mp3_path)
    cmd = [
        ffmpeg, "-y", "-hide_banner", "-loglevel", "error",
        "-i", str(wav_path),
        "-codec:a", "libmp3lame", "-b:a", bitrate,
        str(mp3_path),
    ]
    run_checked(runner, cmd)


def normalize_loudness(
    runner: ProcessRunner,
    mp3_path: Path,
    command: Sequence[str],
) -> None:
    run_checked(runner, [*command, str(mp3_path)])


def build_tags(event: Event, config: Config) -> dict[str, str]:
    """Map event fields onto tag names used by tag_mp3."""
    start = parse_local_datetime(event.start_datetime, config.tz)
    comment_parts = [p for p in (event.excerpt, event.location_mapped) if p]
    return {
        "title": event.title or event.full_title,
        "artist": event.series_name or config.publisher,
        "album": event.series_name or event.full_title,
        "publisher": config.publisher,
        "genre": config.genre,
        "track": event.episode,
        "year": str(start.year),
        "comment": " | ".join(comment_parts),
    }


def tag_mp3(
    mp3_path: Path,
    tags: dict[str, str],
    cover: Path | None = None,
) -> None:
    """Write ID3v2 tags (and cover art) to an MP3 file in place."""
    try:
        _write_id3(mp3_path, tags, cover)
    except (MutagenError, OSError) as e:
        raise StorageError(f"Cannot tag {mp3_path}: {e}") from e


def _write_id3(mp3_path: Path, tags: dict[str, str], cover: Path | None) -> None:
    try:
        audio = ID3(str(mp3_path))
    except ID3NoHeaderError:
        audio = ID3()

    frames = {
        "title": TIT2, "artist": TPE1, "album": TALB, "publisher": TPUB,
        "genre": TCON, "track": TRCK, "year": TDRC,
    }
    for key, frame in frames.items():
        audio.delall(frame.__name__)
        if tags.get(key):
            audio.add(frame(encoding=3, text=tags[key]))

    audio.delall("COMM")
    if tags.get("comment"):
        audio.add(COMM(encoding=3, lang="eng", desc="", text=tags["comment"]))

    if cover:
        mime = mimetypes.guess_type(cover.name)[0] or "image/jpeg"
        audio.delall("APIC")
        audio.add(APIC(
            encoding=3, mime=mime, type=3, desc="Cover", data=cover.read_bytes(),
        ))

    audio.save(str(mp3_path))
