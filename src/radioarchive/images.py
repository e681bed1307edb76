"""Cover image download for event tagging."""

from __future__ import annotations

import posixpath
from pathlib import Path
from urllib.parse import unquote, urljoin, urlparse

import requests

from .config import Config
from .errors import MetadataError, StorageError
from .events import USER_AGENT


def resolve_image_url(image: str, base_url: str) -> str:
    """Return image as an absolute URL, joining path fragments onto base_url."""
    if urlparse(image).scheme in ("http", "https"):
        return image
    return urljoin(base_url, image)


def fetch_image(
    image: str,
    config: Config,
    session: requests.Session | None = None,
) -> Path | None:
    """Download an event image into the image directory.

    The file is named after the last URL path segment and overwritten on every
    call. Returns None when the event carries no image.
    """
    if not image or not image.strip():
        return None

    url = resolve_image_url(image.strip(), config.image_base_url)
    name = posixpath.basename(unquote(urlparse(url).path))
    if not name:
        raise MetadataError(f"Cannot derive a file name from image URL {url}")

    session = session or requests.Session()
    try:
        response = session.get(
            url, timeout=config.request_timeout, headers={"User-Agent": USER_AGENT}
        )
        response.raise_for_status()
    except requests.RequestException as e:
        raise MetadataError(f"Image download failed for {url}: {e}") from e

    path = config.image_target_dir / name
    try:
        config.image_target_dir.mkdir(parents=True, exist_ok=True)
        path.write_bytes(response.content)
    except OSError as e:
        raise StorageError(f"Cannot save image {path}: {e}") from e
    return path
