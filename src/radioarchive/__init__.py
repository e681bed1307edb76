"""Turn recorded radio captures into tagged, normalized MP3 archives."""

__version__ = "0.1.0"
