"""Exception types raised while archiving broadcasts."""

from __future__ import annotations


class ArchiveError(Exception):
    """Base class for every fatal archiving error."""


class ConfigError(ArchiveError):
    pass


class FormatError(ArchiveError):
    pass


class NotFoundError(ArchiveError):
    pass


class MetadataError(ArchiveError):
    """The scheduling backend could not be reached or answered garbage."""


class StorageError(ArchiveError):
    """A file in the archive or image tree could not be read or written."""


class ExternalToolError(ArchiveError):
    def __init__(self, tool: str, returncode: int, stderr: str = ""):
        self.tool = tool
        self.returncode = returncode
        self.stderr = stderr
        message = f"{tool} exited with status {returncode}"
        detail = stderr.strip().splitlines()[-1] if stderr.strip() else ""
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
