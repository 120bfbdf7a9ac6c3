"""Errors raised while declaring and materializing the env-file resource."""

from pathlib import Path
from typing import Optional


class EnvResourceError(Exception):
    """Base for every runtime failure of the env-file resource."""


class InvalidSourceFolder(EnvResourceError):
    """Source folder is an absolute path, or names the project root itself."""

    def __init__(self, folder: str, reason: str = "Cannot use an absolute path for a static folder") -> None:
        self.folder = folder
        super().__init__(f"{reason}: {folder!r}")


class TraversalOutsideRoot(EnvResourceError):
    """Source folder resolves outside the project root."""

    def __init__(self, folder: str, root: Path) -> None:
        self.folder = folder
        self.root = root
        super().__init__(
            f"Cannot traverse out of crate for a static folder: {folder!r} (root {root})"
        )


class StaticFolderCopyError(EnvResourceError):
    """Static folder could not be copied into storage."""

    def __init__(self, source: Path, destination: Path, reason: str) -> None:
        self.source = source
        self.destination = destination
        super().__init__(f"Cannot copy static folder {source} to {destination}: {reason}")


class EnvParseError(EnvResourceError):
    """Env file is missing, unreadable or has a statement that does not parse."""

    def __init__(self, path: Path, reason: str, line: Optional[int] = None) -> None:
        self.path = path
        self.reason = reason
        self.line = line
        where = f"{path}:{line}" if line is not None else str(path)
        super().__init__(f"{where}: {reason}")


class EnvLoadFailure(EnvResourceError):
    """Env file could not be loaded. The parser error is chained as __cause__."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"Cannot load env vars from {path}: {reason}")


class ProvisioningError(EnvResourceError):
    """Failure reported to the host runtime; aborts the deployment."""


class DelegateConsumedError(RuntimeError):
    """declare() called again after the static-folder delegate was handed over."""
