"""Static-folder provider: copies a project folder into storage, with no directory traversal."""

import asyncio
import logging
import shutil
from pathlib import Path
from typing import Protocol

from pydantic import BaseModel, ConfigDict

from envresource.errors import InvalidSourceFolder, StaticFolderCopyError, TraversalOutsideRoot
from envresource.runtime import Factory

log = logging.getLogger(__name__)


class CopyManifest(BaseModel):
    """Where a declared folder is copied from and to. Safe to persist between phases."""

    model_config = ConfigDict(frozen=True)

    source: Path
    destination: Path
    # Copies never replace this directory or anything outside it
    storage_root: Path


class StaticFolderProvider(Protocol):
    """Two-phase copy interface consumed by the env-file resource."""

    async def declare(self, factory: Factory) -> CopyManifest:
        ...

    async def materialize(self, manifest: CopyManifest) -> Path:
        ...


def _relative_under(root: Path, folder: str, path: Path) -> Path:
    """Return path relative to root; TraversalOutsideRoot if it is not below root."""
    try:
        return path.relative_to(root)
    except ValueError:
        raise TraversalOutsideRoot(folder, root) from None


def resolve_source_folder(root: Path, folder: str) -> Path:
    """
    Resolve folder under the project root. Rejects absolute paths, '..' escapes and
    folders naming the root itself ('.', 'a/..').
    Raises InvalidSourceFolder or TraversalOutsideRoot.
    """
    if Path(folder).anchor:
        raise InvalidSourceFolder(folder)
    base = root.resolve()
    resolved = (base / folder).resolve()
    if _relative_under(base, folder, resolved) == Path("."):
        raise InvalidSourceFolder(folder, "Cannot use the project root as a static folder")
    return resolved


def check_destination(manifest: CopyManifest) -> Path:
    """Resolved destination, strictly inside the storage root. Raises TraversalOutsideRoot."""
    storage_root = manifest.storage_root.resolve()
    destination = manifest.destination.resolve()
    if _relative_under(storage_root, str(manifest.destination), destination) == Path("."):
        raise TraversalOutsideRoot(str(manifest.destination), storage_root)
    return destination


def _copy_tree(source: Path, destination: Path) -> None:
    """Replace destination with a fresh copy of source."""
    if destination.exists():
        shutil.rmtree(destination)
    destination.parent.mkdir(parents=True, exist_ok=True)
    shutil.copytree(source, destination)


class StaticFolder:
    """Default provider copying build_path/folder to the same relative place under storage_path."""

    def __init__(self, folder: str = ".env") -> None:
        self._folder = folder

    @property
    def source_folder(self) -> str:
        return self._folder

    def folder(self, folder: str) -> "StaticFolder":
        """Return a provider targeting another source folder. No validation here."""
        return StaticFolder(folder)

    async def declare(self, factory: Factory) -> CopyManifest:
        """Check the source folder is safe and describe where it will be copied."""
        build_root = factory.get_build_path().resolve()
        source = resolve_source_folder(build_root, self._folder)
        storage_root = factory.get_storage_path().resolve()
        manifest = CopyManifest(
            source=source,
            destination=storage_root / source.relative_to(build_root),
            storage_root=storage_root,
        )
        check_destination(manifest)
        log.debug("Static folder declared: %s -> %s", manifest.source, manifest.destination)
        return manifest

    async def materialize(self, manifest: CopyManifest) -> Path:
        """
        Copy the declared folder and return the output directory.
        Raises TraversalOutsideRoot for a destination outside storage, StaticFolderCopyError
        when the source is missing or the copy fails.
        """
        destination = check_destination(manifest)
        if not manifest.source.is_dir():
            raise StaticFolderCopyError(manifest.source, destination, "source is not a directory")
        log.info("Copying static folder %s to %s", manifest.source, destination)
        try:
            await asyncio.to_thread(_copy_tree, manifest.source, destination)
        except OSError as e:
            log.error("Failed to copy static folder %s: %s", manifest.source, e)
            raise StaticFolderCopyError(manifest.source, destination, str(e)) from e
        return destination
