"""Env-file resource: builder options plus the declare/build provisioning phases."""

import logging
import random
from pathlib import Path
from typing import Optional

from envresource.config import get_settings
from envresource.errors import DelegateConsumedError, EnvResourceError, ProvisioningError
from envresource.models import ProvisioningDeclaration
from envresource.resolver import EnvironmentResolver
from envresource.runtime import Environment, Factory
from envresource.sink import EnvironmentSink
from envresource.static_folder import StaticFolder

log = logging.getLogger(__name__)


def _cache_busting_key(folder: str) -> str:
    """Config key that differs on every call so the host never reuses a cached output."""
    return f"{folder} - {random.random()}"


class EnvVars:
    """
    Loads an env file into the environment of a deployed service.

    Locally the file named by local_file is loaded as-is (nothing if unset). In production
    the folder is copied into storage by the static-folder provider and prod_file is
    loaded from the copy.
    """

    def __init__(self) -> None:
        settings = get_settings()
        self._folder = settings.folder
        self._prod_file = settings.prod_file
        self._local_file: Optional[str] = settings.local_file or None
        self._config = _cache_busting_key(self._folder)
        # Handed over to the first production declare(); None afterwards.
        self._static_provider: Optional[StaticFolder] = StaticFolder(self._folder)

    @property
    def config(self) -> str:
        return self._config

    @property
    def source_folder(self) -> str:
        return self._folder

    def folder(self, folder: str) -> "EnvVars":
        """Set the source folder, relative to the project root. Validated in production only."""
        self._folder = folder
        self._config = _cache_busting_key(folder)
        if self._static_provider is not None:
            self._static_provider = self._static_provider.folder(folder)
        return self

    def prod_file(self, name: str) -> "EnvVars":
        self._prod_file = name
        return self

    def local_file(self, name: str) -> "EnvVars":
        """Env file used locally; any relative or absolute path."""
        self._local_file = name
        return self

    async def declare(self, factory: Factory) -> ProvisioningDeclaration:
        """
        Phase 1. Local: no I/O, just echo the file names. Production: hand the
        static-folder provider over and let it validate the source folder.
        Raises InvalidSourceFolder or TraversalOutsideRoot; DelegateConsumedError if
        called twice in production.
        """
        log.info("Declaring env vars resource (folder %s)", self._folder)
        environment = factory.get_environment()
        log.debug("Environment is %s", environment)
        local_file = self._local_file or ""

        if environment != Environment.PRODUCTION:
            return ProvisioningDeclaration(prod_file=self._prod_file, local_file=local_file)

        static_provider, self._static_provider = self._static_provider, None
        if static_provider is None:
            raise DelegateConsumedError("Static provider was already handed over by declare()")
        log.debug("Calling static provider for %s", static_provider.source_folder)
        manifest = await static_provider.declare(factory)
        return ProvisioningDeclaration(
            prod_file=self._prod_file,
            local_file=local_file,
            copy_manifest=manifest,
        )

    @staticmethod
    async def build(
        declaration: ProvisioningDeclaration,
        sink: Optional[EnvironmentSink] = None,
    ) -> Optional[Path]:
        """Phase 2. Copy (production), then load. Returns the loaded path or None."""
        return await EnvironmentResolver(sink=sink).materialize(declaration)

    async def provision(
        self,
        factory: Factory,
        sink: Optional[EnvironmentSink] = None,
    ) -> Optional[Path]:
        """
        Run a whole provisioning cycle the way a host does: declare, persist the
        declaration, build from the persisted copy. Raises ProvisioningError.
        """
        try:
            declaration = await self.declare(factory)
            persisted = declaration.to_json()
            return await self.build(ProvisioningDeclaration.from_json(persisted), sink=sink)
        except EnvResourceError as e:
            raise ProvisioningError(str(e)) from e
