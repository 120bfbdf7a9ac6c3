"""Phase 2: work out which env file to load and install its variables."""

import asyncio
import logging
from pathlib import Path
from typing import Callable, Dict, Optional

from envresource.errors import EnvLoadFailure, EnvParseError
from envresource.models import ProvisioningDeclaration
from envresource.parser import parse_env_file
from envresource.sink import EnvironmentSink, ProcessEnvironment
from envresource.static_folder import StaticFolder, StaticFolderProvider

log = logging.getLogger(__name__)

EnvParser = Callable[[Path], Dict[str, str]]


class EnvironmentResolver:
    """
    Materializes a ProvisioningDeclaration. Returns the path that was loaded, or None
    when there was nothing to load (local run without a local file).
    Every call copies and loads again; nothing is cached and nothing is retried.
    """

    def __init__(
        self,
        static_provider: Optional[StaticFolderProvider] = None,
        sink: Optional[EnvironmentSink] = None,
        parser: EnvParser = parse_env_file,
    ) -> None:
        self.static_provider = static_provider or StaticFolder()
        self.sink = sink or ProcessEnvironment()
        self.parser = parser

    async def resolve_path(self, declaration: ProvisioningDeclaration) -> Optional[Path]:
        """Production: output_dir / prod_file after the copy. Local: local_file or None."""
        if declaration.copy_manifest is not None:
            output_dir = await self.static_provider.materialize(declaration.copy_manifest)
            log.info("Static provider returned %s", output_dir)
            return output_dir / declaration.prod_file
        if declaration.local_file:
            return Path(declaration.local_file)
        return None

    async def load(self, env_path: Optional[Path]) -> Optional[Path]:
        """Parse env_path off the event loop and install every variable into the sink, in file order."""
        if env_path is None:
            log.info("No env file to load")
            return None
        log.info("Loading env vars from %s", env_path)
        try:
            values = await asyncio.to_thread(self.parser, env_path)
        except (EnvParseError, OSError) as e:
            log.error("Failed to load env vars from %s: %s", env_path, e)
            raise EnvLoadFailure(env_path, str(e)) from e
        for key, value in values.items():
            self.sink.set(key, value)
        log.debug("Installed %d env vars from %s", len(values), env_path)
        return env_path

    async def materialize(self, declaration: ProvisioningDeclaration) -> Optional[Path]:
        """Resolve the env file for the declaration and load it."""
        return await self.load(await self.resolve_path(declaration))
