"""Host runtime contract: deployment environment and project paths."""

from enum import Enum
from pathlib import Path
from typing import Protocol


class Environment(str, Enum):
    """Where the resource is being provisioned."""

    LOCAL = "local"
    PRODUCTION = "production"


class Factory(Protocol):
    """What the host runtime exposes to a resource during provisioning."""

    def get_environment(self) -> Environment:
        ...

    def get_build_path(self) -> Path:
        """Project root holding the source folders."""
        ...

    def get_storage_path(self) -> Path:
        """Directory that copied folders are written into."""
        ...


class LocalFactory:
    """Concrete factory over two directories, for scripts and tests."""

    def __init__(
        self,
        build_path: Path,
        storage_path: Path,
        environment: Environment = Environment.LOCAL,
    ) -> None:
        self.build_path = Path(build_path)
        self.storage_path = Path(storage_path)
        self.environment = environment

    def get_environment(self) -> Environment:
        return self.environment

    def get_build_path(self) -> Path:
        return self.build_path

    def get_storage_path(self) -> Path:
        return self.storage_path
