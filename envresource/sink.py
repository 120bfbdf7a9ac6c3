"""Where loaded variables are installed: the process environment or a private mapping."""

import os
from typing import Dict, Optional, Protocol


class EnvironmentSink(Protocol):
    """Receives variables loaded from an env file."""

    def set(self, key: str, value: str) -> None:
        ...

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        ...


class ProcessEnvironment:
    """
    Installs into os.environ. Values override existing ones and stay until process exit.
    Two resources loading concurrently into the process environment race; there is no isolation.
    """

    def set(self, key: str, value: str) -> None:
        os.environ[key] = value

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return os.environ.get(key, default)


class MappingEnvironment:
    """Installs into a private dict (tests, dry runs)."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self.values: Dict[str, str] = dict(initial or {})

    def set(self, key: str, value: str) -> None:
        self.values[key] = value

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self.values.get(key, default)
