"""Pytest configuration: isolate settings from the caller's env and build a project tree."""

import os
from pathlib import Path

import pytest

from envresource.runtime import Environment, LocalFactory

# Clear before envresource.config is used so defaults are the built-in ones
for _key in [k for k in os.environ if k.startswith("ENVRESOURCE_")]:
    del os.environ[_key]


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """
    Project tree shared by the provisioning tests:
    build/ (project root), storage/ (copy target), escape/passwd (outside the root).
    """
    for name in ("build", "storage", "escape"):
        (tmp_path / name).mkdir()
    (tmp_path / "escape" / "passwd").write_text("qwerty")
    return tmp_path


@pytest.fixture
def local_factory(project: Path) -> LocalFactory:
    """Factory reporting a local environment."""
    return LocalFactory(project / "build", project / "storage", Environment.LOCAL)


@pytest.fixture
def prod_factory(project: Path) -> LocalFactory:
    """Factory reporting a production environment."""
    return LocalFactory(project / "build", project / "storage", Environment.PRODUCTION)
