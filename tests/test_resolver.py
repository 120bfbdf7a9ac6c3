"""Tests for phase 2: env path resolution and loading."""

import os
import threading
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from envresource.errors import EnvLoadFailure, EnvParseError, StaticFolderCopyError
from envresource.models import ProvisioningDeclaration
from envresource.resolver import EnvironmentResolver
from envresource.sink import MappingEnvironment, ProcessEnvironment
from envresource.static_folder import CopyManifest


def _manifest(tmp_path: Path) -> CopyManifest:
    return CopyManifest(
        source=tmp_path / "src", destination=tmp_path / "out", storage_root=tmp_path
    )


@pytest.mark.asyncio
async def test_local_without_file_loads_nothing() -> None:
    """No local file: returns None, parser not called, nothing installed."""
    parser = MagicMock()
    sink = MappingEnvironment()
    resolver = EnvironmentResolver(sink=sink, parser=parser)
    result = await resolver.materialize(ProvisioningDeclaration(prod_file=".env", local_file=""))
    assert result is None
    parser.assert_not_called()
    assert sink.values == {}


@pytest.mark.asyncio
async def test_local_file_is_loaded(tmp_path: Path) -> None:
    """Local file is loaded as given and its variables installed."""
    env = tmp_path / ".env-dev"
    env.write_text("KEY=VALUE\n")
    sink = MappingEnvironment()
    resolver = EnvironmentResolver(sink=sink)
    result = await resolver.materialize(
        ProvisioningDeclaration(prod_file=".env", local_file=str(env))
    )
    assert result == env
    assert sink.get("KEY") == "VALUE"


@pytest.mark.asyncio
async def test_local_missing_file_fails(tmp_path: Path) -> None:
    """Missing local file raises EnvLoadFailure chaining the parser error."""
    resolver = EnvironmentResolver(sink=MappingEnvironment())
    declaration = ProvisioningDeclaration(prod_file=".env", local_file=str(tmp_path / "nope"))
    with pytest.raises(EnvLoadFailure, match="Cannot load env vars") as exc_info:
        await resolver.materialize(declaration)
    assert exc_info.value.path == tmp_path / "nope"
    assert isinstance(exc_info.value.__cause__, EnvParseError)


@pytest.mark.asyncio
async def test_production_path_under_output_dir(tmp_path: Path) -> None:
    """Production: the provider's output directory joined with prod_file."""
    provider = MagicMock()
    provider.materialize = AsyncMock(return_value=tmp_path / "out")
    parser = MagicMock(return_value={"A": "1"})
    sink = MappingEnvironment()
    resolver = EnvironmentResolver(static_provider=provider, sink=sink, parser=parser)
    manifest = _manifest(tmp_path)
    declaration = ProvisioningDeclaration(
        prod_file=".env-prod", local_file="ignored", copy_manifest=manifest
    )
    result = await resolver.materialize(declaration)
    assert result == tmp_path / "out" / ".env-prod"
    provider.materialize.assert_awaited_once_with(manifest)
    parser.assert_called_once_with(tmp_path / "out" / ".env-prod")
    assert sink.values == {"A": "1"}


@pytest.mark.asyncio
async def test_production_copies_again_on_each_call(tmp_path: Path) -> None:
    """Nothing is cached: each materialize() copies and loads again."""
    provider = MagicMock()
    provider.materialize = AsyncMock(return_value=tmp_path)
    parser = MagicMock(return_value={})
    resolver = EnvironmentResolver(static_provider=provider, sink=MappingEnvironment(), parser=parser)
    declaration = ProvisioningDeclaration(prod_file=".env", copy_manifest=_manifest(tmp_path))
    await resolver.materialize(declaration)
    await resolver.materialize(declaration)
    assert provider.materialize.await_count == 2
    assert parser.call_count == 2


@pytest.mark.asyncio
async def test_provider_error_propagates(tmp_path: Path) -> None:
    """Copy errors from the provider are not swallowed or retried."""
    error = StaticFolderCopyError(tmp_path / "src", tmp_path / "out", "disk full")
    provider = MagicMock()
    provider.materialize = AsyncMock(side_effect=error)
    parser = MagicMock()
    resolver = EnvironmentResolver(static_provider=provider, sink=MappingEnvironment(), parser=parser)
    declaration = ProvisioningDeclaration(prod_file=".env", copy_manifest=_manifest(tmp_path))
    with pytest.raises(StaticFolderCopyError, match="disk full"):
        await resolver.materialize(declaration)
    assert provider.materialize.await_count == 1
    parser.assert_not_called()


@pytest.mark.asyncio
async def test_load_installs_in_file_order(tmp_path: Path) -> None:
    """Later keys in the file override earlier installs of the same key."""
    sink = MagicMock()
    resolver = EnvironmentResolver(sink=sink, parser=lambda _path: {"A": "1", "B": "2"})
    await resolver.load(tmp_path / ".env")
    assert [c.args for c in sink.set.call_args_list] == [("A", "1"), ("B", "2")]


@pytest.mark.asyncio
async def test_load_overrides_existing_value(tmp_path: Path) -> None:
    """A loaded value replaces what the sink held before."""
    env = tmp_path / ".env"
    env.write_text("MY_VAR=new\n")
    sink = MappingEnvironment({"MY_VAR": "old"})
    await EnvironmentResolver(sink=sink).load(env)
    assert sink.get("MY_VAR") == "new"


@pytest.mark.asyncio
async def test_default_sink_is_process_environment(monkeypatch, tmp_path: Path) -> None:
    """Without a sink the variables land in os.environ; the test restores it afterwards."""
    # setenv records the prior state so teardown removes the loaded value again
    monkeypatch.setenv("ENVRESOURCE_TEST_PROCESS_VAR", "before")
    env = tmp_path / ".env"
    env.write_text("ENVRESOURCE_TEST_PROCESS_VAR=1\n")
    resolver = EnvironmentResolver()
    assert isinstance(resolver.sink, ProcessEnvironment)
    await resolver.load(env)
    assert os.environ["ENVRESOURCE_TEST_PROCESS_VAR"] == "1"


@pytest.mark.asyncio
async def test_load_runs_parser_off_event_loop(tmp_path: Path) -> None:
    """The parser runs in a worker thread, not on the event loop thread."""
    seen = {}

    def parser(path: Path) -> dict:
        seen["thread"] = threading.current_thread()
        return {}

    await EnvironmentResolver(sink=MappingEnvironment(), parser=parser).load(tmp_path / ".env")
    assert seen["thread"] is not threading.main_thread()


@pytest.mark.asyncio
async def test_load_expands_variables(tmp_path: Path) -> None:
    """${VAR} references are expanded before installing."""
    env = tmp_path / ".env"
    env.write_text("A=1\nB=${A}-x\n")
    sink = MappingEnvironment()
    await EnvironmentResolver(sink=sink).load(env)
    assert sink.values == {"A": "1", "B": "1-x"}
