"""Env-file parsing on top of python-dotenv, strict about missing files and bad lines."""

from pathlib import Path
from typing import Dict, Optional, Union

from dotenv.main import resolve_variables
from dotenv.parser import parse_stream

from envresource.errors import EnvParseError


def parse_env_file(path: Union[str, Path]) -> Dict[str, str]:
    """
    Parse KEY=VALUE lines from path, in file order. Keys without a value map to "".
    ${VAR} (and ${VAR:-default}) expand from earlier keys in the file, then the process environment.
    Raises EnvParseError if the file is missing, unreadable or a statement does not parse.
    """
    path = Path(path)
    if not path.is_file():
        raise EnvParseError(path, "file not found")
    raw: Dict[str, Optional[str]] = {}
    try:
        with path.open(encoding="utf-8") as stream:
            for binding in parse_stream(stream):
                if binding.error:
                    raise EnvParseError(
                        path,
                        f"could not parse statement {binding.original.string.strip()!r}",
                        line=binding.original.line,
                    )
                if binding.key is None:
                    continue  # blank line or comment
                raw[binding.key] = binding.value
    except (OSError, UnicodeDecodeError) as e:
        raise EnvParseError(path, str(e)) from e
    expanded = resolve_variables(raw.items(), override=True)
    return {key: value or "" for key, value in expanded.items()}
