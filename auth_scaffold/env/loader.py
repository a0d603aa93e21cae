"""Dotenv file reading.

The file is parsed with python-dotenv. Statements the parser rejects and keys
without an ``=VALUE`` part are treated as malformed instead of being skipped
or mapped to ``None``.

``${VAR}`` references are expanded against the mapping the caller passes in
(normally the store the file is loaded into), never implicitly against
``os.environ``.
"""

import io
import logging
import os
from pathlib import Path
from typing import Dict, Mapping, Optional, Union

from dotenv.parser import parse_stream
from dotenv.variables import parse_variables

from ..errors import EnvironmentFileError

logger = logging.getLogger(__name__)


def read_env_file(
    path: Union[str, Path],
    environ: Optional[Mapping[str, str]] = None,
    override: bool = False,
) -> Dict[str, str]:
    """Read and validate a dotenv file.

    Args:
        path: Location of the environment file
        environ: Variables visible to ``${VAR}`` expansion; defaults to the
            process environment
        override: Let values defined earlier in the file shadow ``environ``
            during expansion, matching how the file will be merged

    Returns:
        Mapping of variable names to values, in file order

    Raises:
        EnvironmentFileError: If the file is missing, unreadable or malformed
    """
    file_path = str(path)

    try:
        # utf-8-sig drops a leading BOM so it never ends up in the first key
        with open(file_path, encoding="utf-8-sig") as f:
            content = f.read()
    except FileNotFoundError as e:
        raise EnvironmentFileError(file_path, "file not found", e) from e
    except (OSError, UnicodeDecodeError) as e:
        raise EnvironmentFileError(file_path, "file could not be read", e) from e

    raw: Dict[str, str] = {}
    for binding in parse_stream(io.StringIO(content)):
        line = binding.original.line
        if binding.error:
            statement = binding.original.string.strip()
            raise EnvironmentFileError(
                file_path, f"malformed statement at line {line}: '{statement}'"
            )
        if binding.key is None:
            continue
        if binding.value is None:
            raise EnvironmentFileError(
                file_path, f"missing value for '{binding.key}' at line {line}"
            )
        raw[binding.key] = binding.value

    values = expand_variables(raw, os.environ if environ is None else environ, override)
    logger.debug(f"Read {len(values)} variables from {file_path}")
    return values


def expand_variables(
    raw: Mapping[str, str], environ: Mapping[str, str], override: bool = False
) -> Dict[str, str]:
    """Expand ``${VAR}`` and ``${VAR:-default}`` references in file order."""
    values: Dict[str, str] = {}
    for name, value in raw.items():
        if override:
            scope = {**environ, **values}
        else:
            scope = {**values, **environ}
        values[name] = "".join(atom.resolve(scope) for atom in parse_variables(value))
    return values
