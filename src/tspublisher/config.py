"""Locating a project and loading its package.json, tsconfig.json and .publisherrc."""

import json
import os
from pathlib import Path
import re
from typing import Any

from pyvider.telemetry import logger

from .exceptions import ConfigError
from .models import (
    COMPILER_CONFIG_FILENAME,
    MANIFEST_FILENAME,
    PUBLISHER_RC_FILENAMES,
    CompilerConfig,
    PublisherConfig,
)

_TRAILING_COMMA = re.compile(r",(?=\s*[}\]])")


def strip_json_comments(text: str) -> str:
    """Blanks out `//` and `/* */` comments that are not inside strings."""
    out: list[str] = []
    i = 0
    length = len(text)
    in_string = False
    while i < length:
        char = text[i]
        if in_string:
            out.append(char)
            if char == "\\" and i + 1 < length:
                out.append(text[i + 1])
                i += 1
            elif char == '"':
                in_string = False
        elif char == '"':
            in_string = True
            out.append(char)
        elif text.startswith("//", i):
            end = text.find("\n", i)
            i = length if end == -1 else end
            continue
        elif text.startswith("/*", i):
            end = text.find("*/", i + 2)
            i = length if end == -1 else end + 2
            out.append(" ")
            continue
        else:
            out.append(char)
        i += 1
    return "".join(out)


def _strip_trailing_commas(text: str) -> str:
    # Skips string literals so a ",}" inside a value is left alone.
    parts = re.split(r'("(?:\\.|[^"\\])*")', text)
    for index in range(0, len(parts), 2):
        parts[index] = _TRAILING_COMMA.sub("", parts[index])
    return "".join(parts)


def load_json(path: Path, allow_trailing_commas: bool = False) -> Any:
    """Reads a JSON file that may contain comments (and trailing commas)."""
    text = strip_json_comments(path.read_text(encoding="utf-8"))
    if allow_trailing_commas:
        text = _strip_trailing_commas(text)
    return json.loads(text)


def find_project_root(start_path: str | os.PathLike[str] | None = None) -> Path:
    """Walks up from `start_path` to the nearest directory holding a package.json."""
    current = Path(start_path or Path.cwd()).resolve()
    while True:
        if (current / MANIFEST_FILENAME).exists():
            return current
        if current.parent == current:
            raise ConfigError(f"Could not find {MANIFEST_FILENAME} file")
        current = current.parent


def load_manifest(root: Path) -> dict[str, Any]:
    path = root / MANIFEST_FILENAME
    try:
        data = load_json(path)
    except (OSError, ValueError) as e:
        raise ConfigError(f"Failed to parse {MANIFEST_FILENAME} file at {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Failed to parse {MANIFEST_FILENAME} file at {path}: not an object")
    return data


def load_publisher_config(root: Path) -> PublisherConfig:
    """Loads .publisherrc (or .publisherrc.json); a missing file means defaults."""
    for name in PUBLISHER_RC_FILENAMES:
        path = root / name
        if not path.exists():
            continue
        logger.debug("Loading publisher configuration", path=str(path))
        try:
            return PublisherConfig.from_dict(load_json(path, allow_trailing_commas=True))
        except (OSError, ValueError) as e:
            raise ConfigError(f"Failed to parse {name} file at {path}: {e}") from e
    return PublisherConfig()


def load_compiler_config(root: Path) -> CompilerConfig:
    """
    Loads tsconfig.json, which allows for both comments as well as for
    trailing commas.
    """
    path = root / COMPILER_CONFIG_FILENAME
    try:
        return CompilerConfig.from_dict(load_json(path, allow_trailing_commas=True))
    except (OSError, ValueError) as e:
        raise ConfigError(
            f"Failed to parse {COMPILER_CONFIG_FILENAME} file at {path}: {e}"
        ) from e


def resolve_out_dir(
    root: Path, publisher_config: PublisherConfig, compiler_config: CompilerConfig
) -> str:
    """
    Picks the output directory setting: .publisherrc's `outDir`, then
    tsconfig's `compilerOptions.outDir`, then the project root itself.
    """
    return publisher_config.out_dir or compiler_config.out_dir or str(root)
