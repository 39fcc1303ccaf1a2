"""Rewriting of package.json for the distribution directory."""

import re
from typing import Any

from pyvider.telemetry import logger

from .paths import normalize

HOOK_INSTALLER = "husky install"
ENTRY_POINT_FIELDS = ("main", "types", "typings")
HOOK_SCRIPTS = ("prepare", "postinstall")

_CHAIN = r"(?:&&|\|\||;)"
_HOOK = re.escape(HOOK_INSTALLER)
# An invocation covers an optional `npx` and any arguments up to the next
# chain operator.
_INVOCATION = rf"(?:npx\s+)?{_HOOK}(?![\w-])(?:[ \t]+[^\s;&|]+)*"
# Either the invocation with its preceding operator, or the invocation with
# its following operator, or the bare invocation.
_HOOK_PATTERN = re.compile(
    rf"\s*{_CHAIN}\s*{_INVOCATION}|(?<![\w-]){_INVOCATION}(?:\s*{_CHAIN}\s*)?"
)


def strip_hook_installer(script: str) -> str:
    """Removes every `husky install` invocation from a chained script."""
    return _HOOK_PATTERN.sub("", script).strip()


def rewrite_manifest(manifest: dict[str, Any], out_dir: str) -> dict[str, Any]:
    """
    Prepares a parsed package.json for publishing from `out_dir`.

    Entry points are made relative to the output directory, the
    `prepublishOnly` guard and any git hook installation are dropped from
    the scripts, and `devDependencies` is removed. The manifest is modified
    in place and returned.
    """
    out_dir = re.sub(r"^\./", "", out_dir)

    for name in ENTRY_POINT_FIELDS:
        if isinstance(manifest.get(name), str):
            manifest[name] = normalize(manifest[name], out_dir)

    bin_field = manifest.get("bin")
    if isinstance(bin_field, str):
        manifest["bin"] = normalize(bin_field, out_dir)
    elif isinstance(bin_field, dict):
        for key, value in bin_field.items():
            if isinstance(value, str):
                bin_field[key] = normalize(value, out_dir)

    scripts = manifest.get("scripts")
    if isinstance(scripts, dict):
        scripts.pop("prepublishOnly", None)
        for name in HOOK_SCRIPTS:
            if not isinstance(scripts.get(name), str):
                continue
            scripts[name] = strip_hook_installer(scripts[name])
            if scripts[name] == "":
                logger.debug("Dropping emptied lifecycle script", script=name)
                del scripts[name]

    manifest.pop("devDependencies", None)
    return manifest
