"""String helpers for relocating manifest entry points into the output directory."""

import re

_LEADING_SLASH = re.compile(r"^\.?/")
# A lone leading "." is kept so dotfile entry points survive.
_LEADING_SLASHES = re.compile(r"^(?:\.?/)+")


def strip_leading_slash(value: str) -> str:
    """Removes a single leading `./` or `/`."""
    return _LEADING_SLASH.sub("", value, count=1)


def normalize(path: str, out_dir: str) -> str:
    """
    Rewrites `path` so that it is relative to `out_dir`.

    `normalize("./dist/index.js", "dist")` gives `"index.js"`. The first
    occurrence of the stripped output directory is removed from the stripped
    path; an empty output directory (or `.`) only normalizes the leading
    slash.
    """
    stripped_out_dir = strip_leading_slash(out_dir).rstrip("/")
    value = strip_leading_slash(path)
    if stripped_out_dir not in ("", "."):
        value = value.replace(stripped_out_dir, "", 1)
    return _LEADING_SLASHES.sub("", value)
