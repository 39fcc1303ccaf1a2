"""Logic for setting up an existing npm project to publish through publisher."""

import json
from pathlib import Path

import click
import jinja2

from ..config import load_json
from ..models import PUBLISHER_RC_FILENAMES, PUBLISHER_RC_KEYS

_TEMPLATE_DIR = Path(__file__).parent / "templates"

PREPUBLISH_GUARD = 'echo "Do not run publish directly, run publisher" && exit 1'
PUBLISHER_SCRIPT = "publisher"


def _get_template_env() -> jinja2.Environment:
    return jinja2.Environment(
        loader=jinja2.FileSystemLoader(_TEMPLATE_DIR),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


def render_publisherrc() -> str:
    """Renders a starter .publisherrc.json with every recognized key commented out."""
    template = _get_template_env().get_template("publisherrc.json.j2")
    width = max(len(key) + len(example) for key, example, _ in PUBLISHER_RC_KEYS)
    return template.render(keys=PUBLISHER_RC_KEYS, width=width)


def init_project(cwd: Path, manifest_path: Path) -> bool:
    """
    Adds the `prepublishOnly` guard and the `publisher` script to package.json
    and writes a starter .publisherrc.json. Existing entries and files are
    left untouched. Returns True if package.json was modified.
    """
    manifest = load_json(manifest_path)
    scripts = manifest.setdefault("scripts", {})
    modified = False

    if scripts.get("prepublishOnly"):
        click.echo("prepublishOnly already exists, doing nothing")
    else:
        click.echo("Adding prepublishOnly to prevent npm-publish")
        scripts["prepublishOnly"] = PREPUBLISH_GUARD
        modified = True

    if not scripts.get("publisher"):
        click.echo("Adding publisher script")
        scripts["publisher"] = PUBLISHER_SCRIPT
        modified = True

    if not any((cwd / name).exists() for name in PUBLISHER_RC_FILENAMES):
        rc_path = cwd / PUBLISHER_RC_FILENAMES[-1]
        click.echo(f"Writing starter configuration to {rc_path}")
        rc_path.write_text(render_publisherrc(), encoding="utf-8")

    if modified:
        click.echo(f"Writing out modified package.json to {manifest_path}")
        manifest_path.write_text(
            json.dumps(manifest, indent=2, ensure_ascii=False) + "\n",
            encoding="utf-8",
        )
    return modified
