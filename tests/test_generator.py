"""Tests for the init scaffolding."""

import json
from pathlib import Path

from tspublisher.config import load_json, load_publisher_config
from tspublisher.models import PublisherConfig
from tspublisher.scaffolding.generator import (
    PREPUBLISH_GUARD,
    init_project,
    render_publisherrc,
)


def test_init_edits_package_json_and_creates_publisherrc(tmp_path: Path) -> None:
    manifest_path = tmp_path / "package.json"
    manifest_path.write_text("{}")

    assert init_project(tmp_path, manifest_path) is True

    assert json.loads(manifest_path.read_text()) == {
        "scripts": {
            "prepublishOnly": PREPUBLISH_GUARD,
            "publisher": "publisher",
        }
    }
    assert (tmp_path / ".publisherrc.json").exists()


def test_init_keeps_existing_scripts(tmp_path: Path) -> None:
    manifest_path = tmp_path / "package.json"
    original = json.dumps({"scripts": {"prepublishOnly": "test", "publisher": "exit 1"}})
    manifest_path.write_text(original)

    assert init_project(tmp_path, manifest_path) is False

    assert manifest_path.read_text() == original


def test_init_keeps_existing_publisherrc(tmp_path: Path) -> None:
    manifest_path = tmp_path / "package.json"
    manifest_path.write_text("{}")
    (tmp_path / ".publisherrc").write_text('{"publish": false}')

    init_project(tmp_path, manifest_path)

    assert not (tmp_path / ".publisherrc.json").exists()


def test_rendered_publisherrc_documents_every_key() -> None:
    rendered = render_publisherrc()
    for key in ("steps", "outDir", "publish", "clean"):
        assert f'// "{key}":' in rendered
    assert rendered.startswith("{\n")
    assert rendered.endswith("}\n")


def test_rendered_publisherrc_loads_as_defaults(tmp_path: Path) -> None:
    (tmp_path / ".publisherrc.json").write_text(render_publisherrc())
    assert load_json(tmp_path / ".publisherrc.json") == {}
    assert load_publisher_config(tmp_path) == PublisherConfig()


def test_init_keeps_non_ascii_text(tmp_path: Path) -> None:
    manifest_path = tmp_path / "package.json"
    manifest_path.write_text(json.dumps({"author": "José Müller"}), encoding="utf-8")

    init_project(tmp_path, manifest_path)

    text = manifest_path.read_text(encoding="utf-8")
    assert '"author": "José Müller"' in text
    assert json.loads(text)["author"] == "José Müller"
