"""Tests for locating a project and loading its configuration files."""

import json
from pathlib import Path

import pytest

from tspublisher.config import (
    find_project_root,
    load_compiler_config,
    load_json,
    load_manifest,
    load_publisher_config,
    resolve_out_dir,
    strip_json_comments,
)
from tspublisher.exceptions import ConfigError
from tspublisher.models import CompilerConfig, PublisherConfig


def test_find_project_root(tmp_path: Path) -> None:
    project_dir = tmp_path / "myproject"
    nested_dir = project_dir / "src" / "some" / "nested"
    nested_dir.mkdir(parents=True)
    (project_dir / "package.json").write_text("{}")

    assert find_project_root(project_dir) == project_dir.resolve()
    assert find_project_root(nested_dir) == project_dir.resolve()


def test_find_project_root_not_found(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="Could not find package.json"):
        find_project_root(tmp_path)


def test_strip_json_comments_keeps_strings() -> None:
    text = '{"url": "http://example.com", /* block */ "a": 1 // line\n}'
    assert json.loads(strip_json_comments(text)) == {"url": "http://example.com", "a": 1}
    assert "//" in strip_json_comments('"a // b"')


def test_load_json_trailing_commas(tmp_path: Path) -> None:
    path = tmp_path / "tsconfig.json"
    path.write_text('{\n  // comment\n  "compilerOptions": {"outDir": "dist",},\n  "x": ",}",\n}\n')
    assert load_json(path, allow_trailing_commas=True) == {
        "compilerOptions": {"outDir": "dist"},
        "x": ",}",
    }


def test_load_manifest(tmp_path: Path) -> None:
    (tmp_path / "package.json").write_text('{"name": "pkg" /* comment */}')
    assert load_manifest(tmp_path) == {"name": "pkg"}


@pytest.mark.parametrize("content", ["{not json", "[]"])
def test_load_manifest_failures(tmp_path: Path, content: str) -> None:
    (tmp_path / "package.json").write_text(content)
    with pytest.raises(ConfigError, match="Failed to parse package.json"):
        load_manifest(tmp_path)


def test_load_manifest_missing(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="Failed to parse package.json"):
        load_manifest(tmp_path)


def test_publisher_config_defaults(tmp_path: Path) -> None:
    config = load_publisher_config(tmp_path)
    assert config == PublisherConfig()
    assert config.steps is None
    assert config.publish is True
    assert config.clean is True


@pytest.mark.parametrize("name", [".publisherrc", ".publisherrc.json"])
def test_publisher_config_file(tmp_path: Path, name: str) -> None:
    (tmp_path / name).write_text(
        '{\n  "steps": ["lint", "build"], // explicit\n  "outDir": "lib",\n  "publish": false,\n}'
    )
    assert load_publisher_config(tmp_path) == PublisherConfig(
        steps=("lint", "build"), out_dir="lib", publish=False
    )


@pytest.mark.parametrize(
    "content, message",
    [
        ('{"steps": "build"}', "'steps' must be a list of strings"),
        ('{"outDir": 3}', "'outDir' must be a string"),
        ('{"publish": "no"}', "'publish' must be true or false"),
        ("[1]", "must be a JSON object"),
        ("{", "Failed to parse .publisherrc"),
    ],
)
def test_publisher_config_errors(tmp_path: Path, content: str, message: str) -> None:
    (tmp_path / ".publisherrc").write_text(content)
    with pytest.raises(ConfigError, match=message):
        load_publisher_config(tmp_path)


def test_compiler_config(tmp_path: Path) -> None:
    (tmp_path / "tsconfig.json").write_text(
        '{"compilerOptions": {"outDir": "./dist", "strict": true,},}'
    )
    assert load_compiler_config(tmp_path) == CompilerConfig(out_dir="./dist")


def test_compiler_config_without_out_dir(tmp_path: Path) -> None:
    (tmp_path / "tsconfig.json").write_text("{}")
    assert load_compiler_config(tmp_path) == CompilerConfig()


def test_compiler_config_missing(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="Failed to parse tsconfig.json"):
        load_compiler_config(tmp_path)


def test_resolve_out_dir(tmp_path: Path) -> None:
    assert resolve_out_dir(tmp_path, PublisherConfig(), CompilerConfig()) == str(tmp_path)
    assert resolve_out_dir(tmp_path, PublisherConfig(), CompilerConfig("dist")) == "dist"
    assert (
        resolve_out_dir(tmp_path, PublisherConfig(out_dir="lib"), CompilerConfig("dist"))
        == "lib"
    )
