"""Pytest fixtures for the entire tspublisher test suite."""

import json
from pathlib import Path
from typing import Any, Callable

import pytest
from pytest import MonkeyPatch


class FakeProcess:
    def __init__(self, returncode: int) -> None:
        self.returncode = returncode

    async def wait(self) -> int:
        return self.returncode


class SpawnRecorder:
    """Stands in for asyncio.create_subprocess_exec and remembers each call."""

    def __init__(self) -> None:
        self.calls: list[dict[str, Any]] = []
        self.exit_codes: dict[str, int] = {}

    async def __call__(self, program: str, *args: str, **kwargs: Any) -> FakeProcess:
        self.calls.append({"program": program, "args": list(args), **kwargs})
        command_line = " ".join((program, *args))
        return FakeProcess(self.exit_codes.get(command_line, 0))

    @property
    def command_lines(self) -> list[str]:
        return [" ".join((call["program"], *call["args"])) for call in self.calls]


@pytest.fixture
def fake_spawn(monkeypatch: MonkeyPatch) -> SpawnRecorder:
    """
    Replaces process creation in the command module so no real program runs.
    Set `fake_spawn.exit_codes["npm run lint"] = 1` to make a command fail.
    """
    recorder = SpawnRecorder()
    monkeypatch.setattr(
        "tspublisher.commands.asyncio.create_subprocess_exec", recorder
    )
    return recorder


@pytest.fixture
def make_project(tmp_path: Path) -> Callable[..., Path]:
    """A factory fixture to create an npm project inside a temporary directory."""

    def _make_project(
        manifest: dict[str, Any] | None = None,
        files: dict[str, str] | None = None,
        tsconfig: dict[str, Any] | None = None,
        name: str = "sample_project",
    ) -> Path:
        proj_dir = tmp_path / name
        proj_dir.mkdir()
        (proj_dir / "package.json").write_text(
            json.dumps(manifest if manifest is not None else {"name": "sample"})
        )
        if tsconfig is not None:
            (proj_dir / "tsconfig.json").write_text(json.dumps(tsconfig))
        for rel_path, content in (files or {}).items():
            path = proj_dir / rel_path
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content)
        return proj_dir

    return _make_project


@pytest.fixture
def flat_package(make_project: Callable[..., Path]) -> Path:
    """A project with sources, a README and nothing else to ship."""
    return make_project(
        files={
            "README.md": "# sample\n",
            "src/index.ts": "export const x = 1;\n",
        }
    )
