from typing import Any, Self

from attrs import define, field

MANIFEST_FILENAME: str = "package.json"
COMPILER_CONFIG_FILENAME: str = "tsconfig.json"
PUBLISHER_RC_FILENAMES: tuple[str, ...] = (".publisherrc", ".publisherrc.json")
IGNORE_RULE_FILENAME: str = ".npmignore"

PACKAGE_MANAGER: str = "npm"
COMPILER_PACKAGE: str = "typescript"
LOCAL_COMPILER_BIN: str = "./node_modules/.bin/tsc"

# Keys accepted in .publisherrc, as (key, example value, description).
PUBLISHER_RC_KEYS: tuple[tuple[str, str, str], ...] = (
    ("steps", "[]", "list of steps to run, defaults to lint, build, test"),
    ("outDir", '""', "directory to publish"),
    ("publish", "true", "whether to run npm publish or not at end"),
    ("clean", "true", "whether to empty outDir before building"),
)


def _optional_steps(value: Any) -> tuple[str, ...] | None:
    if value is None:
        return None
    return tuple(value)


@define(frozen=True, slots=True)
class PublisherConfig:
    steps: tuple[str, ...] | None = field(default=None, converter=_optional_steps)
    out_dir: str | None = None
    publish: bool = True
    clean: bool = True

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        if not isinstance(data, dict):
            raise ValueError("Publisher configuration must be a JSON object.")

        steps = data.get("steps")
        if steps is not None and (
            not isinstance(steps, list)
            or not all(isinstance(step, str) for step in steps)
        ):
            raise ValueError("'steps' must be a list of strings.")

        out_dir = data.get("outDir")
        if out_dir is not None and not isinstance(out_dir, str):
            raise ValueError("'outDir' must be a string.")

        for flag in ("publish", "clean"):
            if flag in data and not isinstance(data[flag], bool):
                raise ValueError(f"'{flag}' must be true or false.")

        return cls(
            steps=steps,
            out_dir=out_dir or None,
            publish=data.get("publish", True),
            clean=data.get("clean", True),
        )


@define(frozen=True, slots=True)
class CompilerConfig:
    out_dir: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        if not isinstance(data, dict):
            raise ValueError("Compiler configuration must be a JSON object.")
        options = data.get("compilerOptions") or {}
        if not isinstance(options, dict):
            raise ValueError("'compilerOptions' must be a JSON object.")
        out_dir = options.get("outDir")
        if out_dir is not None and not isinstance(out_dir, str):
            raise ValueError("'compilerOptions.outDir' must be a string.")
        return cls(out_dir=out_dir or None)
