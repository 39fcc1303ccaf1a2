"""Core logic for running a publish: build steps, distribution files, npm publish."""

import json
from pathlib import Path
from typing import Any

import click

from pyvider.telemetry import logger

from ..commands import CleanCommand, Command, ExecCommand, describe, execute
from ..exceptions import CommandFailedError, PublishError
from ..models import MANIFEST_FILENAME, PACKAGE_MANAGER, PublisherConfig
from ..planner import plan
from .manifest import rewrite_manifest


class PublishOrchestrator:
    def __init__(
        self,
        cwd: Path,
        manifest: dict[str, Any],
        publisher_config: PublisherConfig,
        out_dir: str,
        checks: bool = True,
        dry_run: bool = False,
        color: bool | None = None,
    ) -> None:
        self.cwd = Path(cwd)
        self.manifest = manifest
        self.publisher_config = publisher_config
        self.out_dir_setting = out_dir
        self.out_dir = self.cwd / out_dir
        self.checks = checks
        self.dry_run = dry_run
        self.color = color

    @property
    def separate_out_dir(self) -> bool:
        return self.out_dir.resolve() != self.cwd.resolve()

    def _echo(self, message: str = "", **style: Any) -> None:
        click.echo(click.style(message, **style) if style else message, color=self.color)

    def _out_dir_relative(self) -> str:
        try:
            return self.out_dir.resolve().relative_to(self.cwd.resolve()).as_posix()
        except ValueError:
            return self.out_dir_setting

    def plan_commands(self) -> list[Command]:
        commands = plan(
            self.cwd,
            self.out_dir,
            self.manifest,
            self.publisher_config,
            self.checks,
        )
        # Never clean a directory that holds the project itself.
        if (
            self.publisher_config.clean
            and self.separate_out_dir
            and not self.cwd.resolve().is_relative_to(self.out_dir.resolve())
        ):
            commands.insert(0, CleanCommand(self.out_dir))
        return commands

    async def run_commands(self, commands: list[Command]) -> None:
        for command in commands:
            describe(command, color=self.color)
            try:
                code = await execute(command)
            except OSError as e:
                raise CommandFailedError(command) from e
            if code != 0:
                raise CommandFailedError(command, code)
            self._echo("DONE", fg="green")
            self._echo()
        logger.info("Finished all commands", count=len(commands))

    def write_manifest(self) -> Path | None:
        """Writes the rewritten package.json into the output directory."""
        if not self.separate_out_dir:
            return None
        self._echo(f"> Copying and fixing {MANIFEST_FILENAME} into {self.out_dir}")
        rewrite_manifest(self.manifest, self._out_dir_relative())
        target = self.out_dir / MANIFEST_FILENAME
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(
            json.dumps(self.manifest, indent=2, ensure_ascii=False) + "\n",
            encoding="utf-8",
        )
        self._echo("DONE", fg="green")
        return target

    async def publish(self) -> bool:
        """
        Runs `npm publish` from the output directory.

        Returns False without running anything when publishing is disabled
        or this is a dry run. Raises `PublishError` if the publish fails.
        """
        if not self.publisher_config.publish:
            logger.info("Publishing disabled by configuration")
            return False

        self._echo()
        if self.dry_run:
            self._echo(
                "> " + click.style("Dry-run enabled, not running npm-publish", fg="yellow")
            )
            return False

        command = ExecCommand(self.out_dir, PACKAGE_MANAGER, ("publish",))
        describe(command, color=self.color)
        try:
            exit_code = await execute(command)
        except OSError as e:
            raise PublishError(1) from e
        if exit_code != 0:
            raise PublishError(exit_code)
        self._echo("> " + click.style("PUBLISHED", fg="green"))
        return True

    async def run(self) -> bool:
        logger.info(
            "Orchestrator starting publish run...",
            cwd=str(self.cwd),
            out_dir=str(self.out_dir),
        )
        commands = self.plan_commands()
        await self.run_commands(commands)
        self._echo("> Finished All Commands")
        self.write_manifest()
        return await self.publish()
