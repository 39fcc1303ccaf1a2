from typing import Any


class PublisherError(Exception):
    pass


class ConfigError(PublisherError):
    pass


class CommandConstructionError(PublisherError):
    pass


class CopyError(PublisherError):
    def __init__(self, failures: dict[str, BaseException]) -> None:
        self.failures = failures
        details = "\n".join(f"  {file}: {exc}" for file, exc in failures.items())
        super().__init__(f"Failed to copy {len(failures)} file(s):\n{details}")


class CommandFailedError(PublisherError):
    def __init__(self, command: Any, exit_code: int | None = None) -> None:
        self.command = command
        self.exit_code = exit_code
        if exit_code is None:
            message = f"Error encountered running command: {command}"
        else:
            message = (
                f"Error encountered running command (exit code {exit_code}): {command}"
            )
        super().__init__(message)


class PublishError(PublisherError):
    def __init__(self, exit_code: int) -> None:
        self.exit_code = exit_code
        super().__init__(f"npm publish exited with code {exit_code}")
