"""
This package contains the core logic for building TypeScript npm projects into
a distribution directory and publishing them from there.
"""

from .commands import (
    BulkCopyCommand,
    CleanCommand,
    Command,
    CopyCommand,
    ExecCommand,
    ScriptCommand,
    describe,
    execute,
)
from .models import CompilerConfig, PublisherConfig
from .packaging.manifest import rewrite_manifest
from .packaging.orchestrator import PublishOrchestrator
from .packaging.paths import normalize
from .packaging.selector import select_files
from .planner import plan

__all__ = [
    "BulkCopyCommand",
    "CleanCommand",
    "Command",
    "CompilerConfig",
    "CopyCommand",
    "ExecCommand",
    "PublishOrchestrator",
    "PublisherConfig",
    "ScriptCommand",
    "describe",
    "execute",
    "normalize",
    "plan",
    "rewrite_manifest",
    "select_files",
]
