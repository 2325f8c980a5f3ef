"""
Infrastructure layer for gitopolis.

Contains abstractions for external systems:
- GitClient: reading remotes from working copies
- Shell resolution and invocation building for exec
- Streaming and capturing process executors

These provide clean interfaces that can be mocked for testing.
"""

from .git_client import GitClient
from .shell import (
    ShellKind,
    ShellResolution,
    ExecInvocation,
    resolve_shell,
    build_invocation,
)
from .process import stream_command, capture_command

__all__ = [
    'GitClient',
    'ShellKind',
    'ShellResolution',
    'ExecInvocation',
    'resolve_shell',
    'build_invocation',
    'stream_command',
    'capture_command',
]
