"""
Shell selection and command construction for exec.

The shell is resolved once per run into a ShellResolution, then every repo
gets its own ExecInvocation built from it. The strategy depends on the
number of tokens and the kind of shell:

- One command token: handed verbatim to the shell, so pipes, redirection
  and `&&` chains work exactly as typed.
- Several tokens on a POSIX-like shell: the shell runs the fixed script
  "$@" and the tokens follow as positional parameters, so each reaches
  the child untouched with no quoting involved.
- Several tokens on a Windows shell: there are no positional parameters,
  so tokens are joined with a best-effort double-quote heuristic.
"""

import os
import subprocess
import sys
from dataclasses import dataclass
from enum import Enum
from typing import List, Mapping, Optional, Sequence, Tuple, Union

POSITIONAL_SCRIPT = '"$@"'

# Characters that make cmd.exe / PowerShell split or reinterpret a token
WINDOWS_SPECIAL_CHARS = frozenset('"&|')


class ShellKind(Enum):
    """How a shell expects to receive a command."""
    POSIX_LIKE = "posix_like"
    WINDOWS = "windows"


@dataclass(frozen=True)
class ShellResolution:
    """The shell program and the arguments placed before the command."""
    program: str
    fixed_args: Tuple[str, ...]
    kind: ShellKind

    @property
    def posix_like(self) -> bool:
        return self.kind is ShellKind.POSIX_LIKE


def resolve_shell(
    environ: Optional[Mapping[str, str]] = None,
    platform: Optional[str] = None,
) -> ShellResolution:
    """
    Pick the shell to run exec commands with.

    Policy, first match wins:
    1. $SHELL, run with -c
    2. On Windows inside PowerShell (PSModulePath set): powershell -NoLogo -c
    3. On Windows: %COMSPEC% (cmd.exe) /s /c
    4. /bin/sh -c

    Args:
        environ: Environment to read, defaults to os.environ
        platform: Platform name, defaults to sys.platform

    Returns:
        ShellResolution for the whole run
    """
    env = os.environ if environ is None else environ
    platform = sys.platform if platform is None else platform

    shell = env.get('SHELL')
    if shell:
        return ShellResolution(shell, ('-c',), ShellKind.POSIX_LIKE)

    if platform == 'win32':
        if env.get('PSModulePath'):
            return ShellResolution('powershell', ('-NoLogo', '-c'), ShellKind.WINDOWS)
        return ShellResolution(env.get('COMSPEC') or 'cmd.exe', ('/s', '/c'), ShellKind.WINDOWS)

    return ShellResolution('/bin/sh', ('-c',), ShellKind.POSIX_LIKE)


@dataclass(frozen=True)
class ExecInvocation:
    """
    A fully resolved command ready to spawn in one repository.

    command is a single string when the shell interprets it, or a tuple of
    tokens when they are passed as positional parameters.
    """
    shell: ShellResolution
    command: Union[str, Tuple[str, ...]]
    cwd: str

    @property
    def positional(self) -> bool:
        return isinstance(self.command, tuple)

    def popen_args(self) -> Union[List[str], str]:
        """Arguments for subprocess.Popen.

        POSIX-like shells get an argv list. Windows shells get a raw command
        line, since list2cmdline quoting would be re-interpreted by cmd.exe.
        """
        shell = self.shell
        if shell.kind is ShellKind.POSIX_LIKE:
            if self.positional:
                return [shell.program, *shell.fixed_args, POSITIONAL_SCRIPT, '--', *self.command]
            return [shell.program, *shell.fixed_args, self.command]

        prefix = subprocess.list2cmdline([shell.program, *shell.fixed_args])
        if '/s' in shell.fixed_args:
            # /s strips exactly one pair of outer quotes and keeps the rest
            return f'{prefix} "{self.command}"'
        return f'{prefix} {self.command}'


def quote_windows_arg(token: str) -> str:
    """Double-quote a token for cmd.exe/PowerShell if it needs it.

    Heuristic only: quotes tokens with whitespace, '"', '&' or '|' and
    doubles embedded quotes. Not a general shell-safe encoder.
    """
    if token and not any(c.isspace() or c in WINDOWS_SPECIAL_CHARS for c in token):
        return token
    return '"' + token.replace('"', '""') + '"'


def build_invocation(
    shell: ShellResolution,
    command_tokens: Sequence[str],
    repo_path: str,
) -> ExecInvocation:
    """
    Build the invocation for one repo.

    Args:
        shell: Resolution computed once for the run
        command_tokens: The user's command, one or more tokens
        repo_path: Working directory for the child

    Returns:
        ExecInvocation to hand to an executor
    """
    if not command_tokens:
        raise ValueError("exec needs a command to run")

    if len(command_tokens) == 1:
        command: Union[str, Tuple[str, ...]] = command_tokens[0]
    elif shell.kind is ShellKind.POSIX_LIKE:
        command = tuple(command_tokens)
    elif shell.kind is ShellKind.WINDOWS:
        command = ' '.join(quote_windows_arg(t) for t in command_tokens)
    else:
        raise ValueError(f"Unknown shell kind: {shell.kind}")

    return ExecInvocation(shell=shell, command=command, cwd=repo_path)
