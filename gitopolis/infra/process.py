"""
Running one exec invocation in one repository.

Two executors:

- stream_command: forwards the child's stdout and stderr live. Both pipes
  are drained by their own thread, since reading only one of them lets
  the child block forever once the other fills the OS pipe buffer.
- capture_command: buffers everything and flattens it to one line for
  --oneline output.

stdin is always /dev/null so pagers and prompts don't wait for input.
Failing to spawn or wait on the shell raises ShellSpawnError; a non-zero
exit is just reported in the outcome. If our own output stream fails
(e.g. a closed pipe), the child's output is drained and discarded until
it exits, then the write error is raised from stream_command.
"""

import logging
import subprocess
import sys
import threading
from typing import IO, List, Optional

import click

from ..domain.execution import ExecutionOutcome
from ..exit_codes import ShellSpawnError
from .shell import ExecInvocation

logger = logging.getLogger(__name__)


def _spawn(invocation: ExecInvocation) -> subprocess.Popen:
    logger.debug(f"Spawning in '{invocation.cwd}': {invocation.popen_args()!r}")
    try:
        return subprocess.Popen(
            invocation.popen_args(),
            cwd=invocation.cwd,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            encoding='utf-8',
            errors='replace',
            bufsize=1,
        )
    except OSError as e:
        raise ShellSpawnError(invocation.shell.program, e) from e


def _exit_code(returncode: int) -> Optional[int]:
    # Negative return codes mean the child was killed by a signal
    return returncode if returncode >= 0 else None


def _pump_lines(pipe: Optional[IO[str]], target: IO[str], write_errors: List[OSError]) -> None:
    if pipe is None:
        return
    try:
        for line in pipe:
            if write_errors:
                # Target is gone; keep reading so the child never blocks on a full pipe
                continue
            try:
                target.write(line)
                target.flush()
            except OSError as e:
                write_errors.append(e)
    finally:
        pipe.close()


def stream_command(
    invocation: ExecInvocation,
    stdout: Optional[IO[str]] = None,
    stderr: Optional[IO[str]] = None,
) -> ExecutionOutcome:
    """
    Run a command with its output streamed to our own stdout/stderr.

    Blocks until the child has exited and both pipes are drained. There is
    no timeout: a child that never exits blocks the run.

    Args:
        invocation: What to run and where
        stdout: Stream for the child's stdout, defaults to sys.stdout
        stderr: Stream for the child's stderr, defaults to sys.stderr

    Returns:
        ExecutionOutcome without captured text
    """
    out = stdout or sys.stdout
    err = stderr or sys.stderr

    process = _spawn(invocation)

    out_errors: List[OSError] = []
    err_errors: List[OSError] = []
    threads: List[threading.Thread] = [
        threading.Thread(target=_pump_lines, args=(process.stdout, out, out_errors), daemon=True),
        threading.Thread(target=_pump_lines, args=(process.stderr, err, err_errors), daemon=True),
    ]
    for thread in threads:
        thread.start()

    try:
        returncode = process.wait()
    except OSError as e:
        raise ShellSpawnError(invocation.shell.program, e) from e
    finally:
        for thread in threads:
            thread.join()

    # e.g. BrokenPipeError from `gitopolis exec ... | head`; click's main()
    # turns EPIPE into a quiet exit
    for errors in (out_errors, err_errors):
        if errors:
            raise errors[0]

    exit_code = _exit_code(returncode)
    if returncode != 0:
        if exit_code is None:
            click.echo(f"Command terminated by signal {-returncode}", err=True)
        else:
            click.echo(f"Command exited with code {exit_code}", err=True)

    return ExecutionOutcome(
        repo_path=invocation.cwd,
        exit_success=returncode == 0,
        exit_code=exit_code,
    )


def flatten_output(text: Optional[str]) -> str:
    """Trim text and turn every line break into a single space."""
    if not text:
        return ""
    return text.strip().replace('\r\n', ' ').replace('\n', ' ').replace('\r', ' ')


def compose_oneline(stdout: str, stderr: str, success: bool) -> Optional[str]:
    """
    Combine flattened stdout and stderr into the text of one oneline record.

    stderr is only shown for failed commands, after stdout. Returns None
    when there is nothing to show.
    """
    if not success and stderr:
        return f"{stdout} {stderr}" if stdout else stderr
    return stdout or None


def capture_command(invocation: ExecInvocation) -> ExecutionOutcome:
    """
    Run a command with its output buffered and flattened to one line.

    Args:
        invocation: What to run and where

    Returns:
        ExecutionOutcome with captured_text set (None if no output)
    """
    logger.debug(f"Capturing in '{invocation.cwd}': {invocation.popen_args()!r}")
    try:
        result = subprocess.run(
            invocation.popen_args(),
            cwd=invocation.cwd,
            stdin=subprocess.DEVNULL,
            capture_output=True,
            text=True,
            encoding='utf-8',
            errors='replace',
        )
    except OSError as e:
        raise ShellSpawnError(invocation.shell.program, e) from e

    success = result.returncode == 0
    text = compose_oneline(
        flatten_output(result.stdout),
        flatten_output(result.stderr),
        success,
    )
    return ExecutionOutcome(
        repo_path=invocation.cwd,
        exit_success=success,
        exit_code=_exit_code(result.returncode),
        captured_text=text,
    )
