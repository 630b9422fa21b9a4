"""
Transform hook run between acquisition and selection.

The configured command runs once through the shell with the working
directory as its root. A non-zero exit, a timeout or a failure to start
the command aborts the run.
"""

import logging
import os
import signal
import subprocess

from ..exceptions import TransformFailed
from ..models.context import RunContext
from ..utils.constants import STDERR_TAIL_LINES
from ..utils.logger import progress_level


def _tail(output: str, lines: int = STDERR_TAIL_LINES) -> str:
    """Return the last lines of command output."""
    return "\n".join(output.strip().splitlines()[-lines:])


def _log_output(stream: str, output: str, level: int) -> None:
    for line in output.strip().splitlines():
        logging.log(level, "  [%s] %s", stream, line)


def _kill_process_group(process: subprocess.Popen) -> None:
    """Kill the shell and every process it started."""
    if not hasattr(os, "killpg"):
        process.kill()
        return
    try:
        os.killpg(process.pid, signal.SIGKILL)
    except ProcessLookupError:
        logging.debug("Process group %d already exited", process.pid)


def run_post_process_script(command: str, cwd: str, context: RunContext) -> subprocess.CompletedProcess:
    """Run the post-process command.

    Args:
        command: Shell command to run
        cwd: Directory the command runs in
        context: Run context (timeout and verbosity)

    Returns:
        CompletedProcess of the successful command

    Raises:
        TransformFailed: If the command exits non-zero, times out or cannot be started
    """
    level = progress_level(context.verbose)
    logging.log(level, "Running post-processing script: %s", command)
    logging.debug("Post-processing working directory: %s (timeout: %gs)", cwd, context.timeout)

    try:
        # A new session makes the shell a process group leader, so a timeout
        # can kill the commands it spawned along with it
        process = subprocess.Popen(
            command,
            shell=True,
            cwd=cwd,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            start_new_session=True,
        )
    except OSError as e:
        raise TransformFailed(command, reason=str(e)) from e

    try:
        stdout, stderr = process.communicate(timeout=context.timeout)
    except subprocess.TimeoutExpired as e:
        _kill_process_group(process)
        _, stderr = process.communicate()
        raise TransformFailed(command, timeout=context.timeout, stderr=_tail(stderr or "")) from e

    completed = subprocess.CompletedProcess(command, process.returncode, stdout, stderr)

    if context.verbose:
        _log_output("stdout", completed.stdout, level)
        _log_output("stderr", completed.stderr, level)

    if completed.returncode != 0:
        raise TransformFailed(command, returncode=completed.returncode, stderr=_tail(completed.stderr))

    logging.log(level, "Post-processing script completed successfully")
    return completed


__all__ = ["run_post_process_script"]
