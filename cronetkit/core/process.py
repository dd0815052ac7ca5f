"""
External process execution.

Every external tool the pipeline drives (fetch scripts, gn, ninja, sdkmanager,
git) goes through these helpers. Output is streamed to the terminal, no
timeout is applied, and a non-zero exit is turned into ExternalToolError.
"""

import logging
import os
import subprocess
from pathlib import Path
from typing import Mapping, Optional, Sequence, Union

from cronetkit.core.exceptions import ExternalToolError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def _merged_env(env: Optional[Mapping[str, str]]):
    if not env:
        return None
    merged = os.environ.copy()
    merged.update(env)
    return merged


def run_command(
    args: Sequence[PathLike],
    cwd: Optional[PathLike] = None,
    env: Optional[Mapping[str, str]] = None,
) -> None:
    """
    Run a command, inheriting stdout/stderr.

    Args:
        args: Command and arguments
        cwd: Working directory
        env: Extra environment variables, layered over os.environ

    Raises:
        ExternalToolError: If the command exits non-zero or cannot be started
    """
    cmd = [str(a) for a in args]
    logger.debug(f"Running: {' '.join(cmd)} (cwd={cwd})")

    try:
        result = subprocess.run(cmd, cwd=cwd, env=_merged_env(env))
    except OSError as e:
        raise ExternalToolError(cmd, -1, str(e)) from e

    if result.returncode != 0:
        raise ExternalToolError(cmd, result.returncode)


def run_command_output(
    args: Sequence[PathLike],
    cwd: Optional[PathLike] = None,
    env: Optional[Mapping[str, str]] = None,
) -> str:
    """
    Run a command and return its stdout; stderr goes to the terminal.

    Raises:
        ExternalToolError: If the command exits non-zero or cannot be started
    """
    cmd = [str(a) for a in args]
    logger.debug(f"Running: {' '.join(cmd)} (cwd={cwd})")

    try:
        result = subprocess.run(
            cmd, cwd=cwd, env=_merged_env(env), stdout=subprocess.PIPE, text=True
        )
    except OSError as e:
        raise ExternalToolError(cmd, -1, str(e)) from e

    if result.returncode != 0:
        raise ExternalToolError(cmd, result.returncode)

    return result.stdout


def command_succeeds(args: Sequence[PathLike], cwd: Optional[PathLike] = None) -> bool:
    """Run a probe command quietly and report whether it exited zero."""
    cmd = [str(a) for a in args]
    logger.debug(f"Probing: {' '.join(cmd)}")

    try:
        result = subprocess.run(
            cmd, cwd=cwd, stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL
        )
    except OSError:
        return False

    return result.returncode == 0
