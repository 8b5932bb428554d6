"""
jj integration for jj-status.

This module is the only place that runs the jj executable. Every call
goes through run_jj so that timeouts, logging and the mapping of
failures onto jj-status errors stay in one spot.
"""

from __future__ import annotations

import logging
import subprocess
from typing import List, Optional

from .config import Config
from .errors import JjCommandError, NotARepositoryError

LOG = logging.getLogger(__name__)

# Printed by jj on stderr when run outside of a workspace.
NOT_A_REPOSITORY_MARKER = "There is no jj repo in"


def run_jj(
    args: List[str],
    cwd: Optional[str] = None,
    config: Optional[Config] = None,
) -> subprocess.CompletedProcess[str]:
    """
    Run a jj command and return the completed process.

    Raises NotARepositoryError when jj reports that cwd is not inside a
    workspace, and JjCommandError for any other failure.
    """

    config = config or Config()
    cmd = [config.jj_executable, *args]
    LOG.debug("Running jj command: %s (cwd=%s)", " ".join(cmd), cwd)
    try:
        completed = subprocess.run(
            cmd,
            cwd=cwd,
            check=False,
            text=True,
            capture_output=True,
            timeout=config.timeout,
        )
    except subprocess.TimeoutExpired as exc:
        raise JjCommandError(
            f"jj command timed out after {config.timeout}s: {' '.join(cmd)}"
        ) from exc
    except OSError as exc:
        raise JjCommandError(f"failed to execute {config.jj_executable}: {exc}") from exc

    if completed.returncode != 0:
        error_text = (completed.stderr or completed.stdout or "").strip()
        LOG.debug("jj exited with %d: %s", completed.returncode, error_text)
        if NOT_A_REPOSITORY_MARKER in error_text:
            raise NotARepositoryError(f"not inside a jj repository: {cwd or '.'}")
        raise JjCommandError(f"jj command failed: {' '.join(cmd)}\n{error_text}")

    return completed


def workspace_root(cwd: Optional[str] = None, config: Optional[Config] = None) -> str:
    """
    Return the root directory of the jj workspace containing cwd.
    """

    return run_jj(["root"], cwd=cwd, config=config).stdout.strip()


def get_status(root: str, config: Optional[Config] = None) -> str:
    """
    Return colorized `jj status` output for the workspace at root.
    """

    return run_jj(["status", "--color=always"], cwd=root, config=config).stdout


def get_diff(root: str, config: Optional[Config] = None) -> str:
    """
    Return colorized `jj diff` output rendered by the configured diff tool.
    """

    config = config or Config()
    args = ["diff", "--color=always", "--tool", config.diff_tool]
    return run_jj(args, cwd=root, config=config).stdout
