"""
Synchronize plot files between a remote cluster and the local git repository.
"""

import os
import subprocess
from typing import Callable, List, Optional

from config.settings import PLOTS_REMOTE, DEFAULT_FETCH_PATTERNS, DEFAULT_COMMIT_MESSAGE
from utils.logging_utils import Logger

GLOB_CHARS = "*?["
PATTERN_PROMPT = "Enter a file regex/glob to scp from server (leave blank for defaults): "
MESSAGE_PROMPT = f"Commit message (default: {DEFAULT_COMMIT_MESSAGE}): "


class PlotSync:
    """Pull, fetch plots over scp, commit and push."""

    def __init__(
        self,
        remote: str = PLOTS_REMOTE,
        runner: Optional[Callable] = None,
        cwd: str = ".",
        logger: Optional[Logger] = None,
    ):
        self.remote = remote
        self.runner = runner or subprocess.run
        self.cwd = cwd
        self.logger = logger or Logger("push-and-pull")

    def _run(self, cmd: List[str]):
        self.logger.debug("$ " + " ".join(cmd))
        return self.runner(cmd, cwd=self.cwd, check=True)

    @staticmethod
    def destination_for(pattern: str) -> str:
        """Pick the local directory a fetched pattern lands in.

        The leading path segment is used when it is a plain directory name,
        otherwise files land in the current directory.
        """
        if "/" in pattern:
            first = pattern.split("/", 1)[0]
            if first and not any(c in first for c in GLOB_CHARS):
                return first
        return "."

    def pull(self):
        self._run(["git", "pull"])

    def fetch(self, pattern: str = ""):
        """Copy plots from the remote; an empty pattern fetches the defaults."""
        if not pattern:
            self.logger.info(
                "No pattern provided. Fetching defaults: "
                + " and ".join(f"'{p}'" for p in DEFAULT_FETCH_PATTERNS)
            )
            for default in DEFAULT_FETCH_PATTERNS:
                self._run(["scp", "-r", f"{self.remote}{default}", "."])
            return

        self.logger.info(f"Fetching pattern: {pattern}")
        dest = self.destination_for(pattern)
        if dest != ".":
            os.makedirs(os.path.join(self.cwd, dest), exist_ok=True)
        self._run(["scp", "-r", f"{self.remote}{pattern}", f"{dest}/"])

    def stage(self):
        self._run(["git", "add", "."])

    def commit(self, message: str = ""):
        self._run(["git", "commit", "-m", message or DEFAULT_COMMIT_MESSAGE])

    def push(self):
        self._run(["git", "push"])

    def run(
        self,
        pattern: Optional[str] = None,
        message: Optional[str] = None,
        prompt: Optional[Callable[[str], str]] = None,
    ):
        """Execute pull, fetch, stage, commit and push in order.

        Parameters
        ----------
        pattern, message : str, optional
            Fetch pattern and commit message. When ``None`` they are asked
            for through ``prompt`` (after the pull, like the shell tool), or
            fall back to the defaults when no prompt is given.
        prompt : callable, optional
            Interactive reader such as ``input``.

        Raises
        ------
        subprocess.CalledProcessError
            From the first failing command; later steps are not run.
        """
        self.pull()
        if pattern is None:
            pattern = prompt(PATTERN_PROMPT).strip() if prompt else ""
        self.fetch(pattern)
        self.stage()
        if message is None:
            message = prompt(MESSAGE_PROMPT).strip() if prompt else ""
        self.commit(message)
        self.push()
        self.logger.info("Plots synchronized.")
