"""
Build the arXiv submission from a resolved keep/remove partition.
"""

import shlex
import shutil
import subprocess
from pathlib import Path
from typing import Optional

from config.settings import OUT_DIR, CLEANER_COMMANDS
from core.errors import SubmissionError
from models.dependency_data import ResolutionResult
from utils.file_utils import FileUtils
from utils.logging_utils import Logger


CLEANER_MODES = ("auto", "true", "false")
CLEANER_NAME = CLEANER_COMMANDS[0]


class SubmissionBuilder:
    """Copies, prunes, zips and post-processes a LaTeX project."""

    def __init__(self, root_dir: str = ".", out_dir: str = OUT_DIR, logger: Optional[Logger] = None):
        self.root_dir = Path(root_dir)
        self.out_path = self.root_dir / out_dir
        self.logger = logger or Logger()

    @property
    def zip_path(self) -> Path:
        """Archive written next to the output directory."""
        return self.out_path.parent / f"{self.out_path.name}.zip"

    def copy_to_output(self, result: ResolutionResult, force: bool = False) -> Path:
        """Copy every kept file into the output directory.

        Raises
        ------
        SubmissionError
            If the output directory exists and ``force`` is not set, or if it
            is the project root, one of its parents, or holds a kept file.
        """
        self.check_output_dir(result)
        if self.out_path.exists():
            if not force:
                raise SubmissionError(
                    f"Output directory '{self.out_path}' already exists. Use --force to overwrite."
                )
            self.logger.info(f"Removing existing output directory '{self.out_path}'")
            if self.out_path.is_dir():
                shutil.rmtree(self.out_path)
            else:
                self.out_path.unlink()

        self.logger.info(f"Creating output directory: {self.out_path}")
        self.out_path.mkdir(parents=True)

        for src in result.keep:
            self.logger.debug(f"Copy: {src} -> {self.out_path / src}")
        FileUtils.copy_files(self.root_dir, self.out_path, result.keep)

        self.logger.info(f"Submission package created at: {self.out_path}")
        return self.out_path

    def check_output_dir(self, result: ResolutionResult):
        """Refuse output directories whose removal would delete project sources."""
        out = self.out_path.resolve()
        root = self.root_dir.resolve()
        if out == root or out in root.parents:
            raise SubmissionError(f"Output directory '{self.out_path}' must not contain the project root.")
        for rel in result.keep:
            src = (self.root_dir / rel).resolve()
            if out in src.parents:
                raise SubmissionError(
                    f"Output directory '{self.out_path}' contains the kept file '{rel}'."
                )

    def find_cleaner(self) -> Optional[str]:
        """Return the first cleaner command found on PATH."""
        for name in CLEANER_COMMANDS:
            path = shutil.which(name)
            if path:
                return path
        return None

    def prune_in_place(self, result: ResolutionResult) -> list:
        """Delete every file of the remove list from the project."""
        self.logger.info("Pruning in-place...")
        for rel in result.remove:
            self.logger.debug(f"Deleting: {rel}")
        removed = FileUtils.remove_files(self.root_dir, result.remove)
        self.logger.info(f"Done pruning ({len(removed)} files deleted).")
        return removed

    def make_zip(self) -> Path:
        """Zip the output directory contents into ``<out_dir>.zip``."""
        self.logger.info(f"Creating zip: {self.zip_path}")
        count = FileUtils.zip_directory(self.out_path, self.zip_path)
        self.logger.info(f"Zip created: {self.zip_path} ({count} files)")
        return self.zip_path

    def run_cleaner(self, mode: str = "auto", extra_args: str = "") -> bool:
        """Run ``arxiv_latex_cleaner`` on the output directory.

        Parameters
        ----------
        mode : str
            ``auto`` runs the cleaner only when it is installed, ``true``
            requires it, ``false`` never runs it.
        extra_args : str
            Additional command-line arguments, split shell-style.

        Returns
        -------
        bool
            ``True`` when the cleaner ran successfully.
        """
        if mode not in CLEANER_MODES:
            raise SubmissionError(f"Unknown cleaner mode: {mode}")
        if mode == "false":
            return False

        cleaner_cmd = self.find_cleaner()
        if not cleaner_cmd:
            if mode == "true":
                self.logger.error(
                    f"{CLEANER_NAME} not found. Install with: pip install arxiv-latex-cleaner"
                )
            else:
                self.logger.info(f"{CLEANER_NAME} not found; skipping (auto).")
            return False

        args = shlex.split(extra_args) if extra_args else []
        suffix = f" with args: {extra_args}" if extra_args else ""
        self.logger.info(f"Running {cleaner_cmd} on '{self.out_path}'{suffix}")
        try:
            subprocess.run([cleaner_cmd, str(self.out_path), *args], check=True)
        except (subprocess.CalledProcessError, OSError) as e:
            self.logger.error(f"{CLEANER_NAME} failed: {e}")
            return False
        return True
