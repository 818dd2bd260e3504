"""
File utility functions.
"""

import os
import shutil
import zipfile
from pathlib import Path
from typing import Iterable, List, Sequence

import pandas as pd
from tqdm import tqdm

from utils.latex_text_utils import normalize_relpath


class FileUtils:
    """Utility functions for file operations."""

    @staticmethod
    def list_project_files(root_dir, exclude_dirs: Sequence[str] = (), exclude_paths: Iterable[str] = ()) -> List[str]:
        """Enumerate every file under a project root.

        Parameters
        ----------
        root_dir : str or Path
            Project root.
        exclude_dirs : sequence of str, optional
            Directory names pruned at any depth (e.g. ``.git``).
        exclude_paths : iterable of str, optional
            Relative directory paths pruned with their whole subtree.

        Returns
        -------
        list[str]
            Sorted POSIX paths relative to ``root_dir``.
        """
        root_dir = Path(root_dir)
        pruned = {normalize_relpath(p) for p in exclude_paths}
        files: List[str] = []
        for dirpath, dirnames, filenames in os.walk(root_dir):
            rel_dir = Path(dirpath).relative_to(root_dir)
            kept_dirs = []
            for d in sorted(dirnames):
                rel = normalize_relpath(str(rel_dir / d))
                if d in exclude_dirs or rel in pruned:
                    continue
                kept_dirs.append(d)
            dirnames[:] = kept_dirs
            for name in filenames:
                files.append(normalize_relpath(str(rel_dir / name)))
        return sorted(files)

    @staticmethod
    def copy_files(src_root, dst_root, rel_paths: Sequence[str]) -> List[str]:
        """Copy files into ``dst_root`` keeping their relative layout.

        Returns
        -------
        list[str]
            Destination paths written.
        """
        src_root, dst_root = Path(src_root), Path(dst_root)
        written: List[str] = []
        for rel in tqdm(rel_paths, desc="Copying", unit="file", disable=len(rel_paths) < 2):
            dst = dst_root / rel
            dst.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(src_root / rel, dst)
            written.append(str(dst))
        return written

    @staticmethod
    def remove_files(root_dir, rel_paths: Sequence[str]) -> List[str]:
        """Delete files that still exist; returns the relative paths deleted."""
        root_dir = Path(root_dir)
        removed: List[str] = []
        for rel in rel_paths:
            p = root_dir / rel
            if p.is_file():
                p.unlink()
                removed.append(rel)
        return removed

    @staticmethod
    def zip_directory(src_dir, zip_path) -> int:
        """Archive the contents of ``src_dir`` with paths relative to it.

        Returns
        -------
        int
            Number of files written to the archive.
        """
        src_dir = Path(src_dir)
        count = 0
        with zipfile.ZipFile(zip_path, "w", compression=zipfile.ZIP_DEFLATED) as zf:
            for path in sorted(src_dir.rglob("*")):
                if path.is_file():
                    zf.write(path, arcname=path.relative_to(src_dir).as_posix())
                    count += 1
        return count

    @staticmethod
    def save_manifest(records: List[dict], path) -> str:
        """Save keep/remove rows to CSV.

        Parameters
        ----------
        records : list[dict]
            Rows with ``path`` and ``action`` keys.
        path : str or Path
            Target CSV file.

        Returns
        -------
        str
            Path to the saved CSV file.
        """
        df = pd.DataFrame(records, columns=["path", "action"])
        Path(path).parent.mkdir(parents=True, exist_ok=True)
        df.to_csv(path, index=False)
        return str(path)
