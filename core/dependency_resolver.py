"""
Minimal file closure of a LaTeX project.

Starting from the main document, ``\\input``/``\\include`` targets are
followed breadth-first; ``\\includegraphics`` targets and local ``.sty``,
``.cls``, ``.bst`` and ``.bbl`` files are kept as leaves. Every other file
of the project tree ends up in the remove list.
"""

from collections import deque
from pathlib import Path, PurePosixPath
from typing import Iterable, List, Optional, Sequence

from config.settings import (
    OUT_DIR,
    VCS_DIRS,
    PROTECTED_FILES,
    INCLUDE_EXTENSIONS,
    GRAPHICS_EXTENSIONS,
    PACKAGE_EXT,
    CLASS_EXT,
    BIBSTYLE_EXT,
    BBL_EXT,
)
from core.directive_scanner import DirectiveScanner
from core.errors import MainTexNotFoundError
from models.dependency_data import ResolutionResult, UnresolvedReference
from utils.file_utils import FileUtils
from utils.latex_text_utils import normalize_relpath, read_tex
from utils.logging_utils import Logger


class DependencyResolver:
    """Computes the keep/remove partition of a LaTeX project."""

    def __init__(
        self,
        root_dir: str = ".",
        out_dir: str = OUT_DIR,
        scanner: Optional[DirectiveScanner] = None,
        protected: Iterable[str] = PROTECTED_FILES,
        vcs_dirs: Sequence[str] = VCS_DIRS,
        logger: Optional[Logger] = None,
    ):
        """
        Parameters
        ----------
        root_dir : str, optional
            Project root; all references are resolved relative to it.
        out_dir : str, optional
            Output directory (relative to ``root_dir``), never enumerated.
        scanner : DirectiveScanner, optional
            Directive scanner; built from the configured patterns when omitted.
        protected : iterable of str, optional
            Relative paths that are never put in the remove list.
        vcs_dirs : sequence of str, optional
            Directory names whose subtrees are never enumerated.
        logger : Logger, optional
            Logger for soft misses and progress.

        Raises
        ------
        ScannerUnavailableError
            If no scanner is given and the configured patterns are unusable.
        """
        self.root_dir = Path(root_dir)
        self.out_dir = normalize_relpath(str(out_dir))
        self.scanner = scanner if scanner is not None else DirectiveScanner()
        self.protected = {normalize_relpath(p) for p in protected}
        self.vcs_dirs = tuple(vcs_dirs)
        self.logger = logger or Logger()

    # ------------------------------------------------------------------
    # path helpers
    # ------------------------------------------------------------------
    def _is_file(self, rel: str) -> bool:
        return (self.root_dir / rel).is_file()

    def _relative(self, path: str) -> str:
        """Express ``path`` relative to the project root."""
        p = Path(path)
        if p.is_absolute():
            try:
                p = p.resolve().relative_to(self.root_dir.resolve())
            except ValueError:
                return normalize_relpath(str(path))
        return normalize_relpath(str(p))

    def _resolve_name(self, name: str, extensions: List[str]) -> Optional[str]:
        """Map a logical name to an existing file: exact name first, then each extension."""
        cand = normalize_relpath(name)
        parts = PurePosixPath(cand).parts
        if PurePosixPath(cand).is_absolute() or ".." in parts:
            self.logger.debug(f"Reference outside project ignored: {name}")
            return None
        if self._is_file(cand):
            return cand
        for ext in extensions:
            if self._is_file(cand + ext):
                return cand + ext
        return None

    def _local_aux(self, name: str, ext: str) -> Optional[str]:
        """Return ``name + ext`` when that auxiliary file exists locally."""
        return self._resolve_name(name + ext, [])

    # ------------------------------------------------------------------
    # resolution
    # ------------------------------------------------------------------
    def resolve(self, main_tex: str) -> ResolutionResult:
        """Compute the files needed to typeset ``main_tex`` and everything else.

        Parameters
        ----------
        main_tex : str
            Root document, relative to the project root (or absolute inside it).

        Returns
        -------
        ResolutionResult
            Sorted keep and remove lists plus traversal details.

        Raises
        ------
        MainTexNotFoundError
            If the root document does not exist or lies outside the project root.
        """
        root = self._relative(main_tex)
        root_posix = PurePosixPath(root)
        if root_posix.is_absolute() or ".." in root_posix.parts:
            raise MainTexNotFoundError(f"Main TeX file is outside the project: {main_tex}")
        if not self._is_file(root):
            raise MainTexNotFoundError(f"Main TeX file not found: {main_tex}")

        keep = set()
        visited = set()
        unresolved: List[UnresolvedReference] = []
        queue = deque([root])

        def miss(kind: str, name: str, source: str):
            self.logger.debug(f"Unresolved {kind} reference '{name}' in {source}")
            unresolved.append(UnresolvedReference(kind=kind, name=name, source=source))

        while queue:
            f = queue.popleft()
            if f in visited or not self._is_file(f):
                continue
            visited.add(f)
            keep.add(f)
            self.logger.debug(f"Scanning {f}")

            text = read_tex(self.root_dir / f)
            for d in self.scanner.scan(text, kinds=("include", "graphic", "package", "class")):
                for name in d.names:
                    if d.kind == "include":
                        target = self._resolve_name(name, INCLUDE_EXTENSIONS)
                        if target:
                            queue.append(target)
                        else:
                            miss(d.kind, name, f)
                    elif d.kind == "graphic":
                        target = self._resolve_name(name, GRAPHICS_EXTENSIONS)
                        if target:
                            keep.add(target)
                        else:
                            miss(d.kind, name, f)
                    else:
                        # packages and classes without a local file are system-installed
                        ext = PACKAGE_EXT if d.kind == "package" else CLASS_EXT
                        target = self._local_aux(name, ext)
                        if target:
                            keep.add(target)

        # The bibliography is tied to the main file, not discovered by scanning.
        bbl = normalize_relpath(str(PurePosixPath(root).with_suffix(BBL_EXT)))
        if self._is_file(bbl):
            keep.add(bbl)

        # Only the main document is scanned for \bibliographystyle.
        for name in self.scanner.names(read_tex(self.root_dir / root), "bibstyle"):
            target = self._local_aux(name, BIBSTYLE_EXT)
            if target:
                keep.add(target)

        all_files = FileUtils.list_project_files(
            self.root_dir, exclude_dirs=self.vcs_dirs, exclude_paths=[self.out_dir]
        )
        excluded = sorted(p for p in all_files if p in self.protected and p not in keep)
        remove = sorted(p for p in all_files if p not in keep and p not in self.protected)

        return ResolutionResult(
            main_tex=root,
            keep=sorted(keep),
            remove=remove,
            excluded=excluded,
            visited=sorted(visited),
            unresolved=unresolved,
        )
