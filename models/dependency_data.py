"""
Data models for LaTeX directives and dependency resolution results.
"""

from dataclasses import dataclass, field
from typing import List, Dict


@dataclass
class Directive:
    """A file-referencing command found in a LaTeX document."""
    kind: str
    names: List[str]
    line: int = 0


@dataclass
class UnresolvedReference:
    """A directive name that did not map to any file on disk."""
    kind: str
    name: str
    source: str


@dataclass
class ResolutionResult:
    """Partition of a project's files into files to keep and files to remove."""
    main_tex: str
    keep: List[str] = field(default_factory=list)
    remove: List[str] = field(default_factory=list)
    excluded: List[str] = field(default_factory=list)
    visited: List[str] = field(default_factory=list)
    unresolved: List[UnresolvedReference] = field(default_factory=list)

    def to_records(self) -> List[Dict[str, str]]:
        """Convert to rows suitable for tabular export.

        Returns
        -------
        list[dict]
            One ``{"path", "action"}`` row per kept or removed file, sorted by path.
        """
        rows = [{"path": p, "action": "keep"} for p in self.keep]
        rows += [{"path": p, "action": "remove"} for p in self.remove]
        return sorted(rows, key=lambda r: r["path"])
