"""
Directive scanning for LaTeX sources.
"""

import re
from typing import Dict, List, Optional

from config.settings import DIRECTIVE_PATTERNS
from core.errors import ScannerUnavailableError
from models.dependency_data import Directive
from utils.latex_text_utils import strip_comments_text, split_names


DIRECTIVE_KINDS = ("include", "graphic", "package", "class", "bibstyle")


class DirectiveScanner:
    """Finds file-referencing directives in comment-stripped LaTeX text."""

    def __init__(self, patterns: Optional[Dict[str, str]] = None):
        """Compile one regular expression per directive kind.

        Parameters
        ----------
        patterns : dict, optional
            Mapping of directive kind to a pattern whose group 1 captures the
            brace argument; defaults to ``DIRECTIVE_PATTERNS``.

        Raises
        ------
        ScannerUnavailableError
            If a kind has no pattern or a pattern fails to compile.
        """
        patterns = DIRECTIVE_PATTERNS if patterns is None else patterns
        self.compiled: Dict[str, re.Pattern] = {}
        for kind in DIRECTIVE_KINDS:
            pattern = patterns.get(kind)
            if not pattern:
                raise ScannerUnavailableError(f"No pattern configured for '{kind}' directives")
            try:
                self.compiled[kind] = re.compile(pattern)
            except re.error as e:
                raise ScannerUnavailableError(f"Invalid pattern for '{kind}' directives: {e}") from e

    def scan(self, text: str, kinds=DIRECTIVE_KINDS) -> List[Directive]:
        """Return the directives of the requested kinds, in document order.

        Comments are stripped line by line before matching, so a directive
        never spans lines.
        """
        found: List[Directive] = []
        for lineno, line in enumerate(strip_comments_text(text), start=1):
            if "\\" not in line:
                continue
            for kind in kinds:
                for m in self.compiled[kind].finditer(line):
                    names = split_names(m.group(1), squeeze=(kind == "package"))
                    if names:
                        found.append(Directive(kind=kind, names=names, line=lineno))
        return found

    def names(self, text: str, kind: str) -> List[str]:
        """Return every name referenced by directives of one kind."""
        return [name for d in self.scan(text, kinds=(kind,)) for name in d.names]
