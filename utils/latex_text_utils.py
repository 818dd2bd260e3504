import re
from pathlib import Path, PurePosixPath
from typing import List

# A % after an even run of backslashes starts a comment; an odd run escapes it
_COMMENT_RE = re.compile(r"(?<!\\)((?:\\\\)*)%.*$")


def strip_comments(line: str) -> str:
    """Remove a LaTeX comment from a single line.

    Parameters
    ----------
    line : str
        One line of LaTeX source (without its newline).

    Returns
    -------
    str
        The line truncated at the first unescaped ``%``.
    """
    return _COMMENT_RE.sub(r"\1", line)


def strip_comments_text(text: str) -> List[str]:
    """Return the comment-stripped lines of a LaTeX document."""
    return [strip_comments(line) for line in text.splitlines()]


def split_names(argument: str, squeeze: bool = False) -> List[str]:
    """Split a directive argument such as ``{amsmath, mystyle}`` into names.

    Whitespace around each name is dropped and empty entries are skipped.
    With ``squeeze`` all embedded whitespace is removed as well.
    """
    names = []
    for part in argument.split(","):
        name = re.sub(r"\s+", "", part) if squeeze else part.strip()
        if name:
            names.append(name)
    return names


def read_tex(path: Path) -> str:
    """Read a LaTeX source as text, ignoring undecodable bytes."""
    return path.read_text(encoding="utf-8", errors="ignore")


def normalize_relpath(path: str) -> str:
    """Normalize a relative path to POSIX form without a leading ``./``."""
    return str(PurePosixPath(path.replace("\\", "/")))
