"""
Centralized configuration for the arXiv cleaner and plot sync tools.

This module defines default file locations, resolution priorities, the
directive grammars scanned in LaTeX sources, external tool names and the
logging flags used throughout the project. Command-line flags override
these per run.
"""

import os

# ================ FILE PATHS ================
MAIN_TEX = "camera_ready.tex"
OUT_DIR = "submission"

# Subtrees that are never enumerated when computing the remove list
VCS_DIRS = (".git",)

# Files the cleaner must never delete (the tool itself)
PROTECTED_FILES = ("clean_arxiv.py",)

# ================ RESOLUTION ORDER ================
INCLUDE_EXTENSIONS = [".tex"]
GRAPHICS_EXTENSIONS = [".pdf", ".png", ".jpg", ".jpeg", ".eps"]

# Local auxiliary files only count when they sit in the project root
PACKAGE_EXT = ".sty"
CLASS_EXT = ".cls"
BIBSTYLE_EXT = ".bst"
BBL_EXT = ".bbl"

# ================ DIRECTIVE GRAMMARS ================
# Group 1 always captures the brace argument.
DIRECTIVE_PATTERNS = {
    "include": r"\\(?:input|include)\{([^}]+)\}",
    "graphic": r"\\includegraphics(?:\[[^\]]*\])?\{([^}]+)\}",
    "package": r"\\usepackage(?:\[[^\]]*\])?\{([^}]+)\}",
    "class": r"\\documentclass(?:\[[^\]]*\])?\{([^}]+)\}",
    "bibstyle": r"\\bibliographystyle\{([^}]+)\}",
}

# ================ EXTERNAL TOOLS ================
CLEANER_COMMANDS = ("arxiv_latex_cleaner", "arxiv-latex-cleaner")  # first one found on PATH wins
RUN_CLEANER = "auto"  # auto | true | false

# ================ PLOT SYNC ================
PLOTS_REMOTE = "klone-node:/gscratch/sewoong/anasery/fingerprinting/oml-exploration/plots/"
DEFAULT_FETCH_PATTERNS = ["detailed", "*.pdf"]
DEFAULT_COMMIT_MESSAGE = "update plots"

# ================ DEBUGGING ================
ENABLE_DEBUG_PRINTS = True
SAVE_LOG_FILE = False
LOG_DIR = "logs"
LOG_LEVEL = "INFO"  # DEBUG, INFO, WARNING, ERROR


def setup_directories():
    """Create the log directory when file logging is enabled."""
    if SAVE_LOG_FILE:
        os.makedirs(LOG_DIR, exist_ok=True)
