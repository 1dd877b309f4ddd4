# src/dtoshield/core/ignore.py
import sys
from pathlib import Path
from typing import List, Optional

import pathspec

from dtoshield.config import DEFAULT_PRUNE_PATTERNS


def load_prune_spec(extra_patterns: Optional[List[str]] = None) -> pathspec.GitIgnoreSpec:
    """
    Builds the gitignore-style spec deciding which directories the scanner never enters.
    Hidden directories and node_modules are always pruned; extra gitignore-style
    patterns (e.g. from --exclude) are appended.
    """
    lines = list(DEFAULT_PRUNE_PATTERNS)
    if extra_patterns:
        lines.extend(extra_patterns)

    try:
        return pathspec.GitIgnoreSpec.from_lines(lines)
    except Exception as e:
        print(f"Error parsing exclude patterns: {e}", file=sys.stderr)
        return pathspec.GitIgnoreSpec.from_lines(DEFAULT_PRUNE_PATTERNS)


def is_dir_pruned(rel_dir: Path, spec: pathspec.GitIgnoreSpec) -> bool:
    # Trailing slash so directory-only patterns ("venv/") match
    return spec.match_file(rel_dir.as_posix() + "/")
