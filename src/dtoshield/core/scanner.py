# src/dtoshield/core/scanner.py
import logging
import os
from pathlib import Path
from typing import Iterator, List, Optional

import pathspec

from dtoshield.core.ignore import is_dir_pruned, load_prune_spec
from dtoshield.models import FileRecord, ScanFilter

logger = logging.getLogger(__name__)


class DirectoryScanner:
    def __init__(self, root_dir: Path, scan_filter: ScanFilter, prune_spec: Optional[pathspec.PathSpec] = None):
        self.root_dir = Path(root_dir)
        self.scan_filter = scan_filter
        self.prune_spec = prune_spec if prune_spec is not None else load_prune_spec()

    def _read(self, path: Path) -> Optional[str]:
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.debug("Skipping unreadable file %s: %s", path, e)
            return None

    def scan(self) -> Iterator[FileRecord]:
        """
        Walks the directory tree, pruning hidden and dependency directories,
        and yields a FileRecord for every file passing the scan filter.
        Unreadable directories and files are skipped.
        """
        # os.walk ignores listing errors by default, so a denied subtree is simply dropped
        for root, dirs, files in os.walk(self.root_dir):
            root_path = Path(root)

            # --- 1. Prune Directories (in place, so os.walk never enters them) ---
            for d in list(dirs):
                dir_rel_path = (root_path / d).relative_to(self.root_dir)
                if is_dir_pruned(dir_rel_path, self.prune_spec):
                    logger.debug("Pruning directory: %s", dir_rel_path.as_posix())
                    dirs.remove(d)

            # --- 2. Process Files ---
            for f in files:
                file_abs_path = root_path / f

                # A. Extension check, before any I/O
                if not self.scan_filter.accepts_extension(f):
                    continue

                # B. Filename filter
                if not self.scan_filter.matches_name(f):
                    continue

                if not file_abs_path.is_file():
                    continue

                # C. Read & content marker
                content = self._read(file_abs_path)
                if content is None:
                    continue
                if not self.scan_filter.matches_content(content):
                    continue

                yield FileRecord.from_content(
                    path=file_abs_path,
                    rel_path=file_abs_path.relative_to(self.root_dir).as_posix(),
                    content=content,
                )


def scan_directory(root_dir: Path, scan_filter: ScanFilter, exclude: Optional[List[str]] = None) -> List[FileRecord]:
    """Collects all matching files under root_dir, in traversal order."""
    scanner = DirectoryScanner(root_dir, scan_filter, load_prune_spec(exclude))
    return list(scanner.scan())
