"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/scanner.py
Walks a directory tree, hashes every eligible file and groups paths by digest.
Features:
- Deterministic lexical walk: files and subdirectories interleaved by name
- Eligibility and hashing are injected, so both can be swapped in tests
- Non-fatal failures (unreadable files and directories) are returned, not raised
- Progress and cancellation through callbacks, no shared counters
"""

import os
import time
import logging
from typing import List, Optional, Iterator

logger = logging.getLogger(__name__)

# Local imports
from dupes.core.models import (
    DuplicateGroupRegistry, ScanError, ScanErrorKind, ScanResult, ScanRootError, HashError,
    DEFAULT_MAX_SIZE,
)
from dupes.core.interfaces import (
    TreeScanner, EligibilityFilter, Hasher, ProgressCallback, StoppedFlag,
)
from dupes.core.eligibility import EligibilityFilterImpl
from dupes.core.hasher import HasherImpl

HASHING_STAGE = "Hashing"


class TreeScannerImpl(TreeScanner):
    """
    Attributes:
        eligibility: Predicate deciding which files are hashed
        hasher: Computes content digests
    """

    def __init__(self, eligibility: EligibilityFilter = None, hasher: Hasher = None):
        self.eligibility = eligibility or EligibilityFilterImpl()
        self.hasher = hasher or HasherImpl()

    def scan(
            self,
            root: str,
            stopped_flag: Optional[StoppedFlag] = None,
            progress_callback: Optional[ProgressCallback] = None,
            expected_total: Optional[int] = None) -> ScanResult:
        """
        Hashes every eligible file under root and inserts it into a fresh registry.

        Files that fail to hash are recorded as scan errors and left out of every
        group. Directories that cannot be listed are recorded as traversal errors
        and their subtree is skipped.

        Args:
            root: Directory to scan
            stopped_flag: Checked between files; True stops the scan early
            progress_callback: Called once per eligible file with (stage, done, total)
            expected_total: Total passed to progress_callback, usually from count_eligible()

        Raises:
            ScanRootError: If root does not exist or is not a directory
        """
        self._validate_root(root)
        logger.debug(f"Starting scan of {root}")

        result = ScanResult(registry=DuplicateGroupRegistry())
        processed = 0
        start_time = time.time()

        for path in self._walk(root, result.errors):
            if stopped_flag and stopped_flag():
                logger.debug("Scan interrupted by user")
                result.cancelled = True
                break

            try:
                digest = self.hasher.compute_digest(path)
            except HashError as e:
                logger.warning(str(e))
                result.errors.append(ScanError(path=path, reason=e.reason, kind=ScanErrorKind.HASH))
            else:
                result.registry.insert(digest, path)
                result.files_hashed += 1

            processed += 1
            if progress_callback:
                progress_callback(HASHING_STAGE, processed, expected_total)

        logger.info(
            f"Scan finished in {time.time() - start_time:.2f}s: "
            f"{result.files_hashed} files hashed, {len(result.registry)} distinct contents, "
            f"{len(result.errors)} errors"
        )
        return result

    def count_eligible(self, root: str) -> int:
        """
        Number of files scan() would hash. Uses the same walk and the same filter,
        so the two always agree on a tree that does not change in between.
        """
        self._validate_root(root)
        return sum(1 for _ in self._walk(root, []))

    def _walk(self, root: str, errors: List[ScanError]) -> Iterator[str]:
        """
        Yields eligible file paths in lexical order.

        Files and subdirectories of a directory are sorted together by name and a
        subdirectory is descended into at its sorted position, so "a/x.txt" comes
        before "b.txt". Symlinked directories are never followed.
        """
        stack = [iter(self._list_dir(root, errors))]
        while stack:
            entry = next(stack[-1], None)
            if entry is None:
                stack.pop()
                continue

            try:
                is_dir = entry.is_dir(follow_symlinks=False)
            except OSError:
                is_dir = False

            if is_dir:
                stack.append(iter(self._list_dir(entry.path, errors)))
            elif self.eligibility.is_eligible(entry.path):
                yield entry.path

    @staticmethod
    def _list_dir(path: str, errors: List[ScanError]) -> List[os.DirEntry]:
        """Sorted entries of one directory; an unreadable directory is recorded and yields nothing."""
        try:
            with os.scandir(path) as it:
                return sorted(it, key=lambda e: e.name)
        except OSError as err:
            reason = err.strerror or str(err)
            logger.warning(f"Skipping unreadable directory {path}: {reason}")
            errors.append(ScanError(path=str(path), reason=reason, kind=ScanErrorKind.TRAVERSAL))
            return []

    @staticmethod
    def _validate_root(root: str) -> None:
        if not os.path.exists(root):
            error_msg = f"No such directory [{root}]"
            logger.error(error_msg)
            raise ScanRootError(error_msg)
        if not os.path.isdir(root):
            error_msg = f"Not a directory [{root}]"
            logger.error(error_msg)
            raise ScanRootError(error_msg)


def scan_tree(root: str, ignore_dotfiles: bool = False, max_size: int = DEFAULT_MAX_SIZE) -> ScanResult:
    """Scan root with the default SHA-256 hasher."""
    scanner = TreeScannerImpl(EligibilityFilterImpl(max_size=max_size, ignore_dotfiles=ignore_dotfiles))
    return scanner.scan(root)


def count_eligible(root: str, ignore_dotfiles: bool = False, max_size: int = DEFAULT_MAX_SIZE) -> int:
    scanner = TreeScannerImpl(EligibilityFilterImpl(max_size=max_size, ignore_dotfiles=ignore_dotfiles))
    return scanner.count_eligible(root)
