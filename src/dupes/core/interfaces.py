"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

interfaces.py

Defines core interfaces (Protocols) used throughout the duplicate finder.

Key Components:
---------------
- HashAlgorithm: Incremental digest factory (SHA-256, xxHash).
- Hasher: Computes the content digest of one file.
- EligibilityFilter: Decides whether a path takes part in the scan.
- TreeScanner: Walks a directory tree and fills a DuplicateGroupRegistry.
- Resolver: Turns a duplicate group plus a decision into deletions.
"""

from typing import Protocol, Optional, Callable
from dupes.core.models import DuplicateGroup, Decision, ResolutionOutcome, ScanResult


ProgressCallback = Callable[[str, int, Optional[int]], None]
StoppedFlag = Callable[[], bool]
Remover = Callable[[str], None]


class HashState(Protocol):
    def update(self, data: bytes) -> None: ...
    def hexdigest(self) -> str: ...


class HashAlgorithm(Protocol):
    """
    Interface for generic hash algorithms.

    Allows plugging in different hashing functions without affecting the rest
    of the scanning logic. Implementations return a fresh incremental state so
    files can be streamed chunk by chunk.
    """
    name: str

    @staticmethod
    def new() -> HashState:
        ...


class Hasher(Protocol):
    """Interface for hashing the full content of a file."""
    def compute_digest(self, path: str) -> str: ...


class EligibilityFilter(Protocol):
    """Opaque predicate deciding if a path should be considered at all."""
    def is_eligible(self, path: str) -> bool: ...


class TreeScanner(Protocol):
    """
    Interface for scanning a directory tree into a registry of groups.
    """
    def scan(
        self,
        root: str,
        stopped_flag: Optional[StoppedFlag] = None,
        progress_callback: Optional[ProgressCallback] = None,
        expected_total: Optional[int] = None
    ) -> ScanResult:
        """
        Args:
            root: Directory to walk recursively.
            stopped_flag: Function that returns True if the scan should stop.
            progress_callback: Optional callback (stage, current, total).
            expected_total: Total reported to progress_callback, if known.

        Returns:
            ScanResult with the registry and every non-fatal scan error.
        """
        ...

    def count_eligible(self, root: str) -> int:
        ...


class Resolver(Protocol):
    def resolve(self, group: DuplicateGroup, decision: Decision) -> ResolutionOutcome: ...
