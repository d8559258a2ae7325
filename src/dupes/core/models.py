"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/models.py
Data models for content-addressed duplicate detection and resolution.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Optional, Iterator
from enum import Enum


DEFAULT_MAX_SIZE = 500_000_000  # Files must be strictly smaller than this


# =============================
# Exceptions
# =============================

class DupesError(Exception):
    """Base class for all dupes errors."""


class HashError(DupesError):
    """Raised when a file cannot be opened or read while hashing."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Failed to hash {path}: {reason}")
        self.path = path
        self.reason = reason


class ScanRootError(DupesError):
    """Raised when the scan root is missing or is not a directory."""


class ConfigError(DupesError):
    """Raised for unreadable or invalid configuration."""


# =============================
# Enums
# =============================

class ScanErrorKind(Enum):
    HASH = "hash"
    TRAVERSAL = "traversal"


class DecisionKind(Enum):
    KEEP = "keep"
    DECLINE = "decline"


class ResolutionStatus(Enum):
    """
    Result of resolving one group.
    """
    KEPT = "kept"
    DECLINED = "declined"
    INVALID_INDEX = "invalid-index"
    DELETION_FAILED = "deletion-failed"
    SKIPPED = "skipped"  # Group has a single path, nothing to resolve


class DeletionPolicy(Enum):
    """
    What the resolver does after a failed deletion inside one group.
    """
    CONTINUE = "continue"  # Attempt every deletion, report every failure
    ABORT = "abort"        # Stop at the first failure, later paths stay on disk


# ======================
#  Core Data Models
# ======================

class DuplicateGroup:
    """
    All known files sharing one content digest.

    Paths are kept in discovery order. Their positions are the indices shown to
    the user and the ones a "keep" decision refers to, so the list is only ever
    appended to while the tree is scanned and never reordered afterwards.
    """

    __slots__ = ("_digest", "paths")

    def __init__(self, digest: str, first_path: str):
        if not digest:
            raise ValueError("Digest cannot be empty")
        if not first_path:
            raise ValueError("A group must be created with its first path")
        self._digest = digest
        self.paths: List[str] = [first_path]

    @property
    def digest(self) -> str:
        return self._digest

    @property
    def duplicate_count(self) -> int:
        """How many files are in this group."""
        return len(self.paths)

    def add_path(self, path: str) -> None:
        self.paths.append(path)

    def is_duplicate(self) -> bool:
        """True if this group contains at least two files."""
        return self.duplicate_count > 1

    def index(self) -> List[str]:
        """Enumerated "[i] path" lines, in the order used for keep decisions."""
        return [f"[{i}] {p}" for i, p in enumerate(self.paths)]

    def __eq__(self, other):
        if not isinstance(other, DuplicateGroup):
            return NotImplemented
        return self._digest == other._digest and self.paths == other.paths

    def __repr__(self):
        return f"<DuplicateGroup digest={self._digest[:12]}, count={len(self.paths)}>"


class DuplicateGroupRegistry:
    """
    Mapping from digest to DuplicateGroup.

    Owned by the scan that fills it. Not safe for use from more than one thread:
    insert() is a read-then-write on the underlying dict.
    """

    def __init__(self):
        self._groups: Dict[str, DuplicateGroup] = {}

    def insert(self, digest: str, path: str) -> DuplicateGroup:
        """Create a group for an unseen digest or append the path to the existing one."""
        group = self._groups.get(digest)
        if group is None:
            group = DuplicateGroup(digest, path)
            self._groups[digest] = group
        else:
            group.add_path(path)
        return group

    def get(self, digest: str) -> Optional[DuplicateGroup]:
        return self._groups.get(digest)

    def groups(self) -> List[DuplicateGroup]:
        return list(self._groups.values())

    def duplicates(self) -> List[DuplicateGroup]:
        """Groups holding more than one path."""
        return [g for g in self._groups.values() if g.is_duplicate()]

    @property
    def file_count(self) -> int:
        return sum(len(g.paths) for g in self._groups.values())

    def __contains__(self, digest: str) -> bool:
        return digest in self._groups

    def __len__(self) -> int:
        return len(self._groups)

    def __iter__(self) -> Iterator[DuplicateGroup]:
        return iter(self._groups.values())

    def __repr__(self):
        return f"<DuplicateGroupRegistry groups={len(self._groups)}, files={self.file_count}>"


@dataclass(frozen=True)
class ScanError:
    """A non-fatal failure on one path during the scan."""
    path: str
    reason: str
    kind: ScanErrorKind = ScanErrorKind.HASH

    def __str__(self):
        if self.kind == ScanErrorKind.TRAVERSAL:
            return f"Cannot read {self.path}: {self.reason}"
        return f"Failed to hash {self.path}: {self.reason}"


@dataclass
class ScanResult:
    registry: DuplicateGroupRegistry
    errors: List[ScanError] = field(default_factory=list)
    files_hashed: int = 0
    cancelled: bool = False

    def duplicates(self) -> List[DuplicateGroup]:
        return self.registry.duplicates()


@dataclass(frozen=True)
class Decision:
    """
    A user decision for one duplicate group.
    """
    kind: DecisionKind
    index: Optional[int] = None

    @classmethod
    def keep(cls, index: int) -> "Decision":
        return cls(DecisionKind.KEEP, index)

    @classmethod
    def affirmative(cls) -> "Decision":
        """Keep the first-discovered path."""
        return cls(DecisionKind.KEEP, 0)

    @classmethod
    def decline(cls) -> "Decision":
        return cls(DecisionKind.DECLINE)


@dataclass(frozen=True)
class DeletionError:
    path: str
    reason: str

    def __str__(self):
        return f"Failed to remove {self.path}: {self.reason}"


@dataclass
class ResolutionOutcome:
    status: ResolutionStatus
    kept_index: Optional[int] = None
    removed: List[str] = field(default_factory=list)
    errors: List[DeletionError] = field(default_factory=list)
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.status in (ResolutionStatus.KEPT, ResolutionStatus.DECLINED)


"""
DTO for scan parameters with built-in validation.
"""

@dataclass
class ScanParams:
    """Parameters for one scan-and-resolve run."""
    root_dir: str
    ignore_dotfiles: bool = False
    max_size_bytes: int = DEFAULT_MAX_SIZE
    algorithm: str = "sha256"
    find_only: bool = False
    use_trash: bool = False
    stop_on_error: bool = False

    def __post_init__(self):
        """Validate parameters immediately after creation."""
        if not self.root_dir:
            raise ValueError("Root directory cannot be empty")

        if self.max_size_bytes <= 0:
            raise ValueError("Maximum size must be positive")

        self.algorithm = self.algorithm.strip().lower()

    @property
    def deletion_policy(self) -> DeletionPolicy:
        return DeletionPolicy.ABORT if self.stop_on_error else DeletionPolicy.CONTINUE
