"""
dupes — interactive duplicate file finder.

Core features:
- Content-addressed grouping (SHA-256 by default, xxHash optional)
- Scan first, then one keep/decline decision per duplicate group
- Permanent removal or the system trash (via send2trash)
- All scan and deletion errors reported once at the end of the run
"""

# Get version
try:
    from importlib.metadata import version as _version
    __version__ = _version("dupes")
except Exception:
    __version__ = "0.0.0"

# Public API — only what users should import directly
from dupes.commands import DuplicateScanCommand, build_resolver
from dupes.core import (
    DuplicateGroup, DuplicateGroupRegistry, ScanError, ScanResult, ScanParams,
    Decision, ResolutionOutcome, ResolutionStatus, DeletionPolicy,
    scan_tree, count_eligible, parse_decision,
)
from dupes.services.file_service import FileService

__all__ = [
    "DuplicateScanCommand",
    "build_resolver",
    "DuplicateGroup",
    "DuplicateGroupRegistry",
    "ScanError",
    "ScanResult",
    "ScanParams",
    "Decision",
    "ResolutionOutcome",
    "ResolutionStatus",
    "DeletionPolicy",
    "scan_tree",
    "count_eligible",
    "parse_decision",
    "FileService",
    "__version__",
]
