"""
Core duplicate-detection engine — hasher, eligibility filter, scanner and resolver.

- HasherImpl + Sha256AlgorithmImpl/XXHashAlgorithmImpl: streaming content digests
- EligibilityFilterImpl: regular, non-empty, non-symlink files below a size ceiling
- TreeScannerImpl: deterministic walk filling a DuplicateGroupRegistry
- ResolverImpl + parse_decision: keep one path of a group, delete the rest
- Models: DuplicateGroup, DuplicateGroupRegistry, ScanError, ResolutionOutcome, ...

No terminal I/O in here; the CLI drives everything through callbacks.
"""

from .models import (
    DuplicateGroup, DuplicateGroupRegistry, ScanError, ScanErrorKind, ScanResult, ScanParams,
    Decision, DecisionKind, DeletionError, DeletionPolicy, ResolutionOutcome, ResolutionStatus,
    DupesError, HashError, ScanRootError, ConfigError, DEFAULT_MAX_SIZE)
from .hasher import HasherImpl, Sha256AlgorithmImpl, XXHashAlgorithmImpl, ALGORITHMS, get_algorithm
from .eligibility import EligibilityFilterImpl
from .scanner import TreeScannerImpl, scan_tree, count_eligible
from .resolver import ResolverImpl, parse_decision

__all__ = [
    "DuplicateGroup",
    "DuplicateGroupRegistry",
    "ScanError",
    "ScanErrorKind",
    "ScanResult",
    "ScanParams",
    "Decision",
    "DecisionKind",
    "DeletionError",
    "DeletionPolicy",
    "ResolutionOutcome",
    "ResolutionStatus",
    "DupesError",
    "HashError",
    "ScanRootError",
    "ConfigError",
    "DEFAULT_MAX_SIZE",
    "HasherImpl",
    "Sha256AlgorithmImpl",
    "XXHashAlgorithmImpl",
    "ALGORITHMS",
    "get_algorithm",
    "EligibilityFilterImpl",
    "TreeScannerImpl",
    "scan_tree",
    "count_eligible",
    "ResolverImpl",
    "parse_decision",
]
