"""
Command orchestrator for duplicate scanning.
Builds the core components from ScanParams and runs count → scan.
"""
import logging
from typing import Optional

from dupes.core.models import ScanParams, ScanResult
from dupes.core.interfaces import ProgressCallback, StoppedFlag
from dupes.core.eligibility import EligibilityFilterImpl
from dupes.core.hasher import HasherImpl, get_algorithm
from dupes.core.scanner import TreeScannerImpl
from dupes.core.resolver import ResolverImpl
from dupes.services.file_service import FileService

logger = logging.getLogger(__name__)


class DuplicateScanCommand:
    """
    Orchestrates the scan:
    1. Build eligibility filter and hasher from params
    2. Count eligible files so progress has a total
    3. Scan and return the registry with every scan error

    Usage:
        params = ScanParams(root_dir="~/Downloads")
        result = DuplicateScanCommand().execute(
            params,
            progress_callback=cli_progress_printer,
        )
        for group in result.duplicates():
            ...
    """

    def build_scanner(self, params: ScanParams) -> TreeScannerImpl:
        eligibility = EligibilityFilterImpl(
            max_size=params.max_size_bytes,
            ignore_dotfiles=params.ignore_dotfiles,
        )
        hasher = HasherImpl(get_algorithm(params.algorithm))
        return TreeScannerImpl(eligibility, hasher)

    def execute(
            self,
            params: ScanParams,
            progress_callback: Optional[ProgressCallback] = None,
            stopped_flag: Optional[StoppedFlag] = None
    ) -> ScanResult:
        """
        Raises:
            ScanRootError: If the root directory is missing
            ValueError: If the algorithm name is unknown
        """
        scanner = self.build_scanner(params)

        total = None
        if progress_callback:
            total = scanner.count_eligible(params.root_dir)
            logger.debug(f"{total} eligible files under {params.root_dir}")

        return scanner.scan(
            params.root_dir,
            stopped_flag=stopped_flag,
            progress_callback=progress_callback,
            expected_total=total,
        )


def build_resolver(params: ScanParams) -> ResolverImpl:
    remover = FileService.move_to_trash if params.use_trash else FileService.remove
    return ResolverImpl(remover=remover, policy=params.deletion_policy)
