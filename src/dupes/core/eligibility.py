"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/eligibility.py
Decides which paths take part in a scan.
A path is eligible when it is a regular file (never a symlink), is not empty,
is smaller than the size ceiling and, with dotfile-ignoring on, is not hidden.
"""

import os
import stat
import logging

from dupes.core.interfaces import EligibilityFilter
from dupes.core.models import DEFAULT_MAX_SIZE

logger = logging.getLogger(__name__)


class EligibilityFilterImpl(EligibilityFilter):
    """
    Attributes:
        max_size: Exclusive upper bound on file size in bytes
        ignore_dotfiles: Skip files whose base name starts with "."
    """

    def __init__(self, max_size: int = DEFAULT_MAX_SIZE, ignore_dotfiles: bool = False):
        self.max_size = max_size
        self.ignore_dotfiles = ignore_dotfiles

    @staticmethod
    def is_hidden(name: str) -> bool:
        return name.startswith(".")

    def is_eligible(self, path: str) -> bool:
        """Dotfile check first, then the file-type and size checks."""
        if self.ignore_dotfiles and self.is_hidden(os.path.basename(path)):
            logger.debug(f"Skipping dotfile: {path}")
            return False

        try:
            st = os.lstat(path)
        except OSError as e:
            logger.debug(f"Could not stat {path}: {e}")
            return False

        if stat.S_ISLNK(st.st_mode):
            logger.debug(f"Skipping symbolic link: {path}")
            return False

        if not stat.S_ISREG(st.st_mode):
            return False

        if st.st_size == 0:
            logger.debug(f"Skipping zero-byte file: {path}")
            return False

        if st.st_size >= self.max_size:
            logger.debug(f"Skipping {path} (size {st.st_size} bytes over limit)")
            return False

        return True
