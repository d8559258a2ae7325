"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/file_service.py
File removal used by the resolver: permanent removal or the system trash.
"""
import os
from pathlib import Path
from send2trash import send2trash


class FileService:
    """
    Both methods raise FileNotFoundError for a missing path and RuntimeError
    for any other failure, so callers only need to handle those two.
    """

    @staticmethod
    def remove(file_path: str):
        """Permanently removes a file."""
        path = Path(file_path)

        if not path.exists() and not path.is_symlink():
            raise FileNotFoundError(f"File not found: {path}")

        try:
            os.remove(path)
        except OSError as e:
            raise RuntimeError(f"Failed to remove file: {e.strerror or e}") from e

    @staticmethod
    def move_to_trash(file_path: str):
        """Moves a file to the system trash."""
        path = Path(file_path).resolve()

        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        try:
            send2trash(str(path))
        except Exception as e:
            raise RuntimeError(f"Failed to move to trash: {e}") from e
