"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

utils/convert_utils.py
"""
import math


class ConvertUtils:
    @staticmethod
    def bytes_to_human(size_bytes: int) -> str:
        """
        Convert bytes to human-readable string (e.g., 1.50KB, 3.20MB).
        Uses decimal units, matching the default 500MB ceiling of 500,000,000 bytes.
        """
        if size_bytes < 0:
            return "0B"

        value = float(size_bytes)
        for unit in ["B", "KB", "MB", "GB", "TB"]:
            if value < 1000:
                return f"{value:.2f}{unit}" if unit != "B" else f"{int(value)}B"
            value /= 1000
        return f"{value:.2f}PB"

    @staticmethod
    def human_to_bytes(size_str: str) -> int:
        """
        Convert human-readable size string to bytes.
        Supports formats: '500MB', '1.5GB', '2048KB', '1000', '1K', '1M', '1G', etc.
        Raises ValueError for negative sizes or invalid formats.
        """
        size_str = str(size_str).strip().upper()

        # Define units with both full (KB) and short (K) forms
        units = {
            'TB': 1000 ** 4, 'T': 1000 ** 4,
            'GB': 1000 ** 3, 'G': 1000 ** 3,
            'MB': 1000 ** 2, 'M': 1000 ** 2,
            'KB': 1000, 'K': 1000,
            'B': 1,
        }

        # Check for unit suffix (longest first to avoid 'KB' matching as 'K' + 'B')
        for unit in sorted(units.keys(), key=len, reverse=True):
            if size_str.endswith(unit):
                value_str = size_str[:-len(unit)].strip()
                try:
                    value = float(value_str)
                except ValueError:
                    raise ValueError(f"Invalid numeric value in size: '{value_str}'")

                size_bytes = value * units[unit]
                if not math.isfinite(size_bytes):
                    raise ValueError(f"Size out of range: '{size_str}'")
                if size_bytes < 0:
                    raise ValueError(f"Negative size not allowed: '{size_str}'")
                return int(size_bytes)

        # No unit specified — treat as bytes
        try:
            value = int(size_str)
        except ValueError:
            raise ValueError(f"Invalid size format: '{size_str}'")
        if value < 0:
            raise ValueError(f"Negative size not allowed: '{size_str}'")
        return value
