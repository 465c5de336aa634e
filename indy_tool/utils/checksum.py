"""
Checksum utilities.

The md5 recorded by folo is the only integrity contract between the original
build and its replay, so every fetched file goes through ``verify_md5``.
"""

import hashlib
import logging
import os

from .error_handling import ChecksumMismatchError

CHUNK_SIZE = 65536


def calculate_md5(file_path: str) -> str:
    """
    Calculate the md5 checksum of a file.

    Args:
        file_path: Path to the file

    Returns:
        Lower-case hexadecimal md5 digest

    Raises:
        FileNotFoundError: If the file does not exist
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"File not found: {file_path}")

    md5_hash = hashlib.md5(usedforsecurity=False)
    with open(file_path, "rb") as f:
        for chunk in iter(lambda: f.read(CHUNK_SIZE), b""):
            md5_hash.update(chunk)
    return md5_hash.hexdigest()


def verify_md5(file_path: str, expected: str) -> None:
    """
    Verify a file against its expected md5.

    Raises:
        ChecksumMismatchError: If the digests differ
    """
    actual = calculate_md5(file_path)
    if actual != expected.strip().lower():
        raise ChecksumMismatchError(file_path, expected, actual)
    logging.debug("Checksum verified for %s", file_path)


__all__ = ["calculate_md5", "verify_md5"]
