"""
SHA-1 verification of native archives against their companion digest files.
"""

import hashlib
import logging
import pathlib
from typing import Union

from mclaunch.mclaunch_exceptions import IntegrityViolation
from mclaunch.mclaunch_logger import MclaunchLogger

HEX_DIGITS = b"0123456789abcdef"
DIGEST_LENGTH = 40
CHUNK_SIZE = 64 * 1024


class SignatureVerifier:
    """
    Verifies an archive against a digest file holding its SHA-1 as 40 lowercase hex characters.
    """

    def __init__(self, logger: MclaunchLogger):
        self.logger = logger

    @staticmethod
    def read_signature(digest_file_path: Union[str, pathlib.Path]) -> bytes:
        try:
            with open(digest_file_path, "rb") as f:
                signature = f.read(DIGEST_LENGTH)
        except OSError as e:
            raise IntegrityViolation(f"failed to read native library signature: {e}") from e
        if len(signature) != DIGEST_LENGTH:
            raise IntegrityViolation(
                f"failure while reading native library signature: {digest_file_path} is truncated"
            )
        return signature

    @staticmethod
    def compute_digest(archive_path: Union[str, pathlib.Path]) -> bytes:
        sha1 = hashlib.sha1()
        try:
            with open(archive_path, "rb") as f:
                for chunk in iter(lambda: f.read(CHUNK_SIZE), b""):
                    sha1.update(chunk)
        except OSError as e:
            raise IntegrityViolation(f"failure when reading compressed native library: {e}") from e
        return sha1.digest()

    def verify(
        self,
        archive_path: Union[str, pathlib.Path],
        digest_file_path: Union[str, pathlib.Path],
    ) -> None:
        """
        Raises:
            IntegrityViolation: If either file cannot be read or the digests differ
        """
        signature = self.read_signature(digest_file_path)
        digest = self.compute_digest(archive_path)

        # byte i of the digest is spelled by signature characters 2i (high nibble) and 2i+1 (low nibble)
        for i, b in enumerate(digest):
            if HEX_DIGITS[b >> 4] != signature[2 * i] or HEX_DIGITS[b & 15] != signature[2 * i + 1]:
                raise IntegrityViolation(
                    f"signature verification failed on {pathlib.Path(archive_path).name}, "
                    f"expecting {signature.decode('ascii', errors='replace')}"
                )

        self.logger.log(f"Verified {archive_path}", logging.DEBUG)
