"""
Native library handling.

This package handles:
1. Verifying native archives against their SHA-1 digest files
2. Extracting verified archives into the per-launch scratch directory
"""

from .extractor import NativeExtractor, ScratchNativesDirectory
from .signature import SignatureVerifier

__all__ = ["NativeExtractor", "ScratchNativesDirectory", "SignatureVerifier"]
