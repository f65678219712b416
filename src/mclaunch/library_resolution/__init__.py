"""
Library resolution.

This package handles:
1. Evaluating the platform rules of each manifest library
2. Mapping library coordinates to archive paths under the library root
3. Separating classpath libraries from platform-native archives
"""

from .coordinates import (
    CoordinateResolver,
    NativeArchiveDescriptor,
    ResolvedClasspathEntry,
)
from .resolution_manager import LibraryResolutionManager, ResolutionPlan
from .rules import RuleEvaluator

__all__ = [
    "CoordinateResolver",
    "NativeArchiveDescriptor",
    "ResolvedClasspathEntry",
    "LibraryResolutionManager",
    "ResolutionPlan",
    "RuleEvaluator",
]
