"""
Launch data models.

This package provides Pydantic data models for parsing the version manifest and the
launcher profile database, and the runtime context built from them.
"""

from .launch_manifest import (
    LaunchManifest,
    Library,
    Rule,
    OSRule,
)
from .launcher_profiles import (
    ProfileData,
    Profile,
    User,
    RuntimeContext,
)

__all__ = [
    # Version manifest
    "LaunchManifest",
    "Library",
    "Rule",
    "OSRule",
    # Launcher profiles
    "ProfileData",
    "Profile",
    "User",
    "RuntimeContext",
]
