"""
This file contains various utility functions like I/O operations and platform detection
"""

import os
import platform
import shutil
from enum import Enum

from mclaunch.mclaunch_exceptions import CleanupError


class PlatformName(str, Enum):
    """
    Platform names as they appear in the "os" field of manifest rules and in the "natives" mapping
    """

    WINDOWS = "windows"
    OSX = "osx"
    LINUX = "linux"


class PlatformUtils:
    """
    This class provides utility functions for platform detection
    """

    @staticmethod
    def get_platform_name() -> str:
        """
        Returns the manifest platform name of the current system. Unknown systems map to their lowercased name.
        """
        system = platform.system()
        if system == "Windows":
            return PlatformName.WINDOWS.value
        elif system == "Darwin":
            return PlatformName.OSX.value
        elif system == "Linux":
            return PlatformName.LINUX.value
        return system.lower()


class FileUtils:
    """
    Utility functions for file operations
    """

    @staticmethod
    def remove_tree(path: str) -> None:
        """
        Removes a directory tree. A missing directory is not an error.
        """
        if not os.path.exists(path):
            return
        try:
            shutil.rmtree(path)
        except OSError as e:
            raise CleanupError(f"failed to remove directory {path}: {e}") from e
