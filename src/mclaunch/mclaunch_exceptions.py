"""
This module contains the exceptions raised by the mclaunch framework.
"""

from enum import Enum
from typing import List, Optional


class LaunchStage(str, Enum):
    """
    The stage of a launch in which an error was raised
    """

    CONFIG = "config"
    SELECTION = "selection"
    RESOLUTION = "resolution"
    VERIFICATION = "verification"
    EXTRACTION = "extraction"
    LAUNCH = "launch"
    CLEANUP = "cleanup"


class MclaunchException(Exception):
    """
    Base exception for all mclaunch errors. Every error is fatal to the launch that raised it.
    """

    stage: LaunchStage = LaunchStage.LAUNCH

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigError(MclaunchException):
    """The launcher profiles, the version manifest or the configuration file could not be read."""

    stage = LaunchStage.CONFIG


class SelectionError(MclaunchException):
    """No profile or user matches the requested selection."""

    stage = LaunchStage.SELECTION

    def __init__(self, message: str, choices: Optional[List[str]] = None):
        self.choices = choices or []
        super().__init__(f"{message}: {', '.join(self.choices)}")
        self.message = message


class MalformedCoordinate(MclaunchException):
    """A dependency coordinate does not have the form group:artifact[:...]."""

    stage = LaunchStage.RESOLUTION


class IntegrityViolation(MclaunchException):
    """A native archive does not match its digest file, or either could not be read."""

    stage = LaunchStage.VERIFICATION


class ExtractionError(MclaunchException):
    """A native archive could not be unpacked into the scratch directory."""

    stage = LaunchStage.EXTRACTION


class LaunchFailure(MclaunchException):
    """The client process could not be spawned."""

    stage = LaunchStage.LAUNCH


class CleanupError(MclaunchException):
    """The scratch natives directory could not be removed."""

    stage = LaunchStage.CLEANUP
