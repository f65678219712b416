"""
mclaunch assembles and launches the client of a version from its manifest.
"""

from mclaunch.launcher import Launcher, LaunchResult, launch_from_install
from mclaunch.mclaunch_config import LaunchConfig
from mclaunch.mclaunch_logger import MclaunchLogger

__all__ = ["Launcher", "LaunchResult", "launch_from_install", "LaunchConfig", "MclaunchLogger"]
