"""
Configuration parameters for the launcher.
"""

import dataclasses
import inspect
import os
import pathlib
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

try:
    import tomllib
except ModuleNotFoundError:
    # Python < 3.11
    import tomli as tomllib

from mclaunch.mclaunch_exceptions import ConfigError
from mclaunch.mclaunch_utils import PlatformUtils

LAUNCHER_PROFILES = "launcher_profiles.json"
VERSIONS_DIR = "versions"
LIBRARIES_DIR = "libraries"
NATIVES_DIR = "natives"

DEFAULT_JVM_FLAGS: Tuple[str, ...] = (
    "-Xmx1G",
    "-XX:+UseConcMarkSweepGC",
    "-XX:+CMSIncrementalMode",
    "-XX:-UseAdaptiveSizePolicy",
    "-Xmn128M",
)


def default_install_directory() -> str:
    return os.path.join(os.path.expanduser("~"), ".minecraft")


@dataclass(frozen=True)
class LaunchConfig:
    """
    Configuration parameters of a single launch. Built once and passed explicitly to every component.
    """

    install_directory: str = field(default_factory=default_install_directory)
    debug: bool = False
    profile: str = ""
    user: str = ""
    last_profile: bool = False
    last_user: bool = False
    java_executable: str = "java"
    jvm_flags: Tuple[str, ...] = DEFAULT_JVM_FLAGS
    platform: Optional[str] = None

    def __post_init__(self) -> None:
        # the client runs with the install directory as its working directory
        object.__setattr__(self, "install_directory", os.path.abspath(self.install_directory))

    @classmethod
    def from_dict(cls, env: Dict[str, Any]) -> "LaunchConfig":
        """
        Create a LaunchConfig instance from a dictionary, ignoring keys that are not configuration parameters
        """
        params = {k: v for k, v in env.items() if k in inspect.signature(cls).parameters and v is not None}
        if "jvm_flags" in params:
            params["jvm_flags"] = tuple(params["jvm_flags"])
        return cls(**params)

    @classmethod
    def from_toml(cls, path: str, **overrides: Any) -> "LaunchConfig":
        """
        Create a LaunchConfig from the [launcher] table of a TOML file. Non-None overrides win over the file.

        Raises:
            ConfigError: If the file cannot be read or parsed
        """
        try:
            with open(path, "rb") as f:
                toml_dict = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise ConfigError(f"failed to load launcher configuration {path}: {e}") from e

        launcher_section = toml_dict.get("launcher", {})
        if not isinstance(launcher_section, dict):
            raise ConfigError(f"'launcher' in {path} must be a table")

        merged = dict(launcher_section)
        merged.update({k: v for k, v in overrides.items() if v is not None})
        return cls.from_dict(merged)

    def replace(self, **changes: Any) -> "LaunchConfig":
        return dataclasses.replace(self, **changes)

    @property
    def platform_name(self) -> str:
        return self.platform or PlatformUtils.get_platform_name()

    @property
    def library_root(self) -> pathlib.Path:
        return pathlib.Path(self.install_directory, LIBRARIES_DIR)

    @property
    def profiles_path(self) -> pathlib.Path:
        return pathlib.Path(self.install_directory, LAUNCHER_PROFILES)

    def version_directory(self, version_id: str) -> pathlib.Path:
        return pathlib.Path(self.install_directory, VERSIONS_DIR, version_id)

    def version_manifest_path(self, version_id: str) -> pathlib.Path:
        return self.version_directory(version_id) / f"{version_id}.json"

    def version_archive_path(self, version_id: str) -> pathlib.Path:
        return self.version_directory(version_id) / f"{version_id}.jar"

    def natives_directory(self, version_id: str) -> pathlib.Path:
        return self.version_directory(version_id) / NATIVES_DIR
