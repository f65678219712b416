"""
Pydantic data models for the version manifest (versions/<id>/<id>.json).

The manifest describes the libraries a version needs, the rules deciding on which
platforms each library applies, the platform-specific native classifiers and the
command-line template of the client.
"""

import json
import pathlib
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from mclaunch.mclaunch_exceptions import ConfigError

ALLOW = "allow"


class OSRule(BaseModel):
    """The platform a rule applies to. An empty name matches every platform."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    name: str = Field("", description="Platform name: windows, osx, linux")
    version: Optional[str] = Field(None, description="Platform version pattern (not evaluated)")


class Rule(BaseModel):
    """
    A single allow/deny rule attached to a library.

    Any action other than "allow" denies the library.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    action: str = Field(..., description="allow or disallow")
    os: OSRule = Field(default_factory=OSRule)

    @property
    def platform_name(self) -> str:
        return self.os.name

    def applies_to(self, platform: str) -> bool:
        return self.platform_name == "" or self.platform_name == platform

    def is_allow(self) -> bool:
        return self.action == ALLOW


class Library(BaseModel):
    """
    A library entry of the manifest.

    The name is a coordinate of the form group:artifact:version[:classifier]. A library
    is native on a platform when the natives mapping has a non-empty classifier for it.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    name: str = Field(..., description="Coordinate group:artifact:version[:classifier]")
    rules: List[Rule] = Field(default_factory=list)
    natives: Dict[str, str] = Field(default_factory=dict)
    extract: Dict[str, List[str]] = Field(default_factory=dict)

    @property
    def coordinate(self) -> str:
        return self.name

    def native_classifier(self, platform: str) -> Optional[str]:
        """
        Returns the native classifier for the platform, or None if the library is not native there.
        """
        classifier = self.natives.get(platform)
        return classifier or None

    @property
    def extract_exclusions(self) -> List[str]:
        return list(self.extract.get("exclude", []))


class LaunchManifest(BaseModel):
    """
    Top-level model of a version manifest.

    Structure:
    {
      "minecraftArguments": "--username ${auth_player_name} ...",
      "libraries": [Library, ...],
      "mainClass": "net.minecraft.client.main.Main",
      ...
    }
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    argument_template: str = Field("", alias="minecraftArguments")
    dependencies: List[Library] = Field(default_factory=list, alias="libraries")
    main_entry_point: str = Field(..., alias="mainClass")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LaunchManifest":
        """
        Validate an already-decoded manifest.

        Raises:
            ConfigError: If the data does not describe a manifest
        """
        try:
            return cls(**data)
        except ValidationError as e:
            raise ConfigError(f"failed to decode version manifest: {e}") from e

    @classmethod
    def from_file(cls, path: Union[str, pathlib.Path]) -> "LaunchManifest":
        """
        Read and validate a manifest JSON file.

        Raises:
            ConfigError: If the file cannot be opened, decoded or validated
        """
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except OSError as e:
            raise ConfigError(f"failed to open version manifest {path}: {e}") from e
        except json.JSONDecodeError as e:
            raise ConfigError(f"failed to decode version manifest {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"version manifest {path} is not a JSON object")
        return cls.from_dict(data)
