"""
Pydantic data models for launcher_profiles.json and the runtime context derived from it.
"""

import json
import os
import pathlib
from typing import Any, Dict, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from mclaunch.mclaunch_config import LaunchConfig
from mclaunch.mclaunch_exceptions import ConfigError, SelectionError


def legacy_assets_directory(install_directory: str) -> str:
    return os.path.join(install_directory, "assets", "virtual", "legacy")


class Profile(BaseModel):
    """A launcher profile, pinned to a version."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    last_version_id: str = Field(..., alias="lastVersionId")
    java_args: Optional[str] = Field(None, alias="javaArgs")


class User(BaseModel):
    """An authenticated user of the authentication database."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    display_name: str = Field(..., alias="displayName")
    access_token: str = Field("", alias="accessToken")


class RuntimeContext(BaseModel):
    """
    Values substituted into the argument template of a launch.
    """

    model_config = ConfigDict(frozen=True)

    player_name: str
    session_token: str
    selected_user_id: str
    selected_version_id: str
    install_directory: str
    assets_directory: str = ""
    profile_name: str = ""

    @model_validator(mode="before")
    @classmethod
    def _default_assets_directory(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("assets_directory") and data.get("install_directory"):
            data = dict(data)
            data["assets_directory"] = legacy_assets_directory(data["install_directory"])
        return data


class ProfileData(BaseModel):
    """
    Top-level model of launcher_profiles.json.

    Structure:
    {
      "profiles": {"<name>": Profile, ...},
      "selectedProfile": "<name>",
      "authenticationDatabase": {"<user id>": User, ...},
      "selectedUser": "<user id>"
    }
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    profiles: Dict[str, Profile] = Field(default_factory=dict)
    selected_profile: str = Field("", alias="selectedProfile")
    users: Dict[str, User] = Field(default_factory=dict, alias="authenticationDatabase")
    selected_user: str = Field("", alias="selectedUser")

    @classmethod
    def from_file(cls, path: Union[str, pathlib.Path]) -> "ProfileData":
        """
        Read and validate launcher_profiles.json.

        Raises:
            ConfigError: If the file cannot be opened, decoded or validated
        """
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except OSError as e:
            raise ConfigError(f"failed to open launcher profiles {path}: {e}") from e
        except json.JSONDecodeError as e:
            raise ConfigError(f"failed to decode profiles {path}: {e}") from e

        try:
            return cls(**data)
        except (TypeError, ValidationError) as e:
            raise ConfigError(f"failed to decode profiles {path}: {e}") from e

    def select_user(self, user: str, use_last: bool = False) -> Tuple[str, User]:
        """
        Returns the (user id, User) pair for a display name or user id, or for the last used user.

        Raises:
            SelectionError: If no user matches. The error lists the available display names.
        """
        user_id = self.selected_user if use_last else user
        if not use_last:
            for uuid, candidate in self.users.items():
                if candidate.display_name == user:
                    user_id = uuid
                    break

        if user_id not in self.users:
            choices = [
                candidate.display_name + (" (--lastuser)" if uuid == self.selected_user else "")
                for uuid, candidate in self.users.items()
            ]
            raise SelectionError(
                "incorrect or no user selected, please choose one of the following", choices
            )
        return user_id, self.users[user_id]

    def select_profile(self, profile: str, use_last: bool = False) -> Tuple[str, Profile]:
        """
        Returns the (profile name, Profile) pair for a profile name, or for the last used profile.

        Raises:
            SelectionError: If no profile matches. The error lists the available profile names.
        """
        name = self.selected_profile if use_last else profile
        if name not in self.profiles:
            choices = [
                p + (" (--lastprofile)" if p == self.selected_profile else "")
                for p in self.profiles
            ]
            raise SelectionError(
                "incorrect or no profile selected, please choose one of the following", choices
            )
        return name, self.profiles[name]

    def runtime_context(self, config: LaunchConfig) -> RuntimeContext:
        """
        Selects the user and profile named by the configuration and builds the runtime context of the launch.
        """
        user_id, user = self.select_user(config.user, config.last_user)
        profile_name, profile = self.select_profile(config.profile, config.last_profile)
        return RuntimeContext(
            player_name=user.display_name,
            session_token=user.access_token,
            selected_user_id=user_id,
            selected_version_id=profile.last_version_id,
            install_directory=config.install_directory,
            profile_name=profile_name,
        )
