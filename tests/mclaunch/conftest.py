"""
Shared fixtures: an install directory laid out like a real one, and native archives with digest files.
"""

import hashlib
import json
import pathlib
import zipfile
from typing import Dict

import pytest

from mclaunch.mclaunch_config import LaunchConfig
from mclaunch.mclaunch_logger import MclaunchLogger


def write_native_archive(archive_path: pathlib.Path, entries: Dict[str, bytes]) -> pathlib.Path:
    """Writes a zip archive and its .sha digest file next to it."""
    archive_path.parent.mkdir(parents=True, exist_ok=True)
    with zipfile.ZipFile(archive_path, "w") as archive:
        for name, data in entries.items():
            archive.writestr(name, data)
    digest = hashlib.sha1(archive_path.read_bytes()).hexdigest()
    archive_path.with_name(archive_path.name + ".sha").write_text(digest)
    return archive_path


@pytest.fixture
def logger():
    return MclaunchLogger()


@pytest.fixture
def native_archive_factory():
    return write_native_archive


@pytest.fixture
def manifest_data():
    return {
        "id": "1.6.4",
        "minecraftArguments": "--user ${auth_player_name} --dir ${game_directory}",
        "mainClass": "net.minecraft.client.main.Main",
        "libraries": [
            {"name": "com.example:lib:1.2.3"},
            {
                "name": "org.lwjgl.lwjgl:lwjgl-platform:2.9.0",
                "natives": {"linux": "natives-linux", "windows": "natives-windows", "osx": "natives-osx"},
                "extract": {"exclude": ["META-INF/"]},
            },
            {
                "name": "com.example:osx-only:1.0",
                "rules": [{"action": "allow", "os": {"name": "osx"}}],
            },
        ],
    }


@pytest.fixture
def install_directory(tmp_path, manifest_data):
    """
    An install directory with one ordinary library, one native library for linux,
    the version archive and manifest, and a profile database.
    """
    root = tmp_path / "minecraft"
    libraries = root / "libraries"

    lib = libraries / "com" / "example" / "lib" / "1.2.3" / "lib-1.2.3.jar"
    lib.parent.mkdir(parents=True)
    lib.write_bytes(b"not really a jar")

    write_native_archive(
        libraries / "org" / "lwjgl" / "lwjgl" / "lwjgl-platform" / "2.9.0"
        / "lwjgl-platform-2.9.0-natives-linux.jar",
        {
            "liblwjgl.so": b"\x7fELF native",
            "META-INF/MANIFEST.MF": b"Manifest-Version: 1.0\n",
        },
    )

    version_dir = root / "versions" / "1.6.4"
    version_dir.mkdir(parents=True)
    (version_dir / "1.6.4.jar").write_bytes(b"client")
    (version_dir / "1.6.4.json").write_text(json.dumps(manifest_data))

    (root / "launcher_profiles.json").write_text(
        json.dumps(
            {
                "profiles": {
                    "Default": {"name": "Default", "lastVersionId": "1.6.4"},
                    "Modded": {"name": "Modded", "lastVersionId": "1.5.2"},
                },
                "selectedProfile": "Default",
                "authenticationDatabase": {
                    "uuid-alice": {"displayName": "Alice", "accessToken": "tok-a", "username": "alice@example.com"},
                    "uuid-bob": {"displayName": "Bob", "accessToken": "tok-b"},
                },
                "selectedUser": "uuid-alice",
            }
        )
    )
    return root


@pytest.fixture
def config(install_directory):
    return LaunchConfig(install_directory=str(install_directory), platform="linux")
