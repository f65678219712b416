"""
End-to-end tests of the launch pipeline.
"""

import io
import logging
import os
import pathlib
import sys

import pytest

from mclaunch.launch import ProcessSupervisor
from mclaunch.launch_models import LaunchManifest, RuntimeContext
from mclaunch.launcher import Launcher, launch_from_install
from mclaunch.mclaunch_config import LaunchConfig
from mclaunch.mclaunch_exceptions import LaunchStage


class RecordingSupervisor(ProcessSupervisor):
    """Records the launch instead of spawning a JVM."""

    def __init__(self, logger, exit_code=0):
        super().__init__(logger)
        self.exit_code = exit_code
        self.launch_info = None
        self.natives_seen = None

    async def run(self, launch_info, scratch=None):
        self.launch_info = launch_info
        self.natives_seen = sorted(p.name for p in scratch.path.iterdir())
        scratch.remove()
        return self.exit_code


@pytest.fixture
def manifest(manifest_data):
    return LaunchManifest.from_dict(manifest_data)


@pytest.fixture
def context():
    return RuntimeContext(
        player_name="Alice",
        session_token="tok-a",
        selected_user_id="uuid-alice",
        selected_version_id="1.6.4",
        install_directory="/home/x/game",
    )


@pytest.fixture
def natives_dir(install_directory):
    return install_directory / "versions" / "1.6.4" / "natives"


class TestLauncher:
    """Tests for Launcher."""

    def test_prepare_builds_the_command(self, config, logger, manifest, context, install_directory, natives_dir):
        prepared = Launcher(config, logger).prepare(manifest, context)
        cmd = prepared.launch_info.cmd

        lib = install_directory / "libraries" / "com" / "example" / "lib" / "1.2.3" / "lib-1.2.3.jar"
        classpath = cmd[cmd.index("-cp") + 1].split(os.pathsep)

        assert cmd[0] == "java"
        assert str(lib) in classpath
        assert classpath[-1] == str(install_directory / "versions" / "1.6.4" / "1.6.4.jar")
        assert not any("osx-only" in entry for entry in classpath)
        assert not any("lwjgl-platform" in entry for entry in classpath)
        assert f"-Djava.library.path={natives_dir}" in cmd
        assert cmd[-5:] == ["net.minecraft.client.main.Main", "--user", "Alice", "--dir", "/home/x/game"]

        assert (natives_dir / "liblwjgl.so").read_bytes() == b"\x7fELF native"
        assert not (natives_dir / "META-INF").exists()
        assert prepared.plan.skipped == ["com.example:osx-only:1.0"]

    def test_launch_runs_and_cleans_up(self, config, logger, manifest, context, natives_dir):
        supervisor = RecordingSupervisor(logger, exit_code=7)
        result = Launcher(config, logger, supervisor).launch(manifest, context)

        assert result.succeeded
        assert result.exit_code == 7
        assert supervisor.natives_seen == ["liblwjgl.so"]
        assert not natives_dir.exists()

    def test_integrity_violation_stops_before_launch(
        self, config, logger, manifest, context, install_directory, natives_dir
    ):
        archive = (
            install_directory / "libraries" / "org" / "lwjgl" / "lwjgl" / "lwjgl-platform" / "2.9.0"
            / "lwjgl-platform-2.9.0-natives-linux.jar"
        )
        archive.with_name(archive.name + ".sha").write_text("0" * 40)
        supervisor = RecordingSupervisor(logger)

        result = Launcher(config, logger, supervisor).launch(manifest, context)

        assert not result.succeeded
        assert result.failed_stage == LaunchStage.VERIFICATION
        assert result.exit_code is None
        assert supervisor.launch_info is None
        assert not natives_dir.exists()

    def test_malformed_coordinate_reports_resolution_stage(self, config, logger, manifest_data, context, natives_dir):
        manifest_data["libraries"].append({"name": "bad-format"})
        manifest = LaunchManifest.from_dict(manifest_data)

        result = Launcher(config, logger, RecordingSupervisor(logger)).launch(manifest, context)

        assert result.failed_stage == LaunchStage.RESOLUTION
        assert "bad-format" in str(result.error)
        assert not natives_dir.exists()

    def test_missing_native_archive_reports_verification_stage(self, config, logger, manifest, context):
        config = config.replace(platform="windows")
        result = Launcher(config, logger, RecordingSupervisor(logger)).launch(manifest, context)
        assert result.failed_stage == LaunchStage.VERIFICATION

    def test_spawn_failure_reports_launch_stage(self, config, logger, manifest, context, tmp_path, natives_dir):
        config = config.replace(java_executable=str(tmp_path / "no-such-java"))
        result = Launcher(config, logger).launch(manifest, context)

        assert result.failed_stage == LaunchStage.LAUNCH
        assert result.exit_code is None
        assert not natives_dir.exists()


class TestLaunchFromInstall:
    """Tests for launch_from_install."""

    def test_launches_selected_profile(self, config, logger):
        supervisor = RecordingSupervisor(logger)
        result = launch_from_install(config.replace(last_profile=True, user="Alice"), logger, supervisor)

        assert result.succeeded
        cmd = supervisor.launch_info.cmd
        assert cmd[-4:] == ["--user", "Alice", "--dir", config.install_directory]

    def test_unknown_user(self, config, logger):
        result = launch_from_install(config.replace(last_profile=True, user="Mallory"), logger)

        assert result.failed_stage == LaunchStage.SELECTION
        assert result.error.choices == ["Alice (--lastuser)", "Bob"]

    def test_missing_version_manifest(self, config, logger):
        result = launch_from_install(config.replace(profile="Modded", last_user=True), logger)
        assert result.failed_stage == LaunchStage.CONFIG

    def test_missing_profiles(self, tmp_path, logger, config):
        result = launch_from_install(config.replace(install_directory=str(tmp_path / "empty")), logger)
        assert result.failed_stage == LaunchStage.CONFIG


class InterruptedSupervisor(ProcessSupervisor):
    """Fails with an error that is not a launcher error while the client runs."""

    async def run(self, launch_info, scratch=None):
        raise KeyboardInterrupt()


class TestLauncherCleanup:
    """Tests for scratch cleanup when the run is interrupted."""

    def test_interrupted_run_removes_natives(self, config, logger, manifest, context, natives_dir):
        with pytest.raises(KeyboardInterrupt):
            Launcher(config, logger, InterruptedSupervisor(logger)).launch(manifest, context)
        assert not natives_dir.exists()

    def test_relayed_output_failure_still_reports_result(self, config, logger, manifest, context, natives_dir):
        class ClosedSink(io.BytesIO):
            def write(self, data):
                raise BrokenPipeError(32, "Broken pipe")

        config = config.replace(java_executable=sys.executable, jvm_flags=("-c", "print('x' * 100000)"))
        supervisor = ProcessSupervisor(logger, stdout_sink=ClosedSink(), stderr_sink=io.BytesIO())

        result = Launcher(config, logger, supervisor).launch(manifest, context)

        assert result.succeeded
        assert result.exit_code == 0
        assert not natives_dir.exists()


class TestRelativeInstallDirectory:
    """Tests for launching with an install directory relative to the working directory."""

    def test_paths_are_absolute(self, install_directory, logger, monkeypatch):
        monkeypatch.chdir(install_directory.parent)
        config = LaunchConfig(
            install_directory=install_directory.name, platform="linux", last_profile=True, last_user=True
        )
        supervisor = RecordingSupervisor(logger)

        result = launch_from_install(config, logger, supervisor)

        assert result.succeeded
        info = supervisor.launch_info
        classpath = info.cmd[info.cmd.index("-cp") + 1].split(os.pathsep)
        for entry in classpath:
            assert os.path.isabs(entry)
            assert os.path.exists(entry)
        assert pathlib.Path(info.cwd).resolve() == install_directory.resolve()
        assert pathlib.Path(info.cmd[-1]).resolve() == install_directory.resolve()


class TestLaunchMessage:
    """Tests for the launch log message."""

    def test_names_profile_and_user(self, config, logger, caplog):
        caplog.set_level(logging.INFO, logger="mclaunch")
        result = launch_from_install(config.replace(last_profile=True, user="Alice"), logger, RecordingSupervisor(logger))

        assert result.succeeded
        assert any("Launching Default, with user Alice" in record.getMessage() for record in caplog.records)
