"""
Drives a launch: resolution, native verification and extraction, assembly and supervision.

Every failure is fatal to the launch and is reported as a LaunchResult naming the stage
that failed, so that front ends and tests can inspect it without catching exceptions.
"""

import asyncio
import dataclasses
import logging
from typing import Optional

from mclaunch.launch import ArgumentSubstitutor, LaunchAssembler, ProcessLaunchInfo, ProcessSupervisor
from mclaunch.launch_models import LaunchManifest, ProfileData, RuntimeContext
from mclaunch.library_resolution import LibraryResolutionManager, ResolutionPlan
from mclaunch.mclaunch_config import LaunchConfig
from mclaunch.mclaunch_exceptions import LaunchStage, MclaunchException
from mclaunch.mclaunch_logger import MclaunchLogger
from mclaunch.native_extraction import NativeExtractor, ScratchNativesDirectory, SignatureVerifier


@dataclasses.dataclass
class LaunchResult:
    """
    Outcome of a launch. exit_code is the client's exit status, or None if it never ran.
    """

    exit_code: Optional[int] = None
    failed_stage: Optional[LaunchStage] = None
    error: Optional[MclaunchException] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None

    @classmethod
    def failure(cls, error: MclaunchException, exit_code: Optional[int] = None) -> "LaunchResult":
        return cls(exit_code=exit_code, failed_stage=error.stage, error=error)


@dataclasses.dataclass
class PreparedLaunch:
    """
    Everything needed to start the client once natives are in place.
    """

    plan: ResolutionPlan
    scratch: ScratchNativesDirectory
    launch_info: ProcessLaunchInfo


class Launcher:
    """
    Launches the client of a version for a runtime context.
    """

    def __init__(
        self,
        config: LaunchConfig,
        logger: MclaunchLogger,
        supervisor: Optional[ProcessSupervisor] = None,
    ):
        self.config = config
        self.logger = logger
        self.supervisor = supervisor or ProcessSupervisor(logger)
        self.resolution_manager = LibraryResolutionManager(config, logger)
        self.verifier = SignatureVerifier(logger)
        self.assembler = LaunchAssembler(config, logger)

    def scratch_directory(self, context: RuntimeContext) -> ScratchNativesDirectory:
        return ScratchNativesDirectory(self.config.natives_directory(context.selected_version_id))

    def prepare(
        self,
        manifest: LaunchManifest,
        context: RuntimeContext,
        scratch: Optional[ScratchNativesDirectory] = None,
    ) -> PreparedLaunch:
        """
        Resolves the manifest, verifies and extracts its natives and assembles the command.

        The scratch directory is created before any library is processed. It is left in
        place on failure; launch_async removes it on every path.

        Raises:
            MalformedCoordinate, IntegrityViolation, ExtractionError
        """
        scratch = scratch or self.scratch_directory(context)
        scratch.create()

        plan = self.resolution_manager.create_resolution_plan(manifest)

        extractor = NativeExtractor(scratch, self.logger)
        for native in plan.native_archives:
            self.verifier.verify(native.archive_path, native.digest_file_path)
            extractor.extract(native.archive_path, native.exclusions)

        arguments = ArgumentSubstitutor(context).substitute(manifest.argument_template)
        launch_info = self.assembler.build_launch_info(
            plan,
            scratch.path,
            self.config.version_archive_path(context.selected_version_id),
            manifest.main_entry_point,
            arguments,
        )
        return PreparedLaunch(plan=plan, scratch=scratch, launch_info=launch_info)

    async def launch_async(self, manifest: LaunchManifest, context: RuntimeContext) -> LaunchResult:
        """
        Prepares and runs the client, then removes the scratch directory whatever happened.

        Errors that are not MclaunchExceptions, including cancellation, propagate after the cleanup.
        """
        scratch = self.scratch_directory(context)
        result = LaunchResult()
        try:
            try:
                prepared = self.prepare(manifest, context, scratch)
                self.logger.log(
                    f"Launching {context.profile_name or context.selected_version_id}, "
                    f"with user {context.player_name}",
                    logging.INFO,
                )
                result.exit_code = await self.supervisor.run(prepared.launch_info, scratch)
            except MclaunchException as e:
                self.logger.log(f"Launch failed during {e.stage.value}: {e}", logging.ERROR)
                result = LaunchResult.failure(e, result.exit_code)
        finally:
            cleanup_error = self._remove_scratch(scratch)

        if cleanup_error is not None and result.succeeded:
            result = LaunchResult.failure(cleanup_error, result.exit_code)
        return result

    def _remove_scratch(self, scratch: ScratchNativesDirectory) -> Optional[MclaunchException]:
        try:
            scratch.remove()
        except MclaunchException as e:
            self.logger.log(f"Cleanup failed: {e}", logging.ERROR)
            return e
        return None

    def launch(self, manifest: LaunchManifest, context: RuntimeContext) -> LaunchResult:
        return asyncio.run(self.launch_async(manifest, context))


def launch_from_install(
    config: LaunchConfig,
    logger: MclaunchLogger,
    supervisor: Optional[ProcessSupervisor] = None,
) -> LaunchResult:
    """
    Loads launcher_profiles.json and the selected version manifest from the install directory, then launches.
    """
    try:
        profile_data = ProfileData.from_file(config.profiles_path)
        context = profile_data.runtime_context(config)
        manifest = LaunchManifest.from_file(config.version_manifest_path(context.selected_version_id))
    except MclaunchException as e:
        logger.log(f"Launch failed during {e.stage.value}: {e}", logging.ERROR)
        return LaunchResult.failure(e)

    return Launcher(config, logger, supervisor).launch(manifest, context)
