"""
Library resolution manager.

Filters the manifest libraries through the platform rules and resolves the remaining
ones into classpath entries and native archives.
"""

import logging
from typing import List

from mclaunch.launch_models import LaunchManifest
from mclaunch.mclaunch_config import LaunchConfig
from mclaunch.mclaunch_logger import MclaunchLogger
from mclaunch.library_resolution.coordinates import (
    CoordinateResolver,
    NativeArchiveDescriptor,
    ResolvedClasspathEntry,
)
from mclaunch.library_resolution.rules import RuleEvaluator


class ResolutionPlan:
    """
    The outcome of resolving a manifest for one platform.

    Keeps the manifest order of the classpath entries and of the native archives.
    """

    def __init__(self) -> None:
        self.classpath_entries: List[ResolvedClasspathEntry] = []
        self.native_archives: List[NativeArchiveDescriptor] = []
        self.skipped: List[str] = []

    @property
    def classpath(self) -> List[str]:
        return [str(entry.path) for entry in self.classpath_entries]

    def __repr__(self) -> str:
        return (
            f"ResolutionPlan(classpath={len(self.classpath_entries)}, "
            f"natives={len(self.native_archives)}, skipped={len(self.skipped)})"
        )


class LibraryResolutionManager:
    """
    Builds the ResolutionPlan of a manifest.
    """

    def __init__(self, config: LaunchConfig, logger: MclaunchLogger):
        """
        Args:
            config: The launch configuration, providing the platform and the library root
            logger: Logger for progress messages
        """
        self.config = config
        self.logger = logger
        self.platform = config.platform_name
        self.rule_evaluator = RuleEvaluator(self.platform)
        self.coordinate_resolver = CoordinateResolver(config.library_root)

    def create_resolution_plan(self, manifest: LaunchManifest) -> ResolutionPlan:
        """
        Resolves every library allowed on the current platform.

        Raises:
            MalformedCoordinate: If an allowed library has an unusable coordinate
        """
        plan = ResolutionPlan()
        for library in manifest.dependencies:
            if not self.rule_evaluator.is_allowed(library.rules):
                self.logger.log(
                    f"Skipping {library.coordinate}: not allowed on {self.platform}",
                    logging.DEBUG,
                )
                plan.skipped.append(library.coordinate)
                continue

            resolved = self.coordinate_resolver.resolve(library, self.platform)
            if isinstance(resolved, NativeArchiveDescriptor):
                plan.native_archives.append(resolved)
            else:
                plan.classpath_entries.append(resolved)

        self.logger.log(f"Resolved libraries for {self.platform}: {plan}", logging.INFO)
        return plan
