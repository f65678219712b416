"""
Assembly of the client command line.
"""

import dataclasses
import logging
import os
import pathlib
import shlex
from typing import Dict, List, Sequence, Union

from mclaunch.mclaunch_config import LaunchConfig
from mclaunch.mclaunch_logger import MclaunchLogger
from mclaunch.library_resolution import ResolutionPlan


@dataclasses.dataclass
class ProcessLaunchInfo:
    """
    This class is used to store the information required to launch a process.
    """

    # The command to launch the process, executable first
    cmd: List[str]

    # The environment variables to add to the inherited environment of the process.
    # The assembler leaves it empty; callers may fill it before handing the info to the supervisor.
    env: Dict[str, str] = dataclasses.field(default_factory=dict)

    # The working directory for the process
    cwd: str = dataclasses.field(default_factory=os.getcwd)


class LaunchAssembler:
    """
    Composes the argument vector: JVM flags, library path, classpath, main class, then the client arguments.
    """

    def __init__(self, config: LaunchConfig, logger: MclaunchLogger):
        self.config = config
        self.logger = logger

    def assemble(
        self,
        plan: ResolutionPlan,
        natives_directory: Union[str, pathlib.Path],
        version_archive: Union[str, pathlib.Path],
        main_entry_point: str,
        arguments: Sequence[str],
    ) -> List[str]:
        classpath = plan.classpath + [str(version_archive)]
        return [
            *self.config.jvm_flags,
            f"-Djava.library.path={natives_directory}",
            "-cp",
            os.pathsep.join(classpath),
            main_entry_point,
            *arguments,
        ]

    def build_launch_info(
        self,
        plan: ResolutionPlan,
        natives_directory: Union[str, pathlib.Path],
        version_archive: Union[str, pathlib.Path],
        main_entry_point: str,
        arguments: Sequence[str],
    ) -> ProcessLaunchInfo:
        args = self.assemble(plan, natives_directory, version_archive, main_entry_point, arguments)
        cmd = [self.config.java_executable, *args]
        if self.config.debug:
            # the command carries the session token
            self.logger.log(f"Launch command: {shlex.join(cmd)}", logging.INFO)
        return ProcessLaunchInfo(cmd=cmd, cwd=self.config.install_directory)
