"""
Supervision of the client process: spawning, output relaying, waiting and cleanup.
"""

import asyncio
import logging
import os
import sys
from typing import BinaryIO, Optional

from mclaunch.mclaunch_exceptions import LaunchFailure
from mclaunch.mclaunch_logger import MclaunchLogger
from mclaunch.launch.assembler import ProcessLaunchInfo
from mclaunch.native_extraction import ScratchNativesDirectory

RELAY_CHUNK_SIZE = 4096


class ProcessSupervisor:
    """
    Spawns the client, mirrors its stdout and stderr to the given sinks and waits for it to exit.

    The relays are joined after the process exits and before the scratch directory is
    removed, so no buffered output is lost.
    """

    def __init__(
        self,
        logger: MclaunchLogger,
        stdout_sink: Optional[BinaryIO] = None,
        stderr_sink: Optional[BinaryIO] = None,
    ):
        self.logger = logger
        self.stdout_sink = stdout_sink
        self.stderr_sink = stderr_sink

    async def _relay(self, source: asyncio.StreamReader, sink: Optional[BinaryIO]) -> None:
        """
        Copies the source to the sink until EOF. Once the sink fails, the rest of the
        output is read and dropped so the client never blocks on a full pipe.
        """
        while True:
            chunk = await source.read(RELAY_CHUNK_SIZE)
            if not chunk:
                break
            if sink is None:
                continue
            try:
                sink.write(chunk)
                sink.flush()
            except OSError as e:
                self.logger.log(f"Dropping client output: {e}", logging.WARNING)
                sink = None

    async def run(
        self,
        launch_info: ProcessLaunchInfo,
        scratch: Optional[ScratchNativesDirectory] = None,
    ) -> int:
        """
        Runs the process to completion and returns its exit status untranslated.

        Raises:
            LaunchFailure: If the process cannot be spawned
        """
        # sinks default to the streams of the parent at the time of the launch
        stdout_sink = self.stdout_sink if self.stdout_sink is not None else sys.stdout.buffer
        stderr_sink = self.stderr_sink if self.stderr_sink is not None else sys.stderr.buffer
        env = {**os.environ, **launch_info.env} if launch_info.env else None
        try:
            process = await asyncio.create_subprocess_exec(
                *launch_info.cmd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                env=env,
                cwd=launch_info.cwd,
            )
        except OSError as e:
            raise LaunchFailure(f"error occurred while running {launch_info.cmd[0]}: {e}") from e

        self.logger.log(f"Client process started (PID: {process.pid})", logging.INFO)

        relays = [
            asyncio.create_task(self._relay(process.stdout, stdout_sink)),
            asyncio.create_task(self._relay(process.stderr, stderr_sink)),
        ]
        try:
            return_code = await process.wait()
            await asyncio.gather(*relays)
        finally:
            for relay in relays:
                relay.cancel()
            if process.returncode is None:
                try:
                    process.kill()
                except ProcessLookupError:
                    pass
            if scratch is not None:
                scratch.remove()

        self.logger.log(f"Client process exited with code {return_code}", logging.INFO)
        return return_code
