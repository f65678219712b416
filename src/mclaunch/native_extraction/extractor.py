"""
Extraction of verified native archives into the per-launch scratch directory.
"""

import logging
import os
import pathlib
import shutil
import zipfile
import zlib
from typing import List, Sequence, Union

from mclaunch.mclaunch_exceptions import ExtractionError
from mclaunch.mclaunch_logger import MclaunchLogger
from mclaunch.mclaunch_utils import FileUtils


class ScratchNativesDirectory:
    """
    The directory native libraries are extracted to for a single launch.

    It is not namespaced per process: two concurrent launches of the same version share it.
    """

    def __init__(self, path: Union[str, pathlib.Path]):
        self.path = pathlib.Path(path).absolute()

    def create(self) -> None:
        try:
            self.path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ExtractionError(f"failed to create natives directory {self.path}: {e}") from e

    def remove(self) -> None:
        """
        Removes the directory and its contents. Removing a missing directory does nothing.

        Raises:
            CleanupError: If the directory exists but cannot be removed
        """
        FileUtils.remove_tree(str(self.path))

    def exists(self) -> bool:
        return self.path.is_dir()

    def __str__(self) -> str:
        return str(self.path)

    def __repr__(self) -> str:
        return f"ScratchNativesDirectory({self.path})"


class NativeExtractor:
    """
    Unpacks native archives into a ScratchNativesDirectory, skipping entries under excluded prefixes.
    """

    def __init__(self, scratch: ScratchNativesDirectory, logger: MclaunchLogger):
        self.scratch = scratch
        self.logger = logger

    @staticmethod
    def is_excluded(entry_name: str, exclusions: Sequence[str]) -> bool:
        return any(entry_name.startswith(prefix) for prefix in exclusions)

    def _destination(self, entry_name: str) -> pathlib.Path:
        destination = (self.scratch.path / entry_name).resolve()
        root = self.scratch.path.resolve()
        if destination != root and root not in destination.parents:
            raise ExtractionError(f"archive entry {entry_name} escapes {root}")
        return destination

    def extract(
        self,
        archive_path: Union[str, pathlib.Path],
        exclusions: Sequence[str] = (),
    ) -> List[pathlib.Path]:
        """
        Extracts every non-excluded entry of the archive and returns the written files.

        Raises:
            ExtractionError: If the archive cannot be opened or an entry cannot be written
        """
        written: List[pathlib.Path] = []
        try:
            with zipfile.ZipFile(archive_path, "r") as archive:
                for info in archive.infolist():
                    if self.is_excluded(info.filename, exclusions):
                        continue

                    destination = self._destination(info.filename)
                    if info.is_dir():
                        destination.mkdir(parents=True, exist_ok=True)
                        continue

                    destination.parent.mkdir(parents=True, exist_ok=True)
                    with archive.open(info) as source, open(destination, "wb") as target:
                        shutil.copyfileobj(source, target)
                    written.append(destination)
        except (OSError, zipfile.BadZipFile, zlib.error, RuntimeError) as e:
            raise ExtractionError(f"failed to extract native library {archive_path}: {e}") from e

        self.logger.log(
            f"Extracted {len(written)} files from {os.path.basename(str(archive_path))} to {self.scratch}",
            logging.INFO,
        )
        return written
