"""
Maps library coordinates (group:artifact:version[:classifier]) to archive locations under the library root.
"""

import dataclasses
import pathlib
from typing import List, Optional, Tuple, Union

from mclaunch.launch_models import Library
from mclaunch.mclaunch_exceptions import MalformedCoordinate

ARCHIVE_EXTENSION = ".jar"
DIGEST_SUFFIX = ".sha"


@dataclasses.dataclass(frozen=True)
class ResolvedClasspathEntry:
    """
    An ordinary library archive that goes on the classpath
    """

    coordinate: str
    path: pathlib.Path


@dataclasses.dataclass(frozen=True)
class NativeArchiveDescriptor:
    """
    A platform-native library archive awaiting verification and extraction
    """

    coordinate: str
    archive_path: pathlib.Path
    digest_file_path: pathlib.Path
    exclusions: Tuple[str, ...] = ()


ResolvedLibrary = Union[ResolvedClasspathEntry, NativeArchiveDescriptor]


class CoordinateResolver:
    """
    Resolves coordinates against the library root:
    <root>/<group as path>/<artifact>/<version>/<artifact>-<version>[-<classifier>].jar
    """

    def __init__(self, library_root: Union[str, pathlib.Path]):
        self.library_root = pathlib.Path(library_root).absolute()

    @staticmethod
    def split(coordinate: str) -> Tuple[List[str], List[str]]:
        """
        Splits a coordinate into its group path segments and its artifact segments.

        Raises:
            MalformedCoordinate: If the coordinate has no group part
        """
        pieces = coordinate.split(":", 1)
        if len(pieces) != 2:
            raise MalformedCoordinate(f"unknown library format: {coordinate}")
        group, rest = pieces
        return group.split("."), rest.split(":")

    def resolve_path(self, coordinate: str, classifier: Optional[str] = None) -> pathlib.Path:
        group_segments, artifact_segments = self.split(coordinate)
        filename = "-".join(artifact_segments)
        if classifier:
            filename += "-" + classifier
        filename += ARCHIVE_EXTENSION
        return self.library_root.joinpath(*group_segments, *artifact_segments, filename)

    def resolve(self, library: Library, platform: str) -> ResolvedLibrary:
        """
        Resolves a library to either a classpath entry or, when it has a classifier for the platform, a native archive.
        """
        classifier = library.native_classifier(platform)
        if classifier is None:
            return ResolvedClasspathEntry(
                coordinate=library.coordinate,
                path=self.resolve_path(library.coordinate),
            )

        archive_path = self.resolve_path(library.coordinate, classifier)
        return NativeArchiveDescriptor(
            coordinate=library.coordinate,
            archive_path=archive_path,
            digest_file_path=archive_path.with_name(archive_path.name + DIGEST_SUFFIX),
            exclusions=tuple(library.extract_exclusions),
        )
