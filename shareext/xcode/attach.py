# Attaching extension files to a group and to the build phases of a target.
#
# Plist files only join the group. Sources also join the target's Sources
# phase and resources its Resources phase. Existing memberships are reused,
# so attaching the same file twice changes nothing.

from dataclasses import dataclass
from typing import Optional, Type

from shareext.details.errors import MissingInputError
from shareext.details.events import Event, EventKind, Observer, null_observer
from shareext.details.files import ExtensionFile, FileKind
from shareext.xcode.model import (
    FileType,
    PBXBuildFile,
    PBXBuildPhase,
    PBXFileReference,
    PBXGroup,
    PBXNativeTarget,
    PBXResourcesBuildPhase,
    PBXSourcesBuildPhase,
    ProjectGraph,
    SourceTree,
)
from shareext.xcode.utils import quote, unquote

PHASE_FOR_KIND = {
    FileKind.SOURCE: PBXSourcesBuildPhase,
    FileKind.RESOURCE: PBXResourcesBuildPhase,
}

# Text file types get an explicit UTF-8 encoding
_ENCODED_TYPES = frozenset(
    {
        FileType.C_HEADER,
        FileType.OBJC,
        FileType.PLIST,
        FileType.STRINGS,
        FileType.SWIFT,
        FileType.TEXT,
    }
)


@dataclass(frozen=True)
class AttachResult:
    file_ref: PBXFileReference
    build_file: Optional[PBXBuildFile]
    added_to_group: bool
    added_to_phase: bool


def find_file_in_group(
    graph: ProjectGraph, group: PBXGroup, name: str
) -> Optional[PBXFileReference]:
    for ref in group.children or []:
        child = graph.objects.get(ref.id)
        if isinstance(child, PBXFileReference) and name in (
            unquote(child.name),
            unquote(child.path),
        ):
            return child
    return None


def find_build_file(
    graph: ProjectGraph, phase: PBXBuildPhase, file_ref: PBXFileReference
) -> Optional[PBXBuildFile]:
    for ref in phase.files or []:
        build_file = graph.objects.get(ref.id)
        if (
            isinstance(build_file, PBXBuildFile)
            and build_file.fileRef is not None
            and build_file.fileRef.id == file_ref.id
        ):
            return build_file
    return None


def _add_file_reference(
    graph: ProjectGraph, group: PBXGroup, file: ExtensionFile
) -> PBXFileReference:
    file_type = FileType.from_extension(file.extension)
    file_ref = graph.add(
        PBXFileReference(
            fileEncoding=4 if file_type in _ENCODED_TYPES else None,
            lastKnownFileType=quote(file_type.value),
            path=quote(file.name),
            sourceTree=quote(SourceTree.GROUP.value),
        ),
        key=f"PBXFileReference:{group.id}:{file.name}",
        comment=file.name,
    )
    group.ref_list("children").append(file_ref.ref())
    return file_ref


def _target_phase(
    graph: ProjectGraph, target: PBXNativeTarget, kind: Type[PBXBuildPhase]
) -> PBXBuildPhase:
    phase = graph.build_phase(target, kind)
    if phase is None:
        raise MissingInputError(
            f"Target {unquote(target.name)} has no {kind.DEFAULT_NAME} build phase."
        )
    return phase


def attach_file(
    graph: ProjectGraph,
    file: ExtensionFile,
    group: PBXGroup,
    target: PBXNativeTarget,
    observer: Observer = null_observer,
) -> AttachResult:
    """
    Add a file to a group and, depending on its kind, to a build phase of a target.

    Args:
        graph: The project graph to mutate.
        file: The file to attach.
        group: Group the file reference belongs to.
        target: Target whose Sources or Resources phase receives the file.
        observer: Receives progress events.

    Returns:
        The file reference, the build file if any, and what was added.

    Raises:
        MissingInputError: If the target lacks the build phase the file needs.
    """
    kind = file.kind
    phase_kind = PHASE_FOR_KIND.get(kind)
    # resolve the phase first so a failure leaves the group untouched
    phase = _target_phase(graph, target, phase_kind) if phase_kind else None

    file_ref = find_file_in_group(graph, group, file.name)
    added_to_group = file_ref is None
    if file_ref is None:
        file_ref = _add_file_reference(graph, group, file)

    build_file = None
    added_to_phase = False
    if phase is not None:
        build_file = find_build_file(graph, phase, file_ref)
        if build_file is None:
            phase_name = phase.comment or phase.display_name()
            build_file = graph.add(
                PBXBuildFile(fileRef=file_ref.ref()),
                key=f"PBXBuildFile:{file_ref.id}:{phase.id}",
                comment=f"{file.name} in {phase_name}",
            )
            phase.ref_list("files").append(build_file.ref())
            added_to_phase = True

    if added_to_group or added_to_phase:
        observer(Event(EventKind.FILE_ADDED, f"Added {kind.value} file {file.name}."))
    else:
        observer(
            Event(EventKind.FILE_EXISTS, f"{file.name} is already in the project.")
        )
    return AttachResult(
        file_ref=file_ref,
        build_file=build_file,
        added_to_group=added_to_group,
        added_to_phase=added_to_phase,
    )
