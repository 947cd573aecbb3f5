# Share extension installation over a loaded project graph.
#
# Ensures the extension target and its group exist, then attaches every
# extension file. Running it again on its own output changes nothing.

from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

from shareext.details.events import Event, EventKind, Observer, null_observer
from shareext.details.files import ExtensionFile
from shareext.xcode.attach import AttachResult, attach_file
from shareext.xcode.group_builder import add_group
from shareext.xcode.model import PBXGroup, PBXNativeTarget, ProductType, ProjectGraph
from shareext.xcode.resolver import find_group_by_name, find_target_by_name
from shareext.xcode.settings import BUNDLE_IDENTIFIER_SETTING, patch_build_setting
from shareext.xcode.target_builder import add_target


@dataclass(frozen=True)
class ExtensionSpec:
    target_name: str
    product_subfolder: str
    group_name: str
    group_path: str
    parent_group_name: str
    bundle_identifier: str
    product_type: ProductType = ProductType.APP_EXTENSION


@dataclass
class InstallResult:
    target: PBXNativeTarget
    group: PBXGroup
    target_created: bool
    group_created: bool
    attached: List[AttachResult] = field(default_factory=list)


def ensure_target(
    graph: ProjectGraph, spec: ExtensionSpec, observer: Observer = null_observer
) -> Tuple[PBXNativeTarget, bool]:
    target = find_target_by_name(graph, spec.target_name)
    if target is not None:
        observer(
            Event(EventKind.TARGET_EXISTS, f"{spec.target_name} target already exists.")
        )
        return target, False

    new_target = add_target(
        graph,
        spec.target_name,
        spec.product_subfolder,
        product_type=spec.product_type,
        observer=observer,
    )
    # only a new target gets its bundle identifier rewritten
    patch_build_setting(
        graph,
        spec.target_name,
        spec.bundle_identifier,
        setting=BUNDLE_IDENTIFIER_SETTING,
        observer=observer,
    )
    return new_target.target, True


def ensure_group(
    graph: ProjectGraph, spec: ExtensionSpec, observer: Observer = null_observer
) -> Tuple[PBXGroup, bool]:
    group_id = find_group_by_name(graph, spec.group_name)
    if group_id is not None:
        observer(
            Event(EventKind.GROUP_EXISTS, f"{spec.group_name} group already exists.")
        )
        return graph.get(group_id, PBXGroup), False

    group = add_group(
        graph,
        spec.group_name,
        spec.group_path,
        spec.parent_group_name,
        observer=observer,
    )
    return group, True


def install_extension(
    graph: ProjectGraph,
    spec: ExtensionSpec,
    files: Sequence[ExtensionFile],
    observer: Observer = null_observer,
) -> InstallResult:
    """
    Add the extension target, its group, and its files to a project graph.

    Args:
        graph: The project graph to mutate.
        spec: Names and identifiers of the extension.
        files: Extension files, attached in the given order.
        observer: Receives progress events.

    Returns:
        What was found, created and attached.

    Raises:
        MissingInputError: If the parent group or a needed build phase is missing.
    """
    target, target_created = ensure_target(graph, spec, observer)
    group, group_created = ensure_group(graph, spec, observer)

    result = InstallResult(
        target=target,
        group=group,
        target_created=target_created,
        group_created=group_created,
    )
    for file in files:
        result.attached.append(attach_file(graph, file, group, target, observer))
    return result
