# Name lookups over a loaded project graph. Lookups never mutate the graph.

from typing import Optional

from shareext.xcode.model import PBXGroup, PBXNativeTarget, ProjectGraph, XcodeID
from shareext.xcode.utils import unquote


def find_target_by_name(graph: ProjectGraph, name: str) -> Optional[PBXNativeTarget]:
    for target in graph.section(PBXNativeTarget):
        if unquote(target.name) == name:
            return target
    return None


def find_group_by_name(graph: ProjectGraph, name: str) -> Optional[XcodeID]:
    for group_id, group in graph.items(PBXGroup):
        if unquote(group.name) == name:
            return group_id
    return None
