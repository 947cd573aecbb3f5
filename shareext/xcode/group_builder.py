# File group construction.

from shareext.details.errors import MissingInputError
from shareext.details.events import Event, EventKind, Observer, null_observer
from shareext.xcode.model import PBXGroup, ProjectGraph, SourceTree
from shareext.xcode.resolver import find_group_by_name
from shareext.xcode.utils import always_quote, quote


def add_group(
    graph: ProjectGraph,
    name: str,
    path: str,
    parent_name: str,
    observer: Observer = null_observer,
) -> PBXGroup:
    """
    Create a group and link it as a child of an existing group.

    Raises:
        ValueError: If a group with this name already exists.
        MissingInputError: If the parent group does not exist. Nothing is
            added to the graph in that case.
    """
    if find_group_by_name(graph, name) is not None:
        raise ValueError(f"group {name} already exists")
    parent_id = find_group_by_name(graph, parent_name)
    if parent_id is None:
        raise MissingInputError(
            f"Could not find the {parent_name} group to add {name} to; "
            "this project layout is not supported."
        )
    parent = graph.get(parent_id, PBXGroup)

    # name and path are always written quoted
    group = graph.add(
        PBXGroup(
            children=[],
            name=always_quote(name),
            path=always_quote(path),
            sourceTree=quote(SourceTree.GROUP.value),
        ),
        key=f"PBXGroup:{name}:{path}",
        comment=name,
    )
    parent.ref_list("children").append(group.ref())
    observer(Event(EventKind.GROUP_CREATED, f"Created group {name} in {parent_name}."))
    return group
