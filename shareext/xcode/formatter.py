"""
Xcode project file formatter.

This module converts a ProjectGraph back into the text of a project file (.pbxproj).
Objects are written in ``/* Begin <isa> section */`` blocks sorted by isa and id,
the way Xcode itself writes them, so a project that was only read and written
again keeps its layout.
"""

import dataclasses
import enum
from typing import Dict, List, Optional

from shareext.xcode.model import (
    PBXUnknownObject,
    ProjectGraph,
    Reference,
    Value,
    XcodeID,
    XcodeObject,
)
from shareext.xcode.utils import quote


# Records Xcode writes on a single line
SINGLE_LINE_ISAS = frozenset({"PBXBuildFile", "PBXFileReference"})

ObjectProperties = Dict[str, Value]


def format_project(graph: ProjectGraph) -> str:
    """
    Convert a ProjectGraph to its string representation.

    Args:
        graph: The project graph to format.

    Returns:
        A string containing the formatted Xcode project file content.
    """
    # Start with the UTF-8 marker
    result = "// !$*UTF8*$!\n{\n"

    top: Dict[str, Value] = dict(graph.header)
    top["rootObject"] = graph.rootObject
    for key in sorted([*top.keys(), "objects"]):
        if key == "objects":
            result += f"\tobjects = {{\n{format_objects(graph)}\t}};\n"
        else:
            result += f"\t{key} = {format_value(top[key], 1)};\n"

    result += "}\n"
    return result


def format_objects(graph: ProjectGraph) -> str:
    sections: Dict[str, List[XcodeObject]] = {}
    for obj in graph.objects.values():
        sections.setdefault(obj.isa, []).append(obj)

    result = ""
    for isa in sorted(sections):
        result += f"\n/* Begin {isa} section */\n"
        for obj in sorted(sections[isa], key=lambda o: o.id):
            single_line = isa in SINGLE_LINE_ISAS
            props = object_properties(obj)
            if single_line:
                body = format_dict_inline(props)
            else:
                body = format_dict(props, 2)
            result += f"\t\t{format_id(obj.id, obj.comment)} = {body};\n"
        result += f"/* End {isa} section */\n"
    return result


def object_properties(obj: XcodeObject) -> ObjectProperties:
    """
    Collect the properties written for an object: isa first, then sorted keys.

    Args:
        obj: The object to collect properties from.

    Returns:
        An ordered dictionary of property name to value.
    """
    if isinstance(obj, PBXUnknownObject):
        props: ObjectProperties = dict(obj.properties)
    else:
        props = dict(obj.extra)
        for field in dataclasses.fields(obj):
            if not field.init:
                continue
            value = getattr(obj, field.name)
            if value is None:
                continue
            props[field.name] = value

    ordered: ObjectProperties = {"isa": obj.isa}
    for key in sorted(props):
        ordered[key] = props[key]
    return ordered


def format_id(object_id: XcodeID, comment: Optional[str]) -> str:
    if comment:
        return f"{object_id} /* {comment} */"
    return object_id


def format_value(value: Value, indent_level: int) -> str:
    """
    Format a value based on its type.

    Args:
        value: The value to format.
        indent_level: The current indentation level.

    Returns:
        A string representing the formatted value.
    """
    # Handle Reference objects
    if isinstance(value, Reference):
        return format_id(value.id, value.comment)

    # Handle Enum values
    elif isinstance(value, enum.Enum):
        return format_enum(value)

    elif isinstance(value, list):
        return format_list(value, indent_level)

    elif isinstance(value, dict):
        return format_dict(value, indent_level)

    elif isinstance(value, bool):
        return "1" if value else "0"

    elif isinstance(value, int):
        return str(value)

    # Strings keep the spelling they were read or created with
    elif isinstance(value, str):
        return value if value else '""'

    else:
        raise TypeError(f"Unsupported type: {type(value).__name__} for value: {value}")


def format_dict(value_dict: Dict[str, Value], indent_level: int) -> str:
    """
    Format a dictionary, one entry per line.

    Args:
        value_dict: The dictionary to format.
        indent_level: The current indentation level.

    Returns:
        A string representing the formatted dictionary.
    """
    indent = "\t" * indent_level
    inner_indent = "\t" * (indent_level + 1)

    result = "{\n"
    for key, value in value_dict.items():
        if value is None:
            continue
        result += f"{inner_indent}{key} = {format_value(value, indent_level + 1)};\n"
    result += f"{indent}}}"
    return result


def format_list(value_list: List[Value], indent_level: int) -> str:
    indent = "\t" * indent_level
    inner_indent = "\t" * (indent_level + 1)

    result = "(\n"
    for item in value_list:
        result += f"{inner_indent}{format_value(item, indent_level + 1)},\n"
    result += f"{indent})"
    return result


def format_inline(value: Value) -> str:
    if isinstance(value, dict):
        return format_dict_inline(value)
    if isinstance(value, list):
        return "(" + "".join(f"{format_inline(item)}, " for item in value) + ")"
    return format_value(value, 0)


def format_dict_inline(value_dict: Dict[str, Value]) -> str:
    entries = "".join(
        f"{key} = {format_inline(value)}; "
        for key, value in value_dict.items()
        if value is not None
    )
    return "{" + entries + "}"


def format_enum(value_enum: enum.Enum) -> str:
    if isinstance(value_enum.value, str):
        return quote(value_enum.value)
    return str(value_enum.value)
