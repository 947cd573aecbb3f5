from typing import Any, List
from dataclasses import fields, is_dataclass

from shareext.xcode.model import (
    PBXProject,
    PBXUnknownObject,
    ProjectGraph,
    Reference,
    XcodeObject,
)


def validate_references(graph: ProjectGraph) -> List[str]:
    errors: List[str] = []

    def check_references(obj: Any, context: str):
        if isinstance(obj, Reference):
            if not graph.contains(obj.id):
                errors.append(f"Invalid reference in {context}: {obj.id}")
        elif isinstance(obj, list):
            for index, item in enumerate(obj):
                check_references(item, f"{context}[{index}]")
        elif isinstance(obj, dict):
            for key, value in obj.items():
                check_references(value, f"{context}.{key}")
        elif is_dataclass(obj):
            for field in fields(obj):
                check_references(getattr(obj, field.name), f"{context}.{field.name}")

    def check_kinds(obj: XcodeObject, context: str):
        for name, allowed in obj.REFERENCES.items():
            value = getattr(obj, name)
            refs = value if isinstance(value, list) else [value]
            for ref in refs:
                if not isinstance(ref, Reference):
                    continue
                target = graph.objects.get(ref.id)
                # kinds the model does not type are kept as they are
                if target is None or isinstance(target, PBXUnknownObject):
                    continue
                if target.isa not in allowed:
                    errors.append(
                        f"Invalid reference in {context}.{name}: {ref.id} is a "
                        f"{target.isa}, expected one of {', '.join(allowed)}"
                    )

    for object_id, obj in graph.objects.items():
        context = f"{obj.isa}({object_id})"
        if obj.id != object_id:
            errors.append(f"Object stored under {object_id} has id {obj.id}")
        check_references(obj, context)
        if not isinstance(obj, PBXUnknownObject):
            check_kinds(obj, context)

    root = graph.objects.get(graph.rootObject.id)
    if not isinstance(root, PBXProject):
        errors.append(f"rootObject {graph.rootObject.id} is not a PBXProject")

    return errors
