import pytest

from shareext.details.errors import MissingInputError
from shareext.details.events import EventKind, RecordingObserver
from shareext.xcode.formatter import format_project
from shareext.xcode.group_builder import add_group
from shareext.xcode.model import PBXGroup
from shareext.xcode.parser import parse_project
from shareext.xcode.resolver import find_group_by_name

MAIN_GROUP = "29B97314FDCFA39411CA2CEA"


class TestAddGroup:
    def test_group_is_linked_once(self, graph):
        group = add_group(graph, "ShareExtension", "ShareExtension", "CustomTemplate")
        parent = graph.get(MAIN_GROUP, PBXGroup)
        assert parent.children.count(group.ref()) == 1
        assert parent.children[-1] == group.ref()

    def test_group_properties(self, graph):
        group = add_group(graph, "ShareExtension", "ShareExtension", "CustomTemplate")
        assert group.name == '"ShareExtension"'
        assert group.path == '"ShareExtension"'
        assert group.sourceTree == '"<group>"'
        assert group.children == []
        assert group.comment == "ShareExtension"

    def test_missing_parent_adds_nothing(self, graph):
        before = set(graph.objects)
        with pytest.raises(MissingInputError) as e:
            add_group(graph, "ShareExtension", "ShareExtension", "NoSuchGroup")
        assert "NoSuchGroup" in str(e.value)
        assert set(graph.objects) == before

    def test_existing_group_is_rejected(self, graph):
        with pytest.raises(ValueError):
            add_group(graph, "Plugins", "Plugins", "CustomTemplate")

    def test_event(self, graph):
        observer = RecordingObserver()
        add_group(graph, "ShareExtension", "ShareExtension", "CustomTemplate", observer)
        assert observer.kinds() == [EventKind.GROUP_CREATED]

    def test_name_with_quotes_survives_write(self, graph):
        group = add_group(graph, 'My "Share"', "ShareExtension", "CustomTemplate")
        assert group.name == '"My \\"Share\\""'
        reparsed = parse_project(format_project(graph))
        assert find_group_by_name(reparsed, 'My "Share"') == group.id
