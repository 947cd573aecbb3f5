import pytest

from shareext.details.errors import MissingInputError
from shareext.details.events import EventKind, RecordingObserver
from shareext.xcode.attach import attach_file
from shareext.xcode.group_builder import add_group
from shareext.xcode.target_builder import add_target


@pytest.fixture
def new_target(graph):
    return add_target(graph, "ShareExt", "ShareExtension")


@pytest.fixture
def group(graph):
    return add_group(graph, "ShareExtension", "ShareExtension", "CustomTemplate")


class TestAttachFile:
    def test_source_goes_to_sources_phase(self, graph, new_target, group, make_file):
        result = attach_file(graph, make_file("ShareViewController.m"), group, new_target.target)
        assert group.children == [result.file_ref.ref()]
        assert new_target.sources_phase.files == [result.build_file.ref()]
        assert new_target.resources_phase.files == []
        assert result.build_file.comment == "ShareViewController.m in Sources"
        assert result.file_ref.lastKnownFileType == "sourcecode.c.objc"
        assert result.file_ref.fileEncoding == 4
        assert result.file_ref.sourceTree == '"<group>"'

    def test_header_goes_to_sources_phase(self, graph, new_target, group, make_file):
        result = attach_file(graph, make_file("ShareViewController.h"), group, new_target.target)
        assert new_target.sources_phase.files == [result.build_file.ref()]

    def test_resource_goes_to_resources_phase(self, graph, new_target, group, make_file):
        result = attach_file(
            graph, make_file("MainInterface.storyboard"), group, new_target.target
        )
        assert new_target.resources_phase.files == [result.build_file.ref()]
        assert new_target.sources_phase.files == []
        assert result.build_file.comment == "MainInterface.storyboard in Resources"
        assert result.file_ref.lastKnownFileType == "file.storyboard"
        assert result.file_ref.fileEncoding is None

    def test_plist_joins_group_only(self, graph, new_target, group, make_file):
        result = attach_file(
            graph, make_file("ShareExtension-Info.plist"), group, new_target.target
        )
        assert result.build_file is None
        assert group.children == [result.file_ref.ref()]
        assert new_target.sources_phase.files == []
        assert new_target.resources_phase.files == []

    def test_attaching_twice_changes_nothing(self, graph, new_target, group, make_file):
        file = make_file("ShareViewController.m")
        first = attach_file(graph, file, group, new_target.target)
        count = len(graph.objects)

        observer = RecordingObserver()
        second = attach_file(graph, file, group, new_target.target, observer)
        assert not second.added_to_group
        assert not second.added_to_phase
        assert second.file_ref is first.file_ref
        assert second.build_file is first.build_file
        assert len(graph.objects) == count
        assert len(group.children) == 1
        assert observer.kinds() == [EventKind.FILE_EXISTS]

    def test_missing_phase_leaves_group_untouched(self, graph, new_target, group, make_file):
        new_target.target.buildPhases.remove(new_target.resources_phase.ref())
        with pytest.raises(MissingInputError) as e:
            attach_file(graph, make_file("MainInterface.storyboard"), group, new_target.target)
        assert "Resources" in str(e.value)
        assert group.children == []

    def test_added_event(self, graph, new_target, group, make_file):
        observer = RecordingObserver()
        attach_file(graph, make_file("ShareViewController.m"), group, new_target.target, observer)
        assert observer.kinds() == [EventKind.FILE_ADDED]
