"""Tests for the project file formatter."""

from shareext.xcode.formatter import format_project, format_value, object_properties
from shareext.xcode.model import PBXBuildFile, PBXGroup, Reference, XcodeID, YesNo
from shareext.xcode.parser import parse_project


SMALL_PROJECT = (
    "// !$*UTF8*$!\n"
    "{\n"
    "\tarchiveVersion = 1;\n"
    "\tclasses = {\n"
    "\t};\n"
    "\tobjectVersion = 46;\n"
    "\tobjects = {\n"
    "\n"
    "/* Begin PBXBuildFile section */\n"
    "\t\tBBBBBBBBBBBBBBBBBBBBBBBB /* main.m in Sources */ = "
    "{isa = PBXBuildFile; fileRef = CCCCCCCCCCCCCCCCCCCCCCCC /* main.m */; };\n"
    "/* End PBXBuildFile section */\n"
    "\n"
    "/* Begin PBXFileReference section */\n"
    "\t\tCCCCCCCCCCCCCCCCCCCCCCCC /* main.m */ = "
    '{isa = PBXFileReference; path = main.m; sourceTree = "<group>"; };\n'
    "/* End PBXFileReference section */\n"
    "\n"
    "/* Begin PBXGroup section */\n"
    "\t\tDDDDDDDDDDDDDDDDDDDDDDDD = {\n"
    "\t\t\tisa = PBXGroup;\n"
    "\t\t\tchildren = (\n"
    "\t\t\t\tCCCCCCCCCCCCCCCCCCCCCCCC /* main.m */,\n"
    "\t\t\t);\n"
    '\t\t\tsourceTree = "<group>";\n'
    "\t\t};\n"
    "/* End PBXGroup section */\n"
    "\n"
    "/* Begin PBXProject section */\n"
    "\t\tAAAAAAAAAAAAAAAAAAAAAAAA /* Project object */ = {\n"
    "\t\t\tisa = PBXProject;\n"
    "\t\t\tmainGroup = DDDDDDDDDDDDDDDDDDDDDDDD;\n"
    "\t\t\ttargets = (\n"
    "\t\t\t);\n"
    "\t\t};\n"
    "/* End PBXProject section */\n"
    "\t};\n"
    "\trootObject = AAAAAAAAAAAAAAAAAAAAAAAA /* Project object */;\n"
    "}\n"
)


# Records written without the properties Xcode usually adds
SPARSE_PROJECT = (
    "// !$*UTF8*$!\n"
    "{\n"
    "\tarchiveVersion = 1;\n"
    "\tobjectVersion = 46;\n"
    "\tobjects = {\n"
    "\n"
    "/* Begin PBXGroup section */\n"
    "\t\tDDDDDDDDDDDDDDDDDDDDDDDD = {\n"
    "\t\t\tisa = PBXGroup;\n"
    '\t\t\tsourceTree = "<group>";\n'
    "\t\t};\n"
    "/* End PBXGroup section */\n"
    "\n"
    "/* Begin PBXProject section */\n"
    "\t\tAAAAAAAAAAAAAAAAAAAAAAAA /* Project object */ = {\n"
    "\t\t\tisa = PBXProject;\n"
    "\t\t\tbuildConfigurationList = EEEEEEEEEEEEEEEEEEEEEEEE /* Configurations */;\n"
    "\t\t\tmainGroup = DDDDDDDDDDDDDDDDDDDDDDDD;\n"
    "\t\t};\n"
    "/* End PBXProject section */\n"
    "\n"
    "/* Begin PBXSourcesBuildPhase section */\n"
    "\t\tFFFFFFFFFFFFFFFFFFFFFFFF /* Sources */ = {\n"
    "\t\t\tisa = PBXSourcesBuildPhase;\n"
    "\t\t\tfiles = (\n"
    "\t\t\t);\n"
    "\t\t};\n"
    "/* End PBXSourcesBuildPhase section */\n"
    "\n"
    "/* Begin XCConfigurationList section */\n"
    "\t\tEEEEEEEEEEEEEEEEEEEEEEEE /* Configurations */ = {\n"
    "\t\t\tisa = XCConfigurationList;\n"
    "\t\t\tbuildConfigurations = (\n"
    "\t\t\t);\n"
    "\t\t};\n"
    "/* End XCConfigurationList section */\n"
    "\t};\n"
    "\trootObject = AAAAAAAAAAAAAAAAAAAAAAAA /* Project object */;\n"
    "}\n"
)


class TestFormatProject:
    def test_round_trip_is_exact_for_xcode_layout(self):
        assert format_project(parse_project(SMALL_PROJECT)) == SMALL_PROJECT

    def test_absent_properties_stay_absent(self):
        """Phases, lists, groups and projects gain no properties they did not have."""
        text = format_project(parse_project(SPARSE_PROJECT))
        assert text == SPARSE_PROJECT
        assert "defaultConfigurationName" not in text
        assert "buildActionMask" not in text
        assert "children" not in text
        assert "targets" not in text

    def test_formatting_is_stable(self, fixture_text):
        once = format_project(parse_project(fixture_text))
        twice = format_project(parse_project(once))
        assert once == twice

    def test_fixture_keeps_every_object(self, graph):
        text = format_project(graph)
        for object_id in graph.objects:
            assert f"\t\t{object_id} " in text

    def test_sections_are_sorted(self, graph):
        text = format_project(graph)
        begins = [line for line in text.splitlines() if line.startswith("/* Begin ")]
        assert begins == sorted(begins)

    def test_single_line_records(self, graph):
        text = format_project(graph)
        line = next(l for l in text.splitlines() if "/* main.m in Sources */ = " in l)
        assert line.endswith("fileRef = 29B97316FDCFA39411CA2CEA /* main.m */; };")

    def test_escaped_strings_survive(self, graph):
        text = format_project(graph)
        assert '\\"$SRCROOT/cordova/lib/copy-www-build-step.js\\"' in text


class TestFormatValue:
    def test_reference_with_comment(self):
        ref = Reference(id=XcodeID("ABC"), comment="Sources")
        assert format_value(ref, 0) == "ABC /* Sources */"

    def test_empty_string_is_quoted(self):
        assert format_value("", 0) == '""'

    def test_enum_value(self):
        assert format_value(YesNo.YES, 0) == "YES"

    def test_list_layout(self):
        assert format_value(["a", "b"], 1) == "(\n\t\ta,\n\t\tb,\n\t)"

    def test_object_properties_put_isa_first(self):
        group = PBXGroup(children=[], name="Group", sourceTree='"<group>"')
        group.extra = {"indentWidth": "4"}
        assert list(object_properties(group)) == [
            "isa",
            "children",
            "indentWidth",
            "name",
            "sourceTree",
        ]

    def test_object_properties_skip_unset_fields(self):
        build_file = PBXBuildFile(fileRef=Reference(id=XcodeID("ABC")))
        assert list(object_properties(build_file)) == ["isa", "fileRef"]
