"""Shared fixtures: a parsed Cordova project and a Cordova project tree on disk."""

import plistlib
from pathlib import Path
from typing import List

import pytest

from shareext.config import PLUGIN_ID
from shareext.details.files import ExtensionFile
from shareext.xcode.extension import ExtensionSpec
from shareext.xcode.parser import parse_project

FIXTURES = Path(__file__).parent / "fixtures"

EXTENSION_FILES = {
    "ShareViewController.h": '#define SHAREEXT_GROUP_IDENTIFIER @"__GROUP_IDENTIFIER__"\n'
    '#define SHAREEXT_APP_URL_SCHEME @"__URL_SCHEME__"\n',
    "ShareViewController.m": '#import "ShareViewController.h"\n'
    "// __DISPLAY_NAME__ share extension\n",
    "ShareExtension-Info.plist": "<plist><dict>"
    "<key>CFBundleDisplayName</key><string>__DISPLAY_NAME__</string>"
    "<key>CFBundleIdentifier</key><string>__BUNDLE_IDENTIFIER__</string>"
    "<key>CFBundleShortVersionString</key><string>__BUNDLE_SHORT_VERSION_STRING__</string>"
    "<key>CFBundleVersion</key><string>__BUNDLE_VERSION__</string>"
    "<key>NSExtensionActivationRule</key><string>__UNIFORM_TYPE_IDENTIFIER__</string>"
    "</dict></plist>\n",
    "MainInterface.storyboard": "<document>__DISPLAY_NAME__</document>\n",
    "ShareExt.entitlements": "<plist>__GROUP_IDENTIFIER__</plist>\n",
}


@pytest.fixture
def fixture_text() -> str:
    return (FIXTURES / "HelloCordova.pbxproj").read_text(encoding="utf-8")


@pytest.fixture
def graph(fixture_text):
    return parse_project(fixture_text)


@pytest.fixture
def spec() -> ExtensionSpec:
    return ExtensionSpec(
        target_name="ShareExt",
        product_subfolder="ShareExtension",
        group_name="ShareExtension",
        group_path="ShareExtension",
        parent_group_name="CustomTemplate",
        bundle_identifier="io.cordova.hellocordova.shareextension",
    )


def _make_file(name: str) -> ExtensionFile:
    extension = name[name.rfind("."):] if "." in name else ""
    return ExtensionFile(name=name, path=Path("ShareExtension") / name, extension=extension)


@pytest.fixture
def make_file():
    return _make_file


@pytest.fixture
def extension_files() -> List[ExtensionFile]:
    return [_make_file(name) for name in sorted(EXTENSION_FILES)]


@pytest.fixture
def cordova_project(tmp_path, fixture_text) -> Path:
    """A Cordova project with the iOS platform and the plugin sources installed."""
    root = tmp_path / "app"
    ios = root / "platforms" / "ios"
    (ios / "HelloCordova.xcodeproj").mkdir(parents=True)
    (ios / "HelloCordova.xcodeproj" / "project.pbxproj").write_text(
        fixture_text, encoding="utf-8"
    )
    (ios / "HelloCordova").mkdir()
    with open(ios / "HelloCordova" / "HelloCordova-Info.plist", "wb") as f:
        plistlib.dump(
            {"CFBundleShortVersionString": "1.2.3", "CFBundleVersion": "10203"}, f
        )

    (root / "config.xml").write_text(
        '\ufeff<?xml version="1.0" encoding="utf-8"?>\n'
        '<widget id="io.cordova.hellocordova" version="1.2.3" '
        'xmlns="http://www.w3.org/ns/widgets"><name>HelloCordova</name></widget>\n',
        encoding="utf-8",
    )

    source = root / "plugins" / PLUGIN_ID / "src" / "ios" / "ShareExtension"
    source.mkdir(parents=True)
    for name, content in EXTENSION_FILES.items():
        (source / name).write_text(content, encoding="utf-8")
    (source / ".DS_Store").write_text("junk", encoding="utf-8")
    return root
