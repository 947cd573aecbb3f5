# Locating the pieces of the host Cordova project.

import plistlib
import xml.etree.ElementTree as ET

from dataclasses import dataclass
from pathlib import Path
from typing import Tuple

from shareext.config import Config
from shareext.details.errors import AmbiguousInputError, MissingInputError


@dataclass(frozen=True)
class XcodeProjectLocation:
    folder: Path
    name: str

    @property
    def pbxproj(self) -> Path:
        return self.folder / "project.pbxproj"


def ios_folder(config: Config) -> Path:
    if config.ios_root is not None:
        return config.ios_root
    return config.project_root / "platforms" / "ios"


def extension_folder(config: Config) -> Path:
    return ios_folder(config) / config.group_name


def extension_source_folder(config: Config) -> Path:
    return (
        config.project_root
        / "plugins"
        / config.plugin_id
        / "src"
        / "ios"
        / config.group_name
    )


def find_xcode_project(config: Config) -> XcodeProjectLocation:
    """
    Find the single .xcodeproj folder of the iOS platform.

    Raises:
        MissingInputError: If the platform folder or the project is missing.
        AmbiguousInputError: If more than one .xcodeproj folder exists.
    """
    folder = ios_folder(config)
    if not folder.is_dir():
        raise MissingInputError(f"Could not find an .xcodeproj folder in: {folder}")
    candidates = sorted(
        entry for entry in folder.iterdir() if entry.name.endswith(".xcodeproj")
    )
    if not candidates:
        raise MissingInputError(f"Could not find an .xcodeproj folder in: {folder}")
    if len(candidates) > 1:
        names = ", ".join(entry.name for entry in candidates)
        raise AmbiguousInputError(f"Found more than one .xcodeproj folder in {folder}: {names}")
    project = candidates[0]
    return XcodeProjectLocation(folder=project, name=project.name[: -len(".xcodeproj")])


def read_bundle_id(config: Config) -> str:
    path = config.project_root / "config.xml"
    if not path.is_file():
        raise MissingInputError(f"Missing {path}.")
    text = path.read_text(encoding="utf-8")
    # anything before the first tag (a BOM, stray text) is dropped
    text = text[text.find("<"):] if "<" in text else text
    try:
        root = ET.fromstring(text)
    except ET.ParseError as e:
        raise MissingInputError(f"Could not read {path}: {e}") from e
    bundle_id = root.get("id")
    if not bundle_id:
        raise MissingInputError(f"The widget element of {path} has no id attribute.")
    return bundle_id


def info_plist_path(config: Config, project_name: str) -> Path:
    return ios_folder(config) / project_name / f"{project_name}-Info.plist"


def read_app_versions(config: Config, project_name: str) -> Tuple[str, str]:
    """Return CFBundleShortVersionString and CFBundleVersion of the host app."""
    path = info_plist_path(config, project_name)
    if not path.is_file():
        raise MissingInputError(f"Missing {path}.")
    with open(path, "rb") as f:
        info = plistlib.load(f)
    return (
        str(info.get("CFBundleShortVersionString", "")),
        str(info.get("CFBundleVersion", "")),
    )
