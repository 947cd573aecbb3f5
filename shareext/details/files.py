# Extension files: listing the extension folder and classifying its entries.

import os

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Dict, Iterable, List

from shareext.details.errors import MissingInputError


class FileKind(Enum):
    SOURCE = "source"
    PLIST = "plist"
    RESOURCE = "resource"


# Extensions not listed here are resources
FILE_KINDS = {
    ".h": FileKind.SOURCE,
    ".m": FileKind.SOURCE,
    ".plist": FileKind.PLIST,
}


@dataclass(frozen=True)
class ExtensionFile:
    name: str
    path: Path
    extension: str

    @property
    def kind(self) -> FileKind:
        return classify(self.extension)


def classify(extension: str) -> FileKind:
    return FILE_KINDS.get(extension, FileKind.RESOURCE)


def list_extension_files(folder: Path) -> List[ExtensionFile]:
    if not folder.is_dir():
        raise MissingInputError(f"Missing extension folder in {folder}.")
    # hidden entries such as .DS_Store are skipped
    return [
        ExtensionFile(name=name, path=folder / name, extension=os.path.splitext(name)[1])
        for name in sorted(os.listdir(folder))
        if not name.startswith(".")
    ]


def group_by_kind(files: Iterable[ExtensionFile]) -> Dict[FileKind, List[ExtensionFile]]:
    grouped: Dict[FileKind, List[ExtensionFile]] = {kind: [] for kind in FileKind}
    for file in files:
        grouped[file.kind].append(file)
    return grouped
