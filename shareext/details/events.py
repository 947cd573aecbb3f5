# Progress events reported by the project mutation steps.
#
# The mutation code never prints. Each step takes an observer callable and
# reports what it did; the command line installs a PrintObserver, tests use a
# RecordingObserver.

import sys

from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, List, Optional, TextIO


class EventKind(Enum):
    PROJECT_FOUND = auto()
    PROJECT_PARSED = auto()
    PROJECT_WRITTEN = auto()
    TARGET_EXISTS = auto()
    TARGET_CREATED = auto()
    TARGET_EMBED_SKIPPED = auto()
    SETTING_PATCHED = auto()
    SETTING_NO_MATCH = auto()
    GROUP_EXISTS = auto()
    GROUP_CREATED = auto()
    FILE_LISTED = auto()
    FILE_ADDED = auto()
    FILE_EXISTS = auto()
    FOLDER_COPIED = auto()
    TOKENS_REPLACED = auto()


@dataclass(frozen=True)
class Event:
    kind: EventKind
    message: str


Observer = Callable[[Event], None]


def null_observer(event: Event) -> None:
    pass


class PrintObserver:
    def __init__(self, stream: Optional[TextIO] = None, indent: str = "    "):
        self.stream = stream
        self.indent = indent

    def __call__(self, event: Event) -> None:
        print(f"{self.indent}{event.message}", file=self.stream or sys.stdout)


class RecordingObserver:
    def __init__(self):
        self.events: List[Event] = []

    def __call__(self, event: Event) -> None:
        self.events.append(event)

    def kinds(self) -> List[EventKind]:
        return [event.kind for event in self.events]
