"""
Xcode project file parser.

This module reads the text of a project file (.pbxproj) into a ProjectGraph.
Parsing happens in two steps: the text is first read into plain dicts, lists and
strings, then every record of the ``objects`` dictionary is converted into the
typed node class registered for its ``isa``.

String tokens keep their quotes and escapes exactly as written. An identifier
followed by a ``/* comment */`` is read as a Reference so the comment survives
the round trip.
"""

import dataclasses
import re
from typing import Dict, Iterator, List, Optional, Tuple

from shareext.details.errors import ParseError
from shareext.xcode.model import (
    OBJECT_TYPES,
    PBXUnknownObject,
    ProjectGraph,
    Reference,
    Value,
    XcodeID,
    XcodeObject,
)
from shareext.xcode.utils import is_comment_key


COMMENT = "COMMENT"
PUNCT = "PUNCT"
STRING = "STRING"

_TOKEN_EXPRS = [
    (r"[ \t\r\n]+", None),
    (r"//[^\n]*", None),
    (r"/\*.*?\*/", COMMENT),
    (r"[{}()=;,]", PUNCT),
    (r'"(?:[^"\\]|\\.)*"', STRING),
    (r"(?:[^\s{}()=;,\"/]|/(?![*/]))+", STRING),
]
_TOKEN_RE = re.compile(
    "|".join(f"(?P<T{index}>{pattern})" for index, (pattern, _) in enumerate(_TOKEN_EXPRS)),
    re.DOTALL,
)

Token = Tuple[str, str, int]


def tokenize(text: str) -> Iterator[Token]:
    """Yield (tag, text, line) tuples, skipping whitespace and line comments."""
    pos = 0
    line = 1
    while pos < len(text):
        match = _TOKEN_RE.match(text, pos)
        if not match:
            raise ParseError(f"unexpected character {text[pos]!r}", line)
        tag = _TOKEN_EXPRS[int(match.lastgroup[1:])][1]
        if tag == COMMENT:
            yield tag, match.group()[2:-2].strip(), line
        elif tag:
            yield tag, match.group(), line
        line += match.group().count("\n")
        pos = match.end()


class _Reader:
    def __init__(self, text: str):
        self.tokens: List[Token] = list(tokenize(text))
        self.pos = 0
        # comments written after dictionary keys, keyed by the key text
        self.key_comments: Dict[str, str] = {}

    def _line(self) -> int:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos][2]
        return self.tokens[-1][2] if self.tokens else 1

    def _peek(self) -> Optional[Token]:
        # comments that do not follow a string carry no meaning (section markers)
        while self.pos < len(self.tokens) and self.tokens[self.pos][0] == COMMENT:
            self.pos += 1
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return None

    def _next(self) -> Token:
        token = self._peek()
        if token is None:
            raise ParseError("unexpected end of file", self._line())
        self.pos += 1
        return token

    def _expect(self, punct: str) -> None:
        tag, text, line = self._next()
        if tag != PUNCT or text != punct:
            raise ParseError(f"expected {punct!r}, got {text!r}", line)

    def _trailing_comment(self) -> Optional[str]:
        if self.pos < len(self.tokens) and self.tokens[self.pos][0] == COMMENT:
            comment = self.tokens[self.pos][1]
            self.pos += 1
            return comment
        return None

    def read_value(self) -> Value:
        tag, text, line = self._next()
        if tag == PUNCT and text == "{":
            return self._read_dict()
        if tag == PUNCT and text == "(":
            return self._read_list()
        if tag == STRING:
            comment = self._trailing_comment()
            if comment is not None:
                return Reference(id=XcodeID(text), comment=comment)
            return text
        raise ParseError(f"unexpected {text!r}", line)

    def _read_dict(self) -> Dict[str, Value]:
        data: Dict[str, Value] = {}
        while True:
            tag, text, line = self._next()
            if tag == PUNCT and text == "}":
                return data
            if tag != STRING:
                raise ParseError(f"expected a key, got {text!r}", line)
            comment = self._trailing_comment()
            if comment is not None:
                self.key_comments[text] = comment
            self._expect("=")
            data[text] = self.read_value()
            self._expect(";")

    def _read_list(self) -> List[Value]:
        data: List[Value] = []
        while True:
            token = self._peek()
            if token is not None and token[0] == PUNCT and token[1] == ")":
                self.pos += 1
                return data
            data.append(self.read_value())
            token = self._peek()
            if token is not None and token[0] == PUNCT and token[1] == ",":
                self.pos += 1

    def at_end(self) -> bool:
        return self._peek() is None


def _as_reference(value: Value) -> Value:
    if isinstance(value, str):
        return Reference(id=XcodeID(value))
    return value


def build_object(object_id: str, props: Dict[str, Value]) -> XcodeObject:
    """Convert one record of the objects dictionary into its typed node."""
    isa = props.get("isa")
    if not isinstance(isa, str):
        raise ValueError(f"object {object_id} has no isa")
    cls = OBJECT_TYPES.get(isa)
    if cls is None:
        obj: XcodeObject = PBXUnknownObject(
            kind=isa, properties={k: v for k, v in props.items() if k != "isa"}
        )
    else:
        names = {f.name for f in dataclasses.fields(cls) if f.init}
        kwargs: Dict[str, Value] = {}
        extra: Dict[str, Value] = {}
        for name, value in props.items():
            if name == "isa":
                continue
            if name not in names:
                extra[name] = value
                continue
            if name in cls.REFERENCES:
                if isinstance(value, list):
                    value = [_as_reference(item) for item in value]
                else:
                    value = _as_reference(value)
            kwargs[name] = value
        obj = cls(**kwargs)
        obj.extra = extra
    obj.id = XcodeID(object_id)
    return obj


def parse_project(text: str) -> ProjectGraph:
    """
    Parse the text of a project file into a ProjectGraph.

    Args:
        text: Contents of a project.pbxproj file.

    Returns:
        The typed project graph.

    Raises:
        ParseError: If the text is not a well formed project file.
    """
    reader = _Reader(text)
    top = reader.read_value()
    if not reader.at_end():
        raise ParseError("trailing content after the root dictionary", reader._line())
    if not isinstance(top, dict):
        raise ParseError("the root value must be a dictionary", 1)

    raw_objects = top.pop("objects", None)
    root = top.pop("rootObject", None)
    if not isinstance(raw_objects, dict) or root is None:
        raise ParseError("missing objects or rootObject", 1)

    objects: Dict[XcodeID, XcodeObject] = {}
    for object_id, props in raw_objects.items():
        if is_comment_key(object_id):
            continue
        if not isinstance(props, dict):
            raise ParseError(f"object {object_id} is not a dictionary", 1)
        try:
            obj = build_object(object_id, props)
        except (TypeError, ValueError) as e:
            raise ParseError(str(e), 1) from e
        obj.comment = reader.key_comments.get(object_id)
        objects[obj.id] = obj

    return ProjectGraph(header=top, objects=objects, rootObject=_as_reference(root))
