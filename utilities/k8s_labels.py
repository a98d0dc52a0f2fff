# Copyright 2025 Xdynix
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#
# This file includes portions of logic and structure adapted from the
# Kubernetes project (https://github.com/kubernetes/kubernetes), originally
# licensed under the Apache License, Version 2.0. Significant modifications
# have been made to port and restructure the code for use in Python.


"""Label and annotation parsing utilities.

This module validates Kubernetes (K8s) label keys and values, and parses the common
textual encodings of labels: a single `key=value` or `key:value` item, comma-separated
lists, whitespace/newline-separated lists, and an "either" mode which accepts one of
the two list styles but never a mix of both.

Every entry point parses the whole input. Any invalid character, length violation or
trailing text raises `LabelParseError`, which carries the position of the failure and
what was expected there.

Example:
    >>> key = parse_key("example.com/env")
    >>> key.prefix, key.name
    (KeyPrefix('example.com'), KeyName('env'))

    >>> labels = parse_labels_either("tier:frontend env:prod")
    >>> [label.as_tuple() for label in labels]
    [(Key('tier'), LabelValue('frontend')), (Key('env'), LabelValue('prod'))]

    >>> labels_to_map(parse_labels_csv("env:prod,env:staging"))
    {Key('env'): LabelValue('staging')}
"""

__all__ = (
    "KEY_PREFIX_MAX_LENGTH",
    "Annotation",
    "AnnotationMap",
    "Annotations",
    "Key",
    "KeyName",
    "KeyPrefix",
    "Label",
    "LabelMap",
    "LabelParseError",
    "LabelValue",
    "Labels",
    "annotation_map_adapter",
    "annotations_to_map",
    "label_map_adapter",
    "labels_to_map",
    "parse_annotation",
    "parse_key",
    "parse_key_name",
    "parse_key_prefix",
    "parse_label_colon",
    "parse_label_env",
    "parse_label_value",
    "parse_labels_csv",
    "parse_labels_either",
    "parse_labels_env",
    "parse_labels_wsv",
)

import logging
import re
from collections.abc import Callable, Iterable
from enum import Enum, auto
from functools import total_ordering
from typing import Any, ClassVar, NamedTuple, Self

from pydantic import BaseModel, ConfigDict, GetCoreSchemaHandler, TypeAdapter
from pydantic_core import CoreSchema, PydanticCustomError, core_schema

logger = logging.getLogger(__name__)

# ==== Lexical Rules ====

DNS_LABEL_MAX_LENGTH = 63
QUALIFIED_NAME_MAX_LENGTH = 63
# Four 63-character DNS labels joined by dots.
KEY_PREFIX_MAX_LENGTH = 255

ALNUM = "[A-Za-z0-9]"
DNS_LABEL = rf"{ALNUM}([-A-Za-z0-9]{{0,{DNS_LABEL_MAX_LENGTH - 2}}}{ALNUM})?"
DNS_SUBDOMAIN = rf"{DNS_LABEL}(\.{DNS_LABEL})*"
QUALIFIED_NAME = (
    rf"{ALNUM}([-A-Za-z0-9_.]{{0,{QUALIFIED_NAME_MAX_LENGTH - 2}}}{ALNUM})?"
)

DNS_LABEL_PATTERN = re.compile(DNS_LABEL)
QUALIFIED_NAME_PATTERN = re.compile(QUALIFIED_NAME)
WHITESPACE_PATTERN = re.compile(r"[ \t\r\n]+")

# End of string for the JSON Schema patterns. Unlike a bare `$`, it does not match
# before a trailing newline.
END = r"$(?!\n)"


# ==== Errors ====


def describe_expected(expected: Iterable[str]) -> str:
    items = list(expected)
    if len(items) <= 2:
        return " or ".join(items)
    return f"{', '.join(items[:-1])}, or {items[-1]}"


class LabelParseError(ValueError):
    """Raised when a text does not match the label grammar.

    This is the only error kind of the module. Bad characters, length violations and
    trailing text are all reported the same way, differing only in position and in
    the tokens that were expected.

    Attributes:
        text (str): The rejected input.
        position (int): Offset into `text` of the furthest point the parser reached.
        expected (tuple[str, ...]): Descriptions of the tokens accepted at `position`.
    """

    def __init__(self, text: str, position: int, expected: tuple[str, ...]) -> None:
        self.text = text
        self.position = position
        self.expected = expected
        super().__init__(
            f"found {self.found} at {self.line}:{self.column}, "
            f"expected: {describe_expected(expected)}"
        )

    @property
    def found(self) -> str:
        if self.position >= len(self.text):
            return "end of string"
        return repr(self.text[self.position])

    @property
    def line(self) -> int:
        return self.text.count("\n", 0, self.position) + 1

    @property
    def column(self) -> int:
        return self.position - self.text.rfind("\n", 0, self.position)


# ==== Grammar Engine ====


class Rule(Enum):
    KEY_PREFIX = auto()
    KEY_NAME = auto()
    KEY = auto()
    LABEL_VALUE = auto()
    LABEL = auto()
    LABELS = auto()
    ANNOTATION = auto()
    ANNOTATION_VALUE = auto()


class Node(NamedTuple):
    """A matched rule: the exact substring it consumed and its sub-matches."""

    rule: Rule
    start: int
    text: str
    children: tuple["Node", ...] = ()


class Scanner:
    """Cursor over the input which remembers the furthest failed expectation.

    Matchers advance `pos` on success. On failure they record what they expected and
    leave `pos` where they found it, so callers can backtrack into another
    alternative by resetting `pos`.
    """

    def __init__(self, text: str, *, prefix_max_length: int | None = None):
        self.text = text
        self.pos = 0
        self.prefix_max_length = (
            KEY_PREFIX_MAX_LENGTH if prefix_max_length is None else prefix_max_length
        )
        self.furthest = 0
        self.expected: list[str] = []

    def fail(self, expected: str, pos: int | None = None) -> None:
        pos = self.pos if pos is None else pos
        if pos > self.furthest:
            self.furthest = pos
            self.expected = [expected]
        elif pos == self.furthest and expected not in self.expected:
            self.expected.append(expected)

    def match(self, pattern: re.Pattern[str], expected: str) -> bool:
        m = pattern.match(self.text, self.pos)
        if m is None:
            self.fail(expected)
            return False
        self.pos = m.end()
        return True

    def skip(self, pattern: re.Pattern[str]) -> None:
        if m := pattern.match(self.text, self.pos):
            self.pos = m.end()

    def literal(self, s: str) -> bool:
        if self.text.startswith(s, self.pos):
            self.pos += len(s)
            return True
        self.fail(f"'{s}'")
        return False

    def at_end(self) -> bool:
        if self.pos == len(self.text):
            return True
        self.fail("end of string")
        return False

    def node(self, rule: Rule, start: int, children: Iterable[Node] = ()) -> Node:
        return Node(rule, start, self.text[start : self.pos], tuple(children))

    def error(self) -> LabelParseError:
        return LabelParseError(self.text, self.furthest, tuple(self.expected))


Matcher = Callable[[Scanner], Node | None]


# Label grammar is defined as following:
#
# <dns-label>      ::= ALNUM [ (ALNUM | "-"){0,61} ALNUM ]
# <dns-subdomain>  ::= <dns-label> | <dns-label> "." <dns-subdomain>
# <qualified-name> ::= ALNUM [ (ALNUM | "-" | "_" | "."){0,61} ALNUM ]
# <key>            ::= [ <dns-subdomain> "/" ] <qualified-name>
# <value>          ::= "" | <qualified-name>
# <label-eq>       ::= <key> [ "=" <value> ]
# <label-colon>    ::= <key> [ ":" <value> ]
# <list-item>      ::= <key> ":" <value>
# <labels-csv>     ::= <list-item> | <list-item> "," <labels-csv>
# <labels-wsv>     ::= WS* <list-item> (WS+ <list-item>)* WS*
# <labels-either>  ::= <labels-csv> | <labels-wsv>
# <labels-env>     ::= WS* <label-eq> (WS+ <label-eq>)* WS*
# <annotation>     ::= <key> [ "=" ANY* ]
#
# Notes:
# - A <dns-subdomain> is at most `KEY_PREFIX_MAX_LENGTH` characters long.
# - WS is a space, tab, carriage return or newline.
# - The two <labels-either> alternatives are each tried against the whole input, so
#   an input mixing commas and whitespace matches neither.
# - Matchers only build `Node` trees. Validated values are created from the tree by
#   the entity types below.


def match_key_prefix(scanner: Scanner, expected: str = "DNS label") -> Node | None:
    start = end = scanner.pos
    while scanner.match(DNS_LABEL_PATTERN, expected if end == start else "DNS label"):
        if scanner.pos - start > scanner.prefix_max_length:
            scanner.fail(
                f"end of key prefix (at most {scanner.prefix_max_length} characters)",
                end,
            )
            break
        end = scanner.pos
        if not scanner.literal("."):
            break
    scanner.pos = end
    if end == start:
        return None
    return scanner.node(Rule.KEY_PREFIX, start)


def match_qualified_name(scanner: Scanner, rule: Rule, expected: str) -> Node | None:
    start = scanner.pos
    if not scanner.match(QUALIFIED_NAME_PATTERN, expected):
        return None
    return scanner.node(rule, start)


def match_key_name(scanner: Scanner) -> Node | None:
    return match_qualified_name(scanner, Rule.KEY_NAME, "key name")


def match_key(scanner: Scanner) -> Node | None:
    start = scanner.pos
    children = []
    prefix = match_key_prefix(scanner, "label key")
    if prefix is not None and scanner.literal("/"):
        children.append(prefix)
    else:
        scanner.pos = start

    expected = "label key" if scanner.pos == start else "key name"
    name = match_qualified_name(scanner, Rule.KEY_NAME, expected)
    if name is None:
        scanner.pos = start
        return None
    children.append(name)
    return scanner.node(Rule.KEY, start, children)


def match_value(scanner: Scanner) -> Node:
    start = scanner.pos
    scanner.match(QUALIFIED_NAME_PATTERN, "label value")
    return scanner.node(Rule.LABEL_VALUE, start)


def match_label(
    scanner: Scanner,
    separator: str,
    *,
    require_separator: bool = False,
) -> Node | None:
    start = scanner.pos
    key = match_key(scanner)
    if key is None:
        return None
    children = [key]
    if scanner.literal(separator):
        children.append(match_value(scanner))
    elif require_separator:
        scanner.pos = start
        return None
    return scanner.node(Rule.LABEL, start, children)


def match_label_eq(scanner: Scanner) -> Node | None:
    return match_label(scanner, "=")


def match_label_colon(scanner: Scanner) -> Node | None:
    return match_label(scanner, ":")


def match_list_item(scanner: Scanner) -> Node | None:
    return match_label(scanner, ":", require_separator=True)


def match_annotation(scanner: Scanner) -> Node | None:
    start = scanner.pos
    key = match_key(scanner)
    if key is None:
        return None
    children = [key]
    if scanner.literal("="):
        value_start = scanner.pos
        scanner.pos = len(scanner.text)
        children.append(scanner.node(Rule.ANNOTATION_VALUE, value_start))
    return scanner.node(Rule.ANNOTATION, start, children)


def match_separated(
    scanner: Scanner,
    item: Matcher,
    separator: Callable[[Scanner], bool],
) -> list[Node] | None:
    """Matches `item (separator item)*`, leaving a dangling separator unconsumed."""
    first = item(scanner)
    if first is None:
        return None
    items = [first]
    while True:
        mark = scanner.pos
        if separator(scanner) and (next_item := item(scanner)) is not None:
            items.append(next_item)
            continue
        scanner.pos = mark
        return items


def comma(scanner: Scanner) -> bool:
    return scanner.literal(",")


def whitespace(scanner: Scanner) -> bool:
    return scanner.match(WHITESPACE_PATTERN, "whitespace")


def match_labels_csv(scanner: Scanner) -> Node | None:
    start = scanner.pos
    items = match_separated(scanner, match_list_item, comma)
    if items is None or not scanner.at_end():
        scanner.pos = start
        return None
    return scanner.node(Rule.LABELS, start, items)


def match_whitespace_separated(scanner: Scanner, item: Matcher) -> Node | None:
    start = scanner.pos
    scanner.skip(WHITESPACE_PATTERN)
    items = match_separated(scanner, item, whitespace)
    if items is None:
        scanner.pos = start
        return None
    scanner.skip(WHITESPACE_PATTERN)
    if not scanner.at_end():
        scanner.pos = start
        return None
    return scanner.node(Rule.LABELS, start, items)


def match_labels_wsv(scanner: Scanner) -> Node | None:
    return match_whitespace_separated(scanner, match_list_item)


def match_labels_env(scanner: Scanner) -> Node | None:
    return match_whitespace_separated(scanner, match_label_eq)


def match_labels_either(scanner: Scanner) -> Node | None:
    start = scanner.pos
    for alternative in (match_labels_csv, match_labels_wsv):
        if (node := alternative(scanner)) is not None:
            return node
        scanner.pos = start
    return None


def parse_tree(
    matcher: Matcher,
    text: str,
    *,
    prefix_max_length: int | None = None,
) -> Node:
    """Runs `matcher` against the whole of `text`.

    Raises:
        LabelParseError: If the matcher fails or does not reach the end of the text.
    """
    scanner = Scanner(text, prefix_max_length=prefix_max_length)
    node = matcher(scanner)
    if node is None or not scanner.at_end():
        error = scanner.error()
        logger.debug("%s rejected %r: %s", matcher.__name__, text, error)
        raise error
    return node


# ==== Label Key and Value ====


class GrammarStr(str):
    """Base of the validated string types.

    Instances can only be obtained through the grammar: calling the class parses its
    argument, and a failed parse raises `LabelParseError`. The instance is the
    matched text itself, so it can be used anywhere a `str` is expected.

    This class can also be used for type annotation in Pydantic models.
    """

    MATCHER: ClassVar[Matcher]
    # These are used solely for JSON Schema generation and are not involved in the
    # validation process within the Python code. They mirror the grammar exactly.
    PATTERN: ClassVar[re.Pattern[str]]
    MIN_LENGTH: ClassVar[int | None] = 1
    MAX_LENGTH: ClassVar[int]

    __slots__ = ()

    def __new__(cls, value: Any) -> Self:
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise TypeError(f"{cls.__name__} requires a string, not {value!r}")
        return cls.parse(value)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({super().__repr__()})"

    @classmethod
    def parse(cls, text: str) -> Self:
        """Parses the whole of `text` into a validated instance.

        Raises:
            LabelParseError: If `text` does not match the grammar.
        """
        return cls.from_node(parse_tree(cls.MATCHER, text))

    @classmethod
    def from_node(cls, node: Node) -> Self:
        return str.__new__(cls, node.text)

    @classmethod
    def validate(cls, value: Any) -> Self:
        # Pydantic only reports `ValueError`s as validation errors.
        if not isinstance(value, str):
            raise PydanticCustomError("string_type", "Input should be a valid string")
        return cls(value)

    @classmethod
    def __get_pydantic_core_schema__(
        cls,
        source_type: Any,
        handler: "GetCoreSchemaHandler",
    ) -> "CoreSchema":
        return core_schema.no_info_plain_validator_function(
            cls.validate,
            ref=cls.__name__,
            json_schema_input_schema=core_schema.str_schema(
                pattern=cls.PATTERN,
                min_length=cls.MIN_LENGTH,
                max_length=cls.MAX_LENGTH,
            ),
            serialization=core_schema.to_string_ser_schema(),
        )


class KeyPrefix(GrammarStr):
    """Validated label key prefix.

    A DNS subdomain: dot-separated DNS labels of 1 to 63 alphanumerics and dashes
    (`-`), each beginning and ending with an alphanumeric character, and not longer
    than `KEY_PREFIX_MAX_LENGTH` characters in total.
    """

    MATCHER = staticmethod(match_key_prefix)
    PATTERN = re.compile(
        f"^(?=.{{1,{KEY_PREFIX_MAX_LENGTH}}}{END}){DNS_SUBDOMAIN}{END}"
    )
    MAX_LENGTH = KEY_PREFIX_MAX_LENGTH

    __slots__ = ()

    @classmethod
    def parse(cls, text: str, *, prefix_max_length: int | None = None) -> Self:
        node = parse_tree(cls.MATCHER, text, prefix_max_length=prefix_max_length)
        return cls.from_node(node)


class KeyName(GrammarStr):
    """Validated label key name.

    Must be 63 characters or fewer, beginning and ending with an alphanumeric
    character (`[a-z0-9A-Z]`) with dashes (`-`), underscores (`_`), dots (`.`), and
    alphanumerics between.
    """

    MATCHER = staticmethod(match_key_name)
    PATTERN = re.compile(f"^{QUALIFIED_NAME}{END}")
    MAX_LENGTH = QUALIFIED_NAME_MAX_LENGTH

    __slots__ = ()


class LabelValue(GrammarStr):
    """Validated label value.

    A valid label value:

    - Must be 63 characters or fewer (can be empty).
    - Unless empty, must begin and end with an alphanumeric character (`[a-z0-9A-Z]`).
    - Could contain dashes (`-`), underscores (`_`), dots (`.`), and alphanumerics
      between.
    """

    MATCHER = staticmethod(match_value)
    PATTERN = re.compile(f"^({QUALIFIED_NAME})?{END}")
    MIN_LENGTH = None
    MAX_LENGTH = QUALIFIED_NAME_MAX_LENGTH

    __slots__ = ()


class Key(GrammarStr):
    """Validated label or annotation key.

    Valid keys have two segments: an optional prefix and name, separated by a slash
    (`/`). See `KeyPrefix` and `KeyName` for the rules of each segment.

    Keys compare equal to their text. They are ordered by segment rather than by
    text: keys without a prefix come first, then keys are ordered by prefix, then by
    name.

    Attributes:
        prefix (KeyPrefix | None): The prefix segment without the slash, if any.
        name (KeyName): The name segment.
    """

    MATCHER = staticmethod(match_key)
    PATTERN = re.compile(
        # Although the escape sequence `\/` is not required in Python,
        # it is retained to maximize the portability of the regular expression.
        "^"
        rf"((?=[^\/]{{1,{KEY_PREFIX_MAX_LENGTH}}}\/){DNS_SUBDOMAIN}\/)?"
        f"{QUALIFIED_NAME}"
        f"{END}"
    )
    MAX_LENGTH = (
        KEY_PREFIX_MAX_LENGTH
        + 1  # `/` between the prefix and name
        + QUALIFIED_NAME_MAX_LENGTH
    )

    __slots__ = ("_name", "_prefix")

    _prefix: KeyPrefix | None
    _name: KeyName

    @classmethod
    def parse(cls, text: str, *, prefix_max_length: int | None = None) -> Self:
        node = parse_tree(cls.MATCHER, text, prefix_max_length=prefix_max_length)
        return cls.from_node(node)

    @classmethod
    def from_node(cls, node: Node) -> Self:
        prefix = None
        name = None
        for child in node.children:
            match child.rule:
                case Rule.KEY_PREFIX:
                    prefix = KeyPrefix.from_node(child)
                case Rule.KEY_NAME:
                    name = KeyName.from_node(child)
        if name is None:  # pragma: no cover (not reachable)
            raise ValueError("key node without a name")
        return cls.from_parts(name, prefix)

    @classmethod
    def from_parts(cls, name: KeyName, prefix: KeyPrefix | None = None) -> Self:
        """Joins already validated segments into a key."""
        if not isinstance(name, KeyName):
            raise TypeError(f"name must be a KeyName, not {name!r}")
        if prefix is not None and not isinstance(prefix, KeyPrefix):
            raise TypeError(f"prefix must be a KeyPrefix or None, not {prefix!r}")

        obj = str.__new__(cls, name if prefix is None else f"{prefix}/{name}")
        obj._prefix = prefix
        obj._name = name
        return obj

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, Key):
            return NotImplemented
        return self.sort_key < other.sort_key

    def __le__(self, other: Any) -> bool:
        if not isinstance(other, Key):
            return NotImplemented
        return self.sort_key <= other.sort_key

    def __gt__(self, other: Any) -> bool:
        if not isinstance(other, Key):
            return NotImplemented
        return self.sort_key > other.sort_key

    def __ge__(self, other: Any) -> bool:
        if not isinstance(other, Key):
            return NotImplemented
        return self.sort_key >= other.sort_key

    @property
    def sort_key(self) -> tuple[bool, str, str]:
        return self._prefix is not None, self._prefix or "", self._name

    @property
    def prefix(self) -> KeyPrefix | None:
        return self._prefix

    @property
    def name(self) -> KeyName:
        return self._name

    @property
    def has_prefix(self) -> bool:
        return self._prefix is not None

    def with_prefix(self, prefix: KeyPrefix) -> "Key":
        return Key.from_parts(self._name, prefix)

    def without_prefix(self) -> "Key":
        return Key.from_parts(self._name)


# ==== Labels and Annotations ====


@total_ordering
class Label(BaseModel):
    """A label key paired with a label value.

    Attributes:
        key (Key): The label key.
        value (LabelValue): The label value, possibly empty.
    """

    key: Key
    value: LabelValue

    model_config = ConfigDict(frozen=True)

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, Label):
            return NotImplemented
        return self.as_tuple() < other.as_tuple()

    def as_tuple(self) -> tuple[Key, LabelValue]:
        return self.key, self.value


@total_ordering
class Annotation(BaseModel):
    """An annotation key paired with free-form text. Only the key is validated."""

    key: Key
    value: str

    model_config = ConfigDict(frozen=True)

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, Annotation):
            return NotImplemented
        return self.as_tuple() < other.as_tuple()

    def as_tuple(self) -> tuple[Key, str]:
        return self.key, self.value


Labels = list[Label]
LabelMap = dict[Key, LabelValue]
Annotations = list[Annotation]
AnnotationMap = dict[Key, str]

label_map_adapter = TypeAdapter[LabelMap](LabelMap)
annotation_map_adapter = TypeAdapter[AnnotationMap](AnnotationMap)

EMPTY_VALUE = str.__new__(LabelValue, "")


def build_label(node: Node) -> Label:
    key_node, *rest = node.children
    value = LabelValue.from_node(rest[0]) if rest else EMPTY_VALUE
    return Label(key=Key.from_node(key_node), value=value)


def build_labels(node: Node) -> Labels:
    return [build_label(child) for child in node.children]


def labels_to_map(labels: Iterable[Label]) -> LabelMap:
    """Collects labels into a mapping. A repeated key keeps its last value."""
    return {label.key: label.value for label in labels}


def annotations_to_map(annotations: Iterable[Annotation]) -> AnnotationMap:
    """Collects annotations into a mapping. A repeated key keeps its last value."""
    return {annotation.key: annotation.value for annotation in annotations}


# ==== Parsers ====


def parse_key_prefix(text: str, *, max_length: int | None = None) -> KeyPrefix:
    """Parses a key prefix, optionally with a total length bound other than
    `KEY_PREFIX_MAX_LENGTH`."""
    return KeyPrefix.parse(text, prefix_max_length=max_length)


def parse_key_name(text: str) -> KeyName:
    return KeyName.parse(text)


def parse_key(text: str, *, prefix_max_length: int | None = None) -> Key:
    return Key.parse(text, prefix_max_length=prefix_max_length)


def parse_label_value(text: str) -> LabelValue:
    return LabelValue.parse(text)


def parse_label_env(text: str) -> Label:
    """Parses a label in the `key=value` form used for environment variables.

    The `=value` part is optional; without it the value is empty.

    Raises:
        LabelParseError: If the text is not a single valid label.
    """
    return build_label(parse_tree(match_label_eq, text))


def parse_label_colon(text: str) -> Label:
    """Parses a label in the `key:value` form. `key` and `key:` have an empty value.

    Raises:
        LabelParseError: If the text is not a single valid label.
    """
    return build_label(parse_tree(match_label_colon, text))


def parse_labels_csv(text: str) -> Labels:
    """Parses comma-separated `key:value` labels.

    At least one label is required. No whitespace is allowed around the commas, and
    empty items (`a:b,,c:d`, a leading or a trailing comma) are rejected.

    Example:
        >>> len(parse_labels_csv("foo:bar,example.com/foo:baz"))
        2
    """
    return build_labels(parse_tree(match_labels_csv, text))


def parse_labels_wsv(text: str) -> Labels:
    """Parses `key:value` labels separated by spaces, tabs or newlines.

    Runs of whitespace, including blank lines, separate two labels the same way a
    single space does. Leading and trailing whitespace is ignored.

    Example:
        >>> len(parse_labels_wsv("foo:bar\\n\\n\\nbar:baz"))
        2
    """
    return build_labels(parse_tree(match_labels_wsv, text))


def parse_labels_either(text: str) -> Labels:
    """Parses `key:value` labels separated either by commas or by whitespace.

    The whole input must use one style. `"a:b,c:d e:f"` is rejected because it is
    neither a comma-separated nor a whitespace-separated list.
    """
    return build_labels(parse_tree(match_labels_either, text))


def parse_labels_env(text: str) -> Labels:
    """Parses whitespace-separated labels in the `key=value` form."""
    return build_labels(parse_tree(match_labels_env, text))


def parse_annotation(text: str) -> Annotation:
    """Parses an annotation in the `key=value` form.

    Everything after the first `=` is the value, verbatim. Without `=` the value is
    empty.
    """
    node = parse_tree(match_annotation, text)
    key_node, *rest = node.children
    return Annotation(key=Key.from_node(key_node), value=rest[0].text if rest else "")
