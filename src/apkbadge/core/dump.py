"""Parser for `aapt dump badging` output.

Each line looks like ``key: value...`` where the value part is either a run of
``name='value'`` pairs or a run of single-quoted tokens::

    package: name='com.example.sample' versionCode='1' versionName='1.0'
    sdkVersion:'7'
    application-label-ja:'サンプル'
    locales: '--_--' 'ja'

A few flags are printed as bare lines with no separator (``testOnly='-1'``);
those are collected separately in :attr:`ParsedDump.flags`.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import ClassVar, Union

from apkbadge.exceptions import ManifestValidateError

logger = logging.getLogger(__name__)

# Tags that AndroidManifest.xml may only declare once
DISALLOWED_DUPLICATE_TAGS: tuple[str, ...] = (
    "application",
    "sdkVersion",
    "targetSdkVersion",
)

LABEL_KEY_PREFIX = "application-label"

_PAIR_RE = re.compile(r"(\S+)='((?:\\'|[^'])*)'")
_TOKEN_RE = re.compile(r"'((?:\\'|[^'])*)'")
# aapt does not escape apostrophes inside labels, so take everything between
# the outermost quotes (https://code.google.com/p/android/issues/detail?id=160847)
_LABEL_RE = re.compile(r"'(.+)'")


def _unescape(value: str) -> str:
    return value.replace("\\'", "'")


@dataclass(frozen=True)
class Scalar:
    """A single string value."""

    kind: ClassVar[str] = "scalar"

    text: str

    def as_items(self) -> tuple[str, ...]:
        return (self.text,)


@dataclass(frozen=True)
class ListValue:
    """An ordered run of quoted tokens."""

    kind: ClassVar[str] = "list"

    items: tuple[str, ...] = ()

    def as_items(self) -> tuple[str, ...]:
        return self.items


@dataclass(frozen=True)
class MapValue:
    """A set of ``name='value'`` pairs."""

    kind: ClassVar[str] = "map"

    entries: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "entries", MappingProxyType(dict(self.entries)))

    def get(self, name: str) -> str | None:
        return self.entries.get(name)

    def as_items(self) -> tuple[str, ...]:
        rendered = " ".join(f"{k}='{v}'" for k, v in self.entries.items())
        return (rendered,)


ParsedValue = Union[Scalar, ListValue, MapValue]


def _append(existing: ParsedValue, new: ParsedValue) -> ParsedValue:
    return ListValue(existing.as_items() + new.as_items())


def _merge_maps(existing: ParsedValue, new: ParsedValue) -> ParsedValue:
    if isinstance(existing, MapValue) and isinstance(new, MapValue):
        return MapValue({**existing.entries, **new.entries})
    return _append(existing, new)


# (existing kind, new kind) -> merge rule; any other pair appends
_MERGE_RULES = {
    ("map", "map"): _merge_maps,
}


def merge_values(existing: ParsedValue, new: ParsedValue) -> ParsedValue:
    """Combine the value already stored for a key with a repeated line's value."""
    rule = _MERGE_RULES.get((existing.kind, new.kind), _append)
    return rule(existing, new)


class ParsedDump(Mapping[str, ParsedValue]):
    """Key to value mapping built from one dump, plus bare flag lines."""

    def __init__(
        self,
        values: dict[str, ParsedValue] | None = None,
        flags: Iterable[str] = (),
    ):
        self._values: dict[str, ParsedValue] = dict(values or {})
        self.flags: frozenset[str] = frozenset(flags)

    def __getitem__(self, key: str) -> ParsedValue:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"ParsedDump({self._values!r}, flags={sorted(self.flags)!r})"

    def scalar(self, key: str) -> str | None:
        """Read a key as one string (first item of a list)."""
        value = self._values.get(key)
        if isinstance(value, Scalar):
            return value.text
        if isinstance(value, ListValue) and value.items:
            return value.items[0]
        return None

    def entry(self, key: str, name: str) -> str | None:
        """Read ``name`` from a map-valued key."""
        value = self._values.get(key)
        if isinstance(value, MapValue):
            return value.get(name)
        return None

    def has_flag(self, flag: str) -> bool:
        return flag in self.flags


def parse_values(key: str, rest: str) -> ParsedValue | None:
    """Parse the part of a line after the first colon.

    Returns:
        The parsed value, or None if the text holds no quoted tokens.
    """
    if key.startswith(LABEL_KEY_PREFIX):
        match = _LABEL_RE.fullmatch(rest.strip())
        if match is None:
            return None
        return ListValue((_unescape(match.group(1)),))

    if "='" in rest:
        pairs = {name: _unescape(value) for name, value in _PAIR_RE.findall(rest)}
        return MapValue(pairs) if pairs else None

    tokens = tuple(_unescape(token) for token in _TOKEN_RE.findall(rest))
    return ListValue(tokens) if tokens else None


def _unwrap(value: ParsedValue) -> ParsedValue:
    if isinstance(value, ListValue) and len(value.items) == 1:
        return Scalar(value.items[0])
    return value


class DumpParser:
    """Turns dump text into a :class:`ParsedDump`."""

    def __init__(self, disallowed_duplicates: Iterable[str] = DISALLOWED_DUPLICATE_TAGS):
        self.disallowed_duplicates = frozenset(disallowed_duplicates)

    def parse(self, text: str) -> ParsedDump:
        """Parse a whole dump.

        Raises:
            ManifestValidateError: If a disallowed tag appears more than once.
        """
        values: dict[str, ParsedValue] = {}
        flags: list[str] = []

        for line in text.splitlines():
            key, sep, rest = line.partition(":")
            if not sep:
                if line.strip():
                    flags.append(line.strip())
                continue
            if not rest.strip():
                continue

            value = parse_values(key, rest)
            if value is None:
                logger.debug("Skipping unparsable line: %r", line)
                continue

            if key in values:
                if key in self.disallowed_duplicates:
                    raise ManifestValidateError(key)
                values[key] = merge_values(values[key], value)
            else:
                values[key] = _unwrap(value)

        return ParsedDump(values, flags)


def parse_dump(
    text: str,
    disallowed_duplicates: Iterable[str] = DISALLOWED_DUPLICATE_TAGS,
) -> ParsedDump:
    """Shortcut for ``DumpParser(disallowed_duplicates).parse(text)``."""
    return DumpParser(disallowed_duplicates).parse(text)
