"""
Sub-configuration extraction.

Derives named sub-mappings from the flat property mapping by prefix.
Every property is viewed as its entry text ``key=value`` (a property
declared without a value is just its key) and split on the first ``=``
only, so values keep any further ``=`` characters.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, List, Mapping, Optional, Tuple, Union

ENTRY_SEPARATOR = "="

TEMPLATE_PREFIX = "XMLTemplates.Request."
COMPLEX_ROOT_PREFIX = "XMLTemplates.Request.ComplexRoot."
SECURITY_PROVIDER_PREFIX = "security.provider"
LOG_ROUTING_PREFIX = "log4j"


@dataclass(frozen=True)
class ExtractionRule:
    """
    Prefix rule selecting one family of keys.

    Attributes:
        prefix: Entries must start with this text.
        exclude_prefix: Entries starting with this text are rejected.
        strip_prefix: Remove ``prefix`` from derived names.
    """

    prefix: str
    exclude_prefix: Optional[str] = None
    strip_prefix: bool = True

    def matches(self, entry: str) -> bool:
        """Return True if the entry text belongs to this rule."""
        if not entry.startswith(self.prefix):
            return False
        if self.exclude_prefix and entry.startswith(self.exclude_prefix):
            return False
        return True


TEMPLATE_RULE = ExtractionRule(TEMPLATE_PREFIX, exclude_prefix=COMPLEX_ROOT_PREFIX)
SECURITY_PROVIDER_RULE = ExtractionRule(SECURITY_PROVIDER_PREFIX, strip_prefix=False)
LOG_ROUTING_RULE = ExtractionRule(LOG_ROUTING_PREFIX, strip_prefix=False)


@dataclass(frozen=True)
class ExtractedEntry:
    """A matching entry split into derived name and raw value."""

    entry: str
    name: str
    value: str


@dataclass(frozen=True)
class MalformedEntry:
    """A matching entry with no ``=`` separator."""

    entry: str


Match = Union[ExtractedEntry, MalformedEntry]


def entry_text(key: str, value: str) -> str:
    """Render a property as the entry text that rules match against."""
    if value == "":
        return key
    return f"{key}{ENTRY_SEPARATOR}{value}"


def split_entry(entry: str) -> Optional[Tuple[str, str]]:
    """
    Split entry text on its first ``=``.

    Args:
        entry: Entry text.

    Returns:
        Tuple of (left side, right side), or None if there is no ``=``.
    """
    index = entry.find(ENTRY_SEPARATOR)
    if index < 0:
        return None
    return entry[:index], entry[index + 1:]


def iter_matches(properties: Mapping[str, str], rule: ExtractionRule) -> Iterator[Match]:
    """
    Yield every property matching ``rule`` in first-seen order.

    Args:
        properties: Raw property mapping.
        rule: Extraction rule.

    Yields:
        ExtractedEntry for well-formed matches, MalformedEntry otherwise.
    """
    for key, value in properties.items():
        entry = entry_text(key, value).strip()
        if not rule.matches(entry):
            continue

        parts = split_entry(entry)
        if parts is None:
            yield MalformedEntry(entry)
            continue

        name, raw_value = parts
        if rule.strip_prefix:
            name = name[len(rule.prefix):]
        yield ExtractedEntry(entry=entry, name=name, value=raw_value)


def extract(properties: Mapping[str, str], rule: ExtractionRule) -> Dict[str, str]:
    """
    Derive a name -> value mapping for one key family.

    Malformed entries are left out; use iter_matches() to see them.

    Args:
        properties: Raw property mapping.
        rule: Extraction rule.

    Returns:
        Mapping of derived names to raw values, in first-seen order.
    """
    return {
        match.name: match.value
        for match in iter_matches(properties, rule)
        if isinstance(match, ExtractedEntry)
    }


def extract_provider_ids(properties: Mapping[str, str]) -> Tuple[List[str], List[str]]:
    """
    Collect security provider identifiers in first-seen order.

    Args:
        properties: Raw property mapping.

    Returns:
        Tuple of (provider identifiers, malformed entries).
    """
    providers: List[str] = []
    malformed: List[str] = []

    for match in iter_matches(properties, SECURITY_PROVIDER_RULE):
        if isinstance(match, MalformedEntry):
            malformed.append(match.entry)
        else:
            providers.append(match.value)

    return providers, malformed
