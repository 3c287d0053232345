"""
Property source loading.

Reads Java-style ``.properties`` text from a resource namespace into a
flat ``str -> str`` mapping. Supported syntax:
- ``#`` and ``!`` comment lines, blank lines
- ``=``, ``:`` or whitespace between key and value
- Backslash line continuation (leading whitespace of the next line dropped)
- ``\\t \\n \\r \\f \\uXXXX`` escapes; any other escaped character is literal
- Later duplicates of a key replace earlier ones
"""

from __future__ import annotations

import re
import string
from typing import Dict, Iterator, Optional

from orbital_sdk.config.logging_config import get_logger
from orbital_sdk.core.exceptions import ConfigurationError
from orbital_sdk.sources.resources import PackageResourceNamespace, ResourceNamespace
from orbital_sdk.utils.validators import normalize_source

logger = get_logger(__name__)

_LINE_BREAK = re.compile(r"\r\n|\r|\n")
_WHITESPACE = " \t\f"
_SEPARATORS = "=:"
_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}


def _ends_with_continuation(line: str) -> bool:
    trailing = len(line) - len(line.rstrip("\\"))
    return trailing % 2 == 1


def _logical_lines(text: str) -> Iterator[str]:
    pending: Optional[str] = None

    for natural in _LINE_BREAK.split(text):
        stripped = natural.lstrip(_WHITESPACE)
        if pending is None:
            if not stripped or stripped[0] in "#!":
                continue
            line = stripped
        else:
            line = pending + stripped

        if _ends_with_continuation(line):
            pending = line[:-1]
            continue

        pending = None
        yield line

    if pending is not None:
        yield pending


def _unescape(text: str) -> str:
    if "\\" not in text:
        return text

    out = []
    i = 0
    n = len(text)
    while i < n:
        char = text[i]
        if char != "\\":
            out.append(char)
            i += 1
            continue

        i += 1
        if i >= n:
            break
        char = text[i]
        if char == "u":
            digits = text[i + 1:i + 5]
            if len(digits) < 4 or any(d not in string.hexdigits for d in digits):
                raise ValueError(f"Malformed \\uxxxx encoding: \\u{digits}")
            out.append(chr(int(digits, 16)))
            i += 5
            continue
        out.append(_ESCAPES.get(char, char))
        i += 1

    return "".join(out)


def _split_line(line: str) -> tuple:
    i = 0
    n = len(line)
    while i < n:
        char = line[i]
        if char == "\\":
            i += 2
            continue
        if char in _SEPARATORS or char in _WHITESPACE:
            break
        i += 1

    raw_key = line[:i]
    rest = line[i:].lstrip(_WHITESPACE)
    if rest and rest[0] in _SEPARATORS:
        rest = rest[1:].lstrip(_WHITESPACE)

    return _unescape(raw_key), _unescape(rest)


def parse_properties(text: str) -> Dict[str, str]:
    """
    Parse property text into a mapping.

    Args:
        text: Decoded property text.

    Returns:
        Mapping of keys to values, in first-seen key order.

    Raises:
        ValueError: If a ``\\u`` escape is malformed.
    """
    properties: Dict[str, str] = {}
    for line in _logical_lines(text):
        key, value = _split_line(line)
        properties[key] = value
    return properties


class PropertySource:
    """
    Loads a properties resource from a resource namespace.

    The namespace defaults to the resources packaged with the SDK.
    """

    def __init__(
        self,
        namespace: Optional[ResourceNamespace] = None,
        encoding: str = "iso-8859-1",
    ) -> None:
        """
        Initialize the property source.

        Args:
            namespace: Namespace the source identifier resolves against.
            encoding: Text encoding of property resources.
        """
        self.namespace = namespace or PackageResourceNamespace("orbital_sdk.resources")
        self.encoding = encoding

    def load(self, source: str) -> Dict[str, str]:
        """
        Load and parse a properties resource.

        Args:
            source: Resource-relative identifier of the properties file.

        Returns:
            Mapping of property keys to values.

        Raises:
            ConfigurationError: If the resource is missing, unreadable,
                malformed or contains no entries.
        """
        path = normalize_source(source)
        logger.debug(f"Loading properties {path} from {self.namespace.location}")

        try:
            data = self.namespace.read_bytes(path)
        except FileNotFoundError as e:
            raise ConfigurationError(
                f"Configuration file ({path}) is not found!",
                config_file=path,
            ) from e
        except OSError as e:
            raise ConfigurationError(
                f"Configuration file ({path}) could not be read: {e}",
                config_file=path,
            ) from e

        try:
            properties = parse_properties(data.decode(self.encoding))
        except (UnicodeDecodeError, ValueError) as e:
            raise ConfigurationError(
                f"Configuration file ({path}) could not be parsed: {e}",
                config_file=path,
            ) from e

        if not properties:
            raise ConfigurationError(
                "Exception while initializing the configurator - "
                f"Invalid properties file provided ({path} is empty)",
                config_file=path,
            )

        logger.debug(f"Loaded {len(properties)} properties from {path}")
        return properties
