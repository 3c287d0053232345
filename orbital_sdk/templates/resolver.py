"""
Template resolution.

A TemplateResolver turns a logical template path (the value of an
``XMLTemplates.Request.<name>`` property) into the template text. The
configurator owns exactly one resolver at a time and can swap it out
after clearing its template set.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, Mapping, Optional

from orbital_sdk.config.logging_config import get_logger
from orbital_sdk.core.exceptions import ConfigurationError, TemplateNotFoundError
from orbital_sdk.sources.resources import PackageResourceNamespace, ResourceNamespace

logger = get_logger(__name__)


class TemplateResolver(ABC):
    """Strategy for loading template text by logical path."""

    @abstractmethod
    def resolve(self, logical_path: str) -> str:
        """
        Resolve a logical path to template text.

        Args:
            logical_path: Path declared in the properties source.

        Returns:
            Full template text.

        Raises:
            TemplateNotFoundError: If the template cannot be resolved.
        """


class ResourceTemplateResolver(TemplateResolver):
    """Resolves templates against a resource namespace."""

    def __init__(
        self,
        namespace: Optional[ResourceNamespace] = None,
        encoding: str = "utf-8",
    ) -> None:
        """
        Initialize the resolver.

        Args:
            namespace: Namespace holding template files.
            encoding: Text encoding of template files.
        """
        self.namespace = namespace or PackageResourceNamespace("orbital_sdk.resources")
        self.encoding = encoding

    def resolve(self, logical_path: str) -> str:
        path = (logical_path or "").strip()
        if not path:
            raise TemplateNotFoundError("Template path is empty", template_path=logical_path)

        try:
            data = self.namespace.read_bytes(path)
        except FileNotFoundError as e:
            raise TemplateNotFoundError(
                f"Template not found: {path}", template_path=path
            ) from e
        except ConfigurationError as e:
            raise TemplateNotFoundError(
                f"Invalid template path {path}: {e.message}", template_path=path
            ) from e
        except OSError as e:
            raise TemplateNotFoundError(
                f"Template could not be read: {path}: {e}", template_path=path
            ) from e

        try:
            text = data.decode(self.encoding)
        except UnicodeDecodeError as e:
            raise TemplateNotFoundError(
                f"Template could not be decoded as {self.encoding}: {path}",
                template_path=path,
            ) from e

        logger.debug(f"Resolved template {path} ({len(text)} chars)")
        return text


class InMemoryTemplateResolver(TemplateResolver):
    """Resolves templates from a fixed mapping. Useful for embedding and tests."""

    def __init__(self, templates: Mapping[str, str]) -> None:
        self.templates: Dict[str, str] = dict(templates)

    def resolve(self, logical_path: str) -> str:
        try:
            return self.templates[logical_path]
        except KeyError as e:
            raise TemplateNotFoundError(
                f"Template not found: {logical_path}", template_path=logical_path
            ) from e
