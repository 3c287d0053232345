"""
Resource namespaces.

A resource namespace maps slash-separated logical paths to bytes. The
configurator only ever reads through a namespace, never from arbitrary
filesystem paths. Two implementations are provided:
- PackageResourceNamespace: data files shipped inside a Python package
- DirectoryResourceNamespace: a resource root directory on disk
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from importlib import resources
from pathlib import Path
from typing import Optional

from orbital_sdk.utils.validators import normalize_source


class ResourceNamespace(ABC):
    """Read-only mapping of logical resource paths to content."""

    @property
    @abstractmethod
    def location(self) -> str:
        """Human-readable description of where resources come from."""

    @abstractmethod
    def read_bytes(self, path: str) -> bytes:
        """
        Read the full content of a resource.

        Raises:
            FileNotFoundError: If the resource does not exist.
            OSError: If the resource cannot be read.
        """

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.location!r})"


class PackageResourceNamespace(ResourceNamespace):
    """Resources packaged as data files of an importable package."""

    def __init__(self, package: str) -> None:
        self.package = package

    @property
    def location(self) -> str:
        return f"package:{self.package}"

    def _traversable(self, path: str):
        node = resources.files(self.package)
        for part in normalize_source(path).split("/"):
            node = node.joinpath(part)
        return node

    def read_bytes(self, path: str) -> bytes:
        try:
            node = self._traversable(path)
        except ModuleNotFoundError as e:
            raise FileNotFoundError(
                f"Resource package not importable: {self.package}"
            ) from e
        if not node.is_file():
            raise FileNotFoundError(f"Resource not found: {self.location}/{path}")
        return node.read_bytes()


class DirectoryResourceNamespace(ResourceNamespace):
    """Resources stored below a root directory."""

    def __init__(self, root: str) -> None:
        self.root = Path(root).resolve()

    @property
    def location(self) -> str:
        return str(self.root)

    def _resolve(self, path: str) -> Path:
        candidate = (self.root / normalize_source(path)).resolve()
        if self.root not in candidate.parents:
            raise FileNotFoundError(f"Resource escapes root {self.root}: {path}")
        return candidate

    def read_bytes(self, path: str) -> bytes:
        target = self._resolve(path)
        if not target.is_file():
            raise FileNotFoundError(f"Resource not found: {target}")
        return target.read_bytes()


def default_namespace(
    resource_dir: Optional[str] = None,
    resource_package: str = "orbital_sdk.resources",
) -> ResourceNamespace:
    """
    Build the namespace described by bootstrap settings.

    Args:
        resource_dir: Resource root directory; takes precedence when set.
        resource_package: Package holding packaged resources.

    Returns:
        ResourceNamespace instance.
    """
    if resource_dir:
        return DirectoryResourceNamespace(resource_dir)
    return PackageResourceNamespace(resource_package)
