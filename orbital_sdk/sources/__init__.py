"""Property sources and the resource namespaces they read from."""

from orbital_sdk.sources.resources import (
    ResourceNamespace,
    PackageResourceNamespace,
    DirectoryResourceNamespace,
    default_namespace,
)
from orbital_sdk.sources.properties import PropertySource, parse_properties

__all__ = [
    "ResourceNamespace",
    "PackageResourceNamespace",
    "DirectoryResourceNamespace",
    "default_namespace",
    "PropertySource",
    "parse_properties",
]
