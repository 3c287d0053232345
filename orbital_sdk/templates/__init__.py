"""Template resolvers."""

from orbital_sdk.templates.resolver import (
    TemplateResolver,
    ResourceTemplateResolver,
    InMemoryTemplateResolver,
)

__all__ = [
    "TemplateResolver",
    "ResourceTemplateResolver",
    "InMemoryTemplateResolver",
]
