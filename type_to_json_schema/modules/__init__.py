"""
Modules - reusable bundles of resolvers.
"""

from __future__ import annotations

from .additional_properties import AdditionalPropertiesModule
from .annotated import (
    AnnotatedMetadataModule,
    Choices,
    Default,
    Description,
    Format,
    Ignore,
    Items,
    Length,
    Nullable,
    Pattern,
    PropertyName,
    Range,
    ReadOnly,
    Required,
    Title,
    WriteOnly,
)
from .docstrings import DocstringModule
from .enums import EnumModule
from .exclusions import MemberExclusionModule
from .external_refs import ExternalRefModule
from .fields import CamelCasePropertyNamesModule, DefaultValuesModule, ReadOnlyModule, RequiredFieldsModule
from .simple_types import SimpleTypeModule
from .subclasses import SubclassLookupResolver

__all__ = [
    "AdditionalPropertiesModule",
    "AnnotatedMetadataModule",
    "CamelCasePropertyNamesModule",
    "DefaultValuesModule",
    "DocstringModule",
    "EnumModule",
    "ExternalRefModule",
    "MemberExclusionModule",
    "ReadOnlyModule",
    "RequiredFieldsModule",
    "SimpleTypeModule",
    "SubclassLookupResolver",
    "Title",
    "Description",
    "Default",
    "Choices",
    "Range",
    "Length",
    "Items",
    "Pattern",
    "Format",
    "PropertyName",
    "Nullable",
    "Required",
    "Ignore",
    "ReadOnly",
    "WriteOnly",
]
