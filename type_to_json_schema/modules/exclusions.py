"""
Exclusion of members that do not belong into a data schema.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..generator.module import Module

if TYPE_CHECKING:
    from ..generator.config_builder import SchemaGeneratorConfigBuilder
    from ..resolution import FieldScope, MethodScope


class MemberExclusionModule(Module):
    """Ignores non-public and ClassVar attributes and (optionally) accessors."""

    def __init__(self, include_nonpublic: bool = False, include_static: bool = False, include_accessors: bool = False):
        self.include_nonpublic = include_nonpublic
        self.include_static = include_static
        self.include_accessors = include_accessors

    def apply_to_config_builder(self, builder: SchemaGeneratorConfigBuilder) -> None:
        builder.for_fields().with_ignore_check(self.should_ignore_field)
        builder.for_methods().with_ignore_check(self.should_ignore_method)

    def should_ignore_field(self, field: FieldScope) -> bool:
        if not self.include_nonpublic and not field.is_public:
            return True
        return not self.include_static and field.is_static

    def should_ignore_method(self, method: MethodScope) -> bool:
        if not self.include_accessors:
            return True
        return not self.include_nonpublic and not method.is_public
