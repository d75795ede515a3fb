"""
Descriptions taken from class and property docstrings.
"""

from __future__ import annotations

import dataclasses
import inspect
from typing import TYPE_CHECKING

from ..generator.module import Module

if TYPE_CHECKING:
    from ..generator.config_builder import SchemaGeneratorConfigBuilder
    from ..resolution import MethodScope, TypeScope

# Docstrings the standard library generates for classes without one
_GENERATED_DOCSTRINGS = ("An enumeration.",)


class DocstringModule(Module):
    def apply_to_config_builder(self, builder: SchemaGeneratorConfigBuilder) -> None:
        builder.for_types_in_general().with_description_resolver(self.type_description)
        builder.for_methods().with_description_resolver(self.method_description)

    def type_description(self, scope: TypeScope) -> str | None:
        cls = scope.erased_type
        if not inspect.isclass(cls) or cls.__module__ == "builtins":
            return None
        doc = cls.__dict__.get("__doc__")
        if not doc or doc in _GENERATED_DOCSTRINGS:
            return None
        # dataclasses without docstring get their signature as __doc__
        if dataclasses.is_dataclass(cls) and doc.startswith(f"{cls.__name__}("):
            return None
        return inspect.cleandoc(doc)

    def method_description(self, method: MethodScope) -> str | None:
        if method.is_fake_container_item_scope or not method.doc:
            return None
        return inspect.cleandoc(method.doc)
