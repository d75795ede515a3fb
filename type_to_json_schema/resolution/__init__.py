"""
Type resolution: canonical type descriptors, member collection and scopes.
"""

from .resolved_type import NoneType, ResolvedType
from .scopes import FieldScope, MemberScope, MethodScope, TypeScope
from .type_context import TypeContext

__all__ = [
    "NoneType",
    "ResolvedType",
    "TypeContext",
    "TypeScope",
    "MemberScope",
    "FieldScope",
    "MethodScope",
]
