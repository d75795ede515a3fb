"""
Scopes handed to attribute resolvers.

A TypeScope wraps a ResolvedType; member scopes (fields and accessors) add
the declaring type, the member name and the Annotated metadata, exposed
through get_annotation() so that metadata readers never need to look at the
raw annotations themselves.
"""

from __future__ import annotations

import copy
from typing import TYPE_CHECKING, Any, Callable, TypeVar

from .resolved_type import ResolvedType

if TYPE_CHECKING:
    from .type_context import TypeContext

A = TypeVar("A")


class TypeScope:
    """A resolved type together with the context it was resolved in."""

    def __init__(self, type_: ResolvedType, context: TypeContext):
        self._type = type_
        self._context = context

    @property
    def type(self) -> ResolvedType:
        return self._type

    @property
    def context(self) -> TypeContext:
        return self._context

    @property
    def erased_type(self) -> Any:
        return self.type.erased_type

    @property
    def is_container_type(self) -> bool:
        return self.type.is_array

    @property
    def container_item_type(self) -> ResolvedType | None:
        return self.type.container_item_type()

    def type_parameter_for(self, base: type, index: int) -> ResolvedType | None:
        return self._context.type_parameter_for(self.type, base, index)

    def simple_type_description(self) -> str:
        return self._context.get_simple_type_description(self.type)

    def full_type_description(self) -> str:
        return self._context.get_full_type_description(self.type)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.simple_type_description()})"


class MemberScope(TypeScope):
    """Common view on fields and accessors of a declaring type."""

    def __init__(
        self,
        declared_type: ResolvedType,
        declaring_type: ResolvedType,
        name: str,
        context: TypeContext,
        declaring_class: type | None = None,
    ):
        super().__init__(declared_type.without_none(), context)
        self._declared_type = declared_type
        self._declaring_type = declaring_type
        self._declaring_class = declaring_class
        self._name = name
        self._overridden_name: str | None = None
        self._overridden_type: ResolvedType | None = None
        self._fake_container_item = False

    @property
    def name(self) -> str:
        return self._name

    @property
    def declared_name(self) -> str:
        return self._name

    @property
    def schema_property_name(self) -> str:
        """Name of the property in the generated schema, after any override."""
        return self._overridden_name if self._overridden_name is not None else self._name

    @property
    def declared_type(self) -> ResolvedType:
        return self._declared_type

    @property
    def type(self) -> ResolvedType:
        if self._overridden_type is not None:
            return self._overridden_type
        return self._type

    @property
    def declaring_type(self) -> ResolvedType:
        return self._declaring_type

    @property
    def declaring_class(self) -> type | None:
        return self._declaring_class

    @property
    def is_declared_optional(self) -> bool:
        return self._declared_type.is_optional or self._declared_type.is_none

    @property
    def has_overridden_type(self) -> bool:
        return self._overridden_type is not None

    @property
    def is_fake_container_item_scope(self) -> bool:
        return self._fake_container_item

    @property
    def is_public(self) -> bool:
        return not self._name.startswith("_")

    @property
    def is_static(self) -> bool:
        return False

    @property
    def annotations(self) -> tuple:
        """Annotated[...] payloads of the member's declared type."""
        if self._type is self._declared_type:
            return self._declared_type.metadata
        return self._declared_type.metadata + self._type.metadata

    def get_annotation(self, kind: type[A], filter: Callable[[A], bool] | None = None) -> A | None:
        """Return the first metadata object of the given kind, or None.

        Args:
            kind: Marker class to look for
            filter: Optional predicate the marker has to satisfy

        Returns:
            The marker instance if present
        """
        for item in self.annotations:
            if isinstance(item, kind) and (filter is None or filter(item)):
                return item
        return None

    def get_container_item_annotation(self, kind: type[A]) -> A | None:
        """Return a metadata object of the given kind attached to the container item type."""
        item_type = self.container_item_type
        if item_type is None:
            return None
        for item in item_type.metadata:
            if isinstance(item, kind):
                return item
        return None

    def with_overridden_name(self, name: str) -> MemberScope:
        scope = copy.copy(self)
        scope._overridden_name = name
        return scope

    def with_overridden_type(self, type_: ResolvedType) -> MemberScope:
        scope = copy.copy(self)
        scope._overridden_type = type_
        return scope

    def as_fake_container_item_scope(self) -> MemberScope:
        """View of this member describing the items of its container type."""
        item_type = self.container_item_type
        if item_type is None:
            return self
        scope = copy.copy(self)
        scope._declared_type = item_type
        scope._type = item_type.without_none()
        scope._overridden_type = None
        scope._fake_container_item = True
        return scope

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._declaring_type.erased_type!r}.{self._name})"


class FieldScope(MemberScope):
    """An annotated class attribute."""

    def __init__(
        self,
        declared_type: ResolvedType,
        declaring_type: ResolvedType,
        name: str,
        context: TypeContext,
        declaring_class: type | None = None,
        is_static: bool = False,
        is_final: bool = False,
        has_default: bool = False,
        default_value: Any = None,
    ):
        super().__init__(declared_type, declaring_type, name, context, declaring_class)
        self._is_static = is_static
        self._is_final = is_final
        self._has_default = has_default
        self._default_value = default_value

    @property
    def is_static(self) -> bool:
        return self._is_static

    @property
    def is_final(self) -> bool:
        return self._is_final

    @property
    def has_default(self) -> bool:
        return self._has_default

    @property
    def default_value(self) -> Any:
        return self._default_value


class MethodScope(MemberScope):
    """A property (or cached property) treated as an argument-free accessor."""

    def __init__(
        self,
        declared_type: ResolvedType,
        declaring_type: ResolvedType,
        name: str,
        context: TypeContext,
        declaring_class: type | None = None,
        getter: Callable | None = None,
        has_setter: bool = False,
    ):
        super().__init__(declared_type, declaring_type, name, context, declaring_class)
        self._getter = getter
        self._has_setter = has_setter

    @property
    def getter(self) -> Callable | None:
        return self._getter

    @property
    def is_getter(self) -> bool:
        return True

    @property
    def has_setter(self) -> bool:
        return self._has_setter

    @property
    def is_void(self) -> bool:
        return self._declared_type.is_none

    @property
    def doc(self) -> str | None:
        return getattr(self._getter, "__doc__", None)
