"""
Canonical, structurally comparable type descriptors.

A ResolvedType is produced by the TypeContext and shared read-only by the
rest of the generator. Two descriptors are equal when they denote the same
erased type with the same ordered type arguments (and, for Literal types,
the same literal values).
"""

from __future__ import annotations

import collections.abc
import enum
import inspect
import typing
from dataclasses import dataclass, field, replace
from typing import Any

NoneType = type(None)

# Erased types treated as JSON arrays
ARRAY_TYPES: frozenset = frozenset(
    {
        list,
        tuple,
        set,
        frozenset,
        collections.abc.Sequence,
        collections.abc.MutableSequence,
        collections.abc.Set,
        collections.abc.MutableSet,
        collections.abc.Collection,
        collections.abc.Iterable,
    }
)

# Erased types treated as JSON objects with arbitrary keys
MAPPING_TYPES: frozenset = frozenset(
    {
        dict,
        collections.abc.Mapping,
        collections.abc.MutableMapping,
    }
)


@dataclass(frozen=True)
class ResolvedType:
    """A type with all of its type variables bound.

    Attributes:
        erased_type: The class without parameterization, or typing.Union /
            typing.Literal for the corresponding special forms
        type_args: Resolved type arguments in declaration order
        literal_values: Values of a Literal type
        metadata: Annotated[...] payloads; not part of the identity
    """

    erased_type: Any
    type_args: tuple[ResolvedType, ...] = ()
    literal_values: tuple = ()
    metadata: tuple = field(default=(), compare=False)

    @property
    def is_union(self) -> bool:
        return self.erased_type is typing.Union

    @property
    def is_literal(self) -> bool:
        return self.erased_type is typing.Literal

    @property
    def is_none(self) -> bool:
        return self.erased_type is NoneType

    @property
    def is_optional(self) -> bool:
        """Whether this is a union that admits None."""
        return self.is_union and any(arg.is_none for arg in self.type_args)

    @property
    def is_class(self) -> bool:
        return inspect.isclass(self.erased_type)

    @property
    def is_enum(self) -> bool:
        return self.is_class and issubclass(self.erased_type, enum.Enum)

    @property
    def is_array(self) -> bool:
        return self.erased_type in ARRAY_TYPES

    @property
    def is_mapping(self) -> bool:
        return self.erased_type in MAPPING_TYPES

    @property
    def is_abstract(self) -> bool:
        return self.is_class and inspect.isabstract(self.erased_type)

    def without_none(self) -> ResolvedType:
        """Return the union without its None member (a single member is unwrapped)."""
        if not self.is_optional:
            return self
        remaining = tuple(arg for arg in self.type_args if not arg.is_none)
        if not remaining:
            return self
        if len(remaining) == 1:
            return remaining[0]
        return ResolvedType(typing.Union, remaining)

    def with_metadata(self, metadata: tuple) -> ResolvedType:
        return replace(self, metadata=self.metadata + tuple(metadata))

    def container_item_type(self) -> ResolvedType | None:
        """Return the item type of an array type, None for anything else.

        Tuples of mixed item types yield the union of their item types.
        """
        if not self.is_array:
            return None
        if not self.type_args:
            return ResolvedType(object)
        items: list[ResolvedType] = []
        for arg in self.type_args:
            if arg not in items:
                items.append(arg)
        if len(items) == 1:
            return items[0]
        return ResolvedType(typing.Union, tuple(items))
