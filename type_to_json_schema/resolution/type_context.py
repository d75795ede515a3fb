"""
Type resolution: raw type references to ResolvedType descriptors.

Handles generic parameterization (including type variables bound through
inheritance), the typing special forms, member collection over the MRO and
the two stringifications used for naming definitions.
"""

from __future__ import annotations

import collections.abc
import dataclasses
import enum
import functools
import inspect
import types
import typing
from typing import Any, ClassVar, Final, Generic, Literal, Protocol, TypeVar, get_args, get_origin

from ..exceptions import TypeResolutionError
from .resolved_type import NoneType, ResolvedType
from .scopes import FieldScope, MethodScope, TypeScope

_MISSING = object()

# Number of type arguments accepted by builtin/abc generics without __parameters__
_BUILTIN_ARITY: dict[Any, int] = {
    list: 1,
    set: 1,
    frozenset: 1,
    type: 1,
    dict: 2,
    collections.abc.Sequence: 1,
    collections.abc.MutableSequence: 1,
    collections.abc.Set: 1,
    collections.abc.MutableSet: 1,
    collections.abc.Collection: 1,
    collections.abc.Iterable: 1,
    collections.abc.Mapping: 2,
    collections.abc.MutableMapping: 2,
}

_UNION_ORIGINS = (typing.Union, types.UnionType)

# Classes in the MRO that never contribute members
_SKIPPED_BASES = (object, Generic, Protocol)

ClassBindings = dict[Any, dict[Any, ResolvedType]]


class TypeContext:
    """Resolves raw type references and collects the members of resolved types."""

    def resolve(self, raw_type: Any, *type_parameters: Any, bindings: dict | None = None) -> ResolvedType:
        """Resolve a raw type reference to a ResolvedType.

        Args:
            raw_type: A class, generic alias, special form, type variable or ResolvedType
            type_parameters: Type arguments for a bare generic class, e.g. resolve(dict, str, int)
            bindings: Type variable bindings of the enclosing generic declaration

        Returns:
            The canonical ResolvedType

        Raises:
            TypeResolutionError: If the reference is malformed or a type variable is unbound
        """
        bindings = bindings or {}
        if not type_parameters:
            return self._resolve(raw_type, bindings)
        if get_origin(raw_type) is not None or isinstance(raw_type, ResolvedType):
            raise TypeResolutionError(raw_type, "type parameters given for an already parameterized type")
        expected = self._generic_arity(raw_type)
        if expected is None:
            raise TypeResolutionError(raw_type, "type is not generic")
        if expected >= 0 and expected != len(type_parameters):
            raise TypeResolutionError(
                raw_type,
                f"expected {expected} type argument(s), got {len(type_parameters)}",
            )
        args = tuple(self._resolve(param, bindings) for param in type_parameters)
        return ResolvedType(raw_type, args)

    def _generic_arity(self, raw_type: Any) -> int | None:
        if raw_type is tuple:
            return -1
        if raw_type in _BUILTIN_ARITY:
            return _BUILTIN_ARITY[raw_type]
        params = getattr(raw_type, "__parameters__", None)
        if inspect.isclass(raw_type) and params:
            return len(params)
        return None

    def _resolve(self, raw: Any, bindings: dict) -> ResolvedType:
        if isinstance(raw, ResolvedType):
            return raw
        if raw is None or raw is NoneType:
            return ResolvedType(NoneType)
        if raw is Any or raw is object:
            return ResolvedType(object)
        if isinstance(raw, TypeVar):
            return self._resolve_type_variable(raw, bindings)
        if isinstance(raw, (str, typing.ForwardRef)):
            raise TypeResolutionError(raw, "unresolved forward reference")
        if isinstance(raw, typing.NewType):
            return self._resolve(raw.__supertype__, bindings)
        if isinstance(raw, typing.TypeAliasType):
            return self._resolve(raw.__value__, bindings)

        origin = get_origin(raw)
        if origin is typing.Annotated:
            inner = self._resolve(get_args(raw)[0], bindings)
            return inner.with_metadata(raw.__metadata__)
        if raw in (ClassVar, Final):
            return ResolvedType(object)
        if origin in (ClassVar, Final):
            return self._resolve(get_args(raw)[0], bindings)
        if origin in _UNION_ORIGINS:
            return self._resolve_union(get_args(raw), bindings)
        if origin is Literal:
            return ResolvedType(Literal, (), literal_values=get_args(raw))
        if origin is not None:
            return self._resolve_generic_alias(raw, origin, bindings)
        if inspect.isclass(raw):
            params = getattr(raw, "__parameters__", ())
            if not isinstance(params, tuple) or not params:
                return ResolvedType(raw)
            # raw generic class: fall back to the defaults/bounds of its parameters
            return ResolvedType(raw, tuple(self._resolve_type_variable(param, {}) for param in params))
        raise TypeResolutionError(raw, "unsupported type reference")

    def _resolve_type_variable(self, type_var: Any, bindings: dict) -> ResolvedType:
        if type_var in bindings:
            return bindings[type_var]
        has_default = getattr(type_var, "has_default", None)
        if callable(has_default) and has_default():
            return self._resolve(type_var.__default__, bindings)
        bound = getattr(type_var, "__bound__", None)
        if bound is not None:
            return self._resolve(bound, bindings)
        constraints = getattr(type_var, "__constraints__", ())
        if constraints:
            return self._resolve_union(constraints, bindings)
        raise TypeResolutionError(type_var, "type variable is not bound and has neither bound nor default")

    def _resolve_union(self, members: tuple, bindings: dict) -> ResolvedType:
        resolved: list[ResolvedType] = []
        for member in members:
            member_type = self._resolve(member, bindings)
            nested = member_type.type_args if member_type.is_union else (member_type,)
            for item in nested:
                if item not in resolved:
                    resolved.append(item)
        if len(resolved) == 1:
            return resolved[0]
        return ResolvedType(typing.Union, tuple(resolved))

    def _resolve_generic_alias(self, raw: Any, origin: Any, bindings: dict) -> ResolvedType:
        args = get_args(raw)
        if origin is tuple:
            args = tuple(arg for arg in args if arg is not Ellipsis and arg != ())
        if not inspect.isclass(origin):
            raise TypeResolutionError(raw, "unsupported generic form")
        for arg in args:
            if isinstance(arg, list):
                raise TypeResolutionError(raw, "unsupported generic form")
        expected = self._generic_arity(origin)
        if expected is not None and expected >= 0 and len(args) != expected:
            raise TypeResolutionError(raw, f"expected {expected} type argument(s), got {len(args)}")
        return ResolvedType(origin, tuple(self._resolve(arg, bindings) for arg in args))

    def class_bindings(self, resolved: ResolvedType) -> ClassBindings:
        """Type variable bindings of every generic class in the hierarchy of a type.

        For class IntBox(Box[int]) the bindings of Box map its T to int, so
        that members declared on Box resolve against the subclass' arguments.
        """
        cls = resolved.erased_type
        result: ClassBindings = {}
        if not inspect.isclass(cls):
            return result
        params = getattr(cls, "__parameters__", ())
        result[cls] = dict(zip(params, resolved.type_args)) if isinstance(params, tuple) else {}
        self._collect_base_bindings(cls, result[cls], result)
        return result

    def _collect_base_bindings(self, cls: type, own_bindings: dict, result: ClassBindings) -> None:
        for base in cls.__dict__.get("__orig_bases__", ()):
            origin = get_origin(base)
            if origin is None or origin in _SKIPPED_BASES or origin in result:
                continue
            base_params = getattr(origin, "__parameters__", ())
            result[origin] = {param: self._resolve(arg, own_bindings) for param, arg in zip(base_params, get_args(base))}
            self._collect_base_bindings(origin, result[origin], result)

    def type_parameter_for(self, resolved: ResolvedType, base: type, index: int) -> ResolvedType | None:
        """Return the type argument bound to a base class' type parameter, if any."""
        if resolved.erased_type is base:
            return resolved.type_args[index] if index < len(resolved.type_args) else None
        bindings = self.class_bindings(resolved).get(base)
        params = getattr(base, "__parameters__", ())
        if not bindings or index >= len(params):
            return None
        return bindings.get(params[index])

    # Members

    def collect_fields(self, resolved: ResolvedType) -> list[FieldScope]:
        """Collect annotated attributes over the MRO; subclass declarations hide base ones."""
        if not resolved.is_class or resolved.is_enum:
            return []
        all_bindings = self.class_bindings(resolved)
        fields: list[FieldScope] = []
        seen: set[str] = set()
        for cls in resolved.erased_type.__mro__:
            if cls in _SKIPPED_BASES or cls.__module__ == "builtins":
                continue
            for name, annotation in self._own_annotations(cls).items():
                if name in seen or isinstance(annotation, dataclasses.InitVar):
                    continue
                seen.add(name)
                declared = self._resolve(annotation, all_bindings.get(cls, {}))
                has_default, default = self._field_default(resolved.erased_type, name)
                fields.append(
                    FieldScope(
                        declared,
                        resolved,
                        name,
                        self,
                        declaring_class=cls,
                        is_static=_has_qualifier(annotation, ClassVar),
                        is_final=_has_qualifier(annotation, Final),
                        has_default=has_default,
                        default_value=default,
                    )
                )
        return fields

    def collect_methods(self, resolved: ResolvedType) -> list[MethodScope]:
        """Collect properties (and cached properties) as argument-free accessors."""
        if not resolved.is_class or resolved.is_enum:
            return []
        all_bindings = self.class_bindings(resolved)
        methods: list[MethodScope] = []
        seen: set[str] = set()
        for cls in resolved.erased_type.__mro__:
            if cls in _SKIPPED_BASES or cls.__module__ == "builtins":
                continue
            for name, attribute in vars(cls).items():
                if name in seen:
                    continue
                if isinstance(attribute, functools.cached_property):
                    getter, has_setter = attribute.func, False
                elif isinstance(attribute, property) and attribute.fget is not None:
                    getter, has_setter = attribute.fget, attribute.fset is not None
                else:
                    continue
                seen.add(name)
                try:
                    hints = typing.get_type_hints(getter, include_extras=True)
                except (NameError, SyntaxError, TypeError) as e:
                    raise TypeResolutionError(getter, f"cannot evaluate return annotation: {e}") from e
                declared = self._resolve(hints.get("return", Any), all_bindings.get(cls, {}))
                methods.append(
                    MethodScope(
                        declared,
                        resolved,
                        name,
                        self,
                        declaring_class=cls,
                        getter=getter,
                        has_setter=has_setter,
                    )
                )
        return methods

    def _own_annotations(self, cls: type) -> dict[str, Any]:
        try:
            return inspect.get_annotations(cls, eval_str=True)
        except (NameError, SyntaxError, TypeError) as e:
            raise TypeResolutionError(cls, f"cannot evaluate annotations: {e}") from e

    def _field_default(self, cls: type, name: str) -> tuple[bool, Any]:
        dataclass_field = getattr(cls, "__dataclass_fields__", {}).get(name)
        if dataclass_field is not None:
            if dataclass_field.default is not dataclasses.MISSING:
                return True, dataclass_field.default
            if dataclass_field.default_factory is not dataclasses.MISSING:
                return True, dataclass_field.default_factory()
            return False, None
        value = inspect.getattr_static(cls, name, _MISSING)
        if value is _MISSING or isinstance(value, (types.MemberDescriptorType, property)):
            return False, None
        return True, value

    # Scopes

    def create_type_scope(self, resolved: ResolvedType) -> TypeScope:
        return TypeScope(resolved, self)

    def container_item_type(self, resolved: ResolvedType) -> ResolvedType | None:
        return resolved.container_item_type()

    # Descriptions

    def get_simple_type_description(self, resolved: ResolvedType) -> str:
        """Erased name plus bracketed type arguments, e.g. Box[int]."""
        return self._describe(resolved, lambda cls: cls.__name__)

    def get_full_type_description(self, resolved: ResolvedType) -> str:
        """Qualified name plus bracketed type arguments, e.g. models.Box[builtins.int]."""
        return self._describe(resolved, lambda cls: f"{cls.__module__}.{cls.__qualname__}")

    def _describe(self, resolved: ResolvedType, class_name) -> str:
        if resolved.is_union:
            return " | ".join(self._describe(arg, class_name) for arg in resolved.type_args)
        if resolved.is_literal:
            return f"Literal[{', '.join(_literal_repr(value) for value in resolved.literal_values)}]"
        erased = resolved.erased_type
        name = class_name(erased) if inspect.isclass(erased) else repr(erased)
        if resolved.type_args:
            return f"{name}[{', '.join(self._describe(arg, class_name) for arg in resolved.type_args)}]"
        return name


def _has_qualifier(annotation: Any, qualifier: Any) -> bool:
    return annotation is qualifier or get_origin(annotation) is qualifier


def _literal_repr(value: Any) -> str:
    if isinstance(value, enum.Enum):
        return f"{type(value).__name__}.{value.name}"
    return repr(value)

