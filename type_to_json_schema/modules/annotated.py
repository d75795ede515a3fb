"""
Schema attributes declared as typing.Annotated metadata.

Example:
    @dataclass
    class Product:
        name: Annotated[str, Length(min_length=1), Description("Display name")]
        price: Annotated[Decimal, Range(exclusive_minimum=0)]
        tags: Annotated[list[Annotated[str, Pattern("^[a-z]+$")]], Items(unique=True)] = field(default_factory=list)

The module reads the markers through MemberScope.get_annotation() only.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable

from ..generator.attribute_collector import to_json_value
from ..generator.module import Module

if TYPE_CHECKING:
    from ..generator.config_builder import SchemaGeneratorConfigBuilder
    from ..generator.config_part import MemberConfigPart
    from ..resolution import MemberScope


@dataclass(frozen=True)
class Title:
    text: str


@dataclass(frozen=True)
class Description:
    text: str


@dataclass(frozen=True)
class Default:
    value: Any


@dataclass(frozen=True)
class Choices:
    """Allowed values, rendered as "enum" (or "const" for a single value)."""

    values: tuple


@dataclass(frozen=True)
class Range:
    minimum: Any = None
    maximum: Any = None
    exclusive_minimum: Any = None
    exclusive_maximum: Any = None
    multiple_of: Any = None


@dataclass(frozen=True)
class Length:
    """String length, or the number of items when attached to a container."""

    min_length: int | None = None
    max_length: int | None = None


@dataclass(frozen=True)
class Items:
    min_items: int | None = None
    max_items: int | None = None
    unique: bool | None = None


@dataclass(frozen=True)
class Pattern:
    regex: str


@dataclass(frozen=True)
class Format:
    name: str


@dataclass(frozen=True)
class PropertyName:
    name: str


@dataclass(frozen=True)
class Nullable:
    value: bool = True


@dataclass(frozen=True)
class Required:
    pass


@dataclass(frozen=True)
class Ignore:
    pass


@dataclass(frozen=True)
class ReadOnly:
    pass


@dataclass(frozen=True)
class WriteOnly:
    pass


def _describes_value(member: MemberScope) -> bool:
    # markers on a container describe the container, markers on its item type the items
    return not member.is_container_type or member.is_fake_container_item_scope


def _describes_container(member: MemberScope) -> bool:
    return member.is_container_type and not member.is_fake_container_item_scope


def _marker_value(kind: type, attribute: str, applies: Callable[[MemberScope], bool] | None = None):
    def resolve(member: MemberScope) -> Any:
        if applies is not None and not applies(member):
            return None
        marker = member.get_annotation(kind)
        return getattr(marker, attribute) if marker is not None else None

    return resolve


def _has_marker(kind: type):
    def check(member: MemberScope) -> bool:
        return member.get_annotation(kind) is not None

    return check


class AnnotatedMetadataModule(Module):
    """Applies the markers above to fields and accessors."""

    def apply_to_config_builder(self, builder: SchemaGeneratorConfigBuilder) -> None:
        self._apply_to_part(builder.for_fields())
        self._apply_to_part(builder.for_methods())

    def _apply_to_part(self, part: MemberConfigPart) -> None:
        part.with_title_resolver(_marker_value(Title, "text"))
        part.with_description_resolver(_marker_value(Description, "text"))
        part.with_default_resolver(self.resolve_default)
        part.with_enum_resolver(self.resolve_choices)
        part.with_ignore_check(_has_marker(Ignore))
        part.with_required_check(_has_marker(Required))
        part.with_read_only_check(_has_marker(ReadOnly))
        part.with_write_only_check(_has_marker(WriteOnly))
        part.with_nullable_check(_marker_value(Nullable, "value"))
        part.with_property_name_overrides(_marker_value(PropertyName, "name"))

        part.with_string_min_length_resolver(_marker_value(Length, "min_length", _describes_value))
        part.with_string_max_length_resolver(_marker_value(Length, "max_length", _describes_value))
        part.with_string_pattern_resolver(_marker_value(Pattern, "regex", _describes_value))
        part.with_string_format_resolver(_marker_value(Format, "name", _describes_value))

        part.with_number_inclusive_minimum_resolver(_marker_value(Range, "minimum", _describes_value))
        part.with_number_inclusive_maximum_resolver(_marker_value(Range, "maximum", _describes_value))
        part.with_number_exclusive_minimum_resolver(_marker_value(Range, "exclusive_minimum", _describes_value))
        part.with_number_exclusive_maximum_resolver(_marker_value(Range, "exclusive_maximum", _describes_value))
        part.with_number_multiple_of_resolver(_marker_value(Range, "multiple_of", _describes_value))

        part.with_array_min_items_resolver(self.resolve_min_items)
        part.with_array_max_items_resolver(self.resolve_max_items)
        part.with_array_unique_items_resolver(_marker_value(Items, "unique", _describes_container))

    def resolve_default(self, member: MemberScope) -> Any:
        marker = member.get_annotation(Default)
        return to_json_value(marker.value) if marker is not None else None

    def resolve_choices(self, member: MemberScope) -> list | None:
        marker = member.get_annotation(Choices)
        return [to_json_value(value) for value in marker.values] if marker is not None else None

    def resolve_min_items(self, member: MemberScope) -> int | None:
        if not _describes_container(member):
            return None
        items = member.get_annotation(Items)
        if items is not None and items.min_items is not None:
            return items.min_items
        length = member.get_annotation(Length)
        return length.min_length if length is not None else None

    def resolve_max_items(self, member: MemberScope) -> int | None:
        if not _describes_container(member):
            return None
        items = member.get_annotation(Items)
        if items is not None and items.max_items is not None:
            return items.max_items
        length = member.get_annotation(Length)
        return length.max_length if length is not None else None
