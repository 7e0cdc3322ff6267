from __future__ import annotations

import functools
from dataclasses import dataclass
from typing import FrozenSet, Optional, Tuple

from assertgen.cir.model import Visibility
from assertgen.description import naming
from assertgen.description.shape import PropertyShape, ValueType
from assertgen.description.typename import TypeName

ABSTRACT_OBJECT_ASSERT = "org.assertj.core.api.AbstractObjectAssert"
ABSTRACT_COMPARABLE_ASSERT = "org.assertj.core.api.AbstractComparableAssert"
ASSERT_CLASS_SUFFIX = "Assert"
ABSTRACT_PREFIX = "Abstract"
JAVA_FILE_EXTENSION = ".java"


@dataclass(frozen=True)
class PropertyDescription:
    """
    One assertable property of a type.

    name is the normalized property name (isActive -> active), member_name
    the name of the getter or field it was read from.
    """
    name: str
    member_name: str
    value_type: ValueType
    shape: PropertyShape
    owner: TypeName

    # ---------------- naming ----------------

    @property
    def property_name_with_safe_keyword(self) -> str:
        return naming.safe_parameter_name(self.name)

    def type_name(self, target_package: Optional[str]) -> str:
        return self.value_type.declaration(target_package)

    def element_type_name(self, target_package: Optional[str]) -> Optional[str]:
        if self.shape.element_type is None:
            return None
        return self.shape.element_type.declaration(target_package)

    def element_assert_type_name(self, target_package: Optional[str]) -> Optional[str]:
        if self.shape.element_type is None:
            return None
        return self.shape.element_type.raw.assert_type_name(target_package)

    def assert_type_name(self, target_package: Optional[str]) -> str:
        return self.value_type.raw.assert_type_name(target_package)

    # ---------------- shape shortcuts ----------------

    @property
    def is_predicate(self) -> bool:
        return self.shape.is_predicate

    @property
    def is_array(self) -> bool:
        return self.shape.is_array

    @property
    def is_enumerable(self) -> bool:
        return self.shape.is_enumerable

    # ---------------- predicates ----------------

    @property
    def predicate(self) -> str:
        return naming.predicate_for(self.member_name)

    @property
    def negative_predicate(self) -> str:
        return naming.negative_predicate_for(self.predicate)

    @property
    def predicate_for_javadoc(self) -> str:
        return naming.predicate_for_javadoc(self.predicate)

    @property
    def negative_predicate_for_javadoc(self) -> str:
        return naming.predicate_for_javadoc(self.negative_predicate)

    @property
    def predicate_for_error_message_part1(self) -> str:
        return self.predicate_for_javadoc

    @property
    def predicate_for_error_message_part2(self) -> str:
        return naming.predicate_for_error_message_part2(self.predicate)

    @property
    def negative_predicate_for_error_message_part1(self) -> str:
        return self.negative_predicate_for_javadoc

    @property
    def negative_predicate_for_error_message_part2(self) -> str:
        return naming.predicate_for_error_message_part2(self.negative_predicate)

    @property
    def getter(self) -> str:
        """Name of the accessor called by the generated assertion."""
        return self.member_name


@dataclass(frozen=True)
class GetterDescription(PropertyDescription):
    exceptions: Tuple[TypeName, ...] = ()


@dataclass(frozen=True)
class FieldDescription(PropertyDescription):
    visibility: Visibility = "public"

    @property
    def is_public(self) -> bool:
        return self.visibility == "public"


@functools.total_ordering
class ClassDescription:
    """
    Introspected, read-only view of one type: its properties (all of them and
    the ones declared on the type itself), its super type and every name the
    generated assertion classes are derived from.
    """

    def __init__(
        self,
        type_name: TypeName,
        super_type: Optional[TypeName] = None,
        getters: Tuple[GetterDescription, ...] = (),
        fields: Tuple[FieldDescription, ...] = (),
        declared_getters: Tuple[GetterDescription, ...] = (),
        declared_fields: Tuple[FieldDescription, ...] = (),
        implements_comparable: bool = False,
    ) -> None:
        self.type_name = type_name
        self.super_type = super_type
        self.getters = tuple(sorted(getters, key=lambda p: p.member_name))
        self.fields = tuple(sorted(fields, key=lambda p: p.member_name))
        self.declared_getters = tuple(sorted(declared_getters, key=lambda p: p.member_name))
        self.declared_fields = tuple(sorted(declared_fields, key=lambda p: p.member_name))
        self.implements_comparable = implements_comparable

    # ---------------- subject names ----------------

    @property
    def class_name(self) -> str:
        return self.type_name.simple_name

    @property
    def class_name_with_outer_class(self) -> str:
        return self.type_name.simple_name_with_outer_class

    @property
    def class_name_with_outer_class_not_separated_by_dots(self) -> str:
        return self.type_name.simple_name_with_outer_class_not_separated_by_dots

    @property
    def package_name(self) -> str:
        return self.type_name.package

    @property
    def fully_qualified_class_name(self) -> str:
        return self.type_name.fully_qualified_name

    @property
    def fully_qualified_outer_class_name(self) -> str:
        return self.type_name.outermost().fully_qualified_name

    # ---------------- assert class names ----------------

    @property
    def assert_class_name(self) -> str:
        return self.class_name_with_outer_class_not_separated_by_dots + ASSERT_CLASS_SUFFIX

    @property
    def assert_class_filename(self) -> str:
        return self.assert_class_name + JAVA_FILE_EXTENSION

    @property
    def abstract_assert_class_name(self) -> str:
        return ABSTRACT_PREFIX + self.assert_class_name

    @property
    def abstract_assert_class_filename(self) -> str:
        return self.abstract_assert_class_name + JAVA_FILE_EXTENSION

    @property
    def fully_qualified_assert_class_name(self) -> str:
        return self._in_package(self.package_name, self.assert_class_name)

    @property
    def fully_qualified_parent_assert_class_name(self) -> str:
        parent = self.super_type
        if parent is None or parent.fully_qualified_name.startswith("java."):
            return ABSTRACT_OBJECT_ASSERT
        name = ABSTRACT_PREFIX + parent.simple_name_with_outer_class_not_separated_by_dots + ASSERT_CLASS_SUFFIX
        return self._in_package(parent.package, name)

    @staticmethod
    def _in_package(package: str, name: str) -> str:
        return f"{package}.{name}" if package else name

    # ---------------- imports ----------------

    @property
    def imports(self) -> FrozenSet[TypeName]:
        """Types the generated source refers to by simple name."""
        needed = {self.type_name.outermost()}
        for getter in self.getters:
            needed.update(e.outermost() for e in getter.exceptions)
        return frozenset(needed)

    # ---------------- value semantics ----------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ClassDescription):
            return NotImplemented
        return self.type_name == other.type_name

    def __lt__(self, other: "ClassDescription") -> bool:
        if not isinstance(other, ClassDescription):
            return NotImplemented
        return self.fully_qualified_class_name < other.fully_qualified_class_name

    def __hash__(self) -> int:
        return hash(self.type_name)

    def __str__(self) -> str:
        return f"ClassDescription [classType={self.fully_qualified_class_name}]"

    __repr__ = __str__
