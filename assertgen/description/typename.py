from __future__ import annotations

import functools
from typing import Optional, Tuple

from assertgen.errors import InvalidArgumentError

JAVA_LANG_PACKAGE = "java.lang"
NO_PACKAGE = ""

PRIMITIVE_TYPES = ("int", "long", "short", "byte", "float", "double", "char", "boolean")
REAL_NUMBER_TYPES = ("float", "double")
REAL_NUMBER_WRAPPER_TYPES = ("Float", "Double")
WHOLE_NUMBER_TYPES = ("int", "long", "short", "byte")
WHOLE_NUMBER_WRAPPER_TYPES = ("Integer", "Long", "Short", "Byte")


def _index_of_first_capital(name: str) -> int:
    for i, ch in enumerate(name):
        if "A" <= ch <= "Z":
            return i
    return -1


@functools.total_ordering
class TypeName:
    """
    Canonical name of a Java type.

    Two names are equal when package and outer-qualified simple name match,
    ordering follows the fully qualified name.
    """

    __slots__ = ("simple_name", "package", "simple_name_with_outer_class")

    def __init__(self, simple_name: str, package: Optional[str] = None,
                 outer_classes: Tuple[str, ...] = ()) -> None:
        if simple_name is None:
            raise InvalidArgumentError("type simple name should not be null")
        self.simple_name = simple_name
        self.package = package or NO_PACKAGE
        self.simple_name_with_outer_class = ".".join(tuple(outer_classes) + (simple_name,))

    @classmethod
    def parse(cls, type_name: Optional[str]) -> "TypeName":
        """Split "a.b.Outer.Inner" at its first capital letter."""
        if type_name is None or not type_name.strip():
            raise InvalidArgumentError("type name should not be blank or null")
        index = _index_of_first_capital(type_name)
        if index > 0:
            with_outer = type_name[index:]
            package = type_name[:index].rstrip(".")
        else:
            # primitive type or default package
            with_outer = type_name
            package = NO_PACKAGE
        parts = with_outer.split(".")
        return cls(parts[-1], package, tuple(parts[:-1]))

    # ---------------- naming ----------------

    @property
    def simple_name_with_outer_class_not_separated_by_dots(self) -> str:
        return self.simple_name_with_outer_class.replace(".", "")

    @property
    def fully_qualified_name(self) -> str:
        if not self.package:
            return self.simple_name_with_outer_class
        return f"{self.package}.{self.simple_name_with_outer_class}"

    def fully_qualified_name_if_needed(self, target_package: Optional[str]) -> str:
        if self.belongs_to_java_lang_package() or self.is_primitive() or (target_package or "") == self.package:
            return self.simple_name_with_outer_class
        return self.fully_qualified_name

    @property
    def outer_class_type_name(self) -> Optional["TypeName"]:
        if not self.is_nested():
            return None
        return TypeName(self.simple_name_with_outer_class.split(".")[0], self.package)

    def outermost(self) -> "TypeName":
        return self.outer_class_type_name or self

    def assert_type_name(self, package: Optional[str]) -> str:
        full_name = self.fully_qualified_name
        if full_name.startswith("java."):
            # AssertJ ships an assert class for most JDK types
            return f"org.assertj.core.api.{self.simple_name}Assert"
        prefix = self.simple_name_with_outer_class_not_separated_by_dots
        if package is None or package != self.package:
            prefix = f"{self.package}.{prefix}" if self.package else prefix
        return prefix + "Assert"

    # ---------------- predicates ----------------

    def is_primitive(self) -> bool:
        return self.simple_name in PRIMITIVE_TYPES and not self.package

    def is_real_number(self) -> bool:
        return self._primitive_in(REAL_NUMBER_TYPES) or self._wrapper_in(REAL_NUMBER_WRAPPER_TYPES)

    def is_whole_number(self) -> bool:
        return self._primitive_in(WHOLE_NUMBER_TYPES) or self._wrapper_in(WHOLE_NUMBER_WRAPPER_TYPES)

    def is_boolean(self) -> bool:
        return self._primitive_in(("boolean",)) or self._wrapper_in(("Boolean",))

    def is_char(self) -> bool:
        return self._primitive_in(("char",)) or self._wrapper_in(("Character",))

    def is_primitive_wrapper(self) -> bool:
        return self._wrapper_in(REAL_NUMBER_WRAPPER_TYPES + WHOLE_NUMBER_WRAPPER_TYPES + ("Boolean", "Character"))

    def belongs_to_java_lang_package(self) -> bool:
        return self.package == JAVA_LANG_PACKAGE

    def is_array(self) -> bool:
        return "[]" in self.simple_name

    def is_nested(self) -> bool:
        return "." in self.simple_name_with_outer_class

    def _primitive_in(self, names: Tuple[str, ...]) -> bool:
        return self.simple_name in names and not self.package

    def _wrapper_in(self, names: Tuple[str, ...]) -> bool:
        return self.simple_name in names and self.package == JAVA_LANG_PACKAGE

    # ---------------- value semantics ----------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TypeName):
            return NotImplemented
        return (self.package, self.simple_name_with_outer_class) == (other.package, other.simple_name_with_outer_class)

    def __lt__(self, other: "TypeName") -> bool:
        if not isinstance(other, TypeName):
            return NotImplemented
        return self.fully_qualified_name < other.fully_qualified_name

    def __hash__(self) -> int:
        return hash((self.package, self.simple_name_with_outer_class))

    def __str__(self) -> str:
        return self.fully_qualified_name

    def __repr__(self) -> str:
        return f"TypeName({self.fully_qualified_name!r})"


OBJECT = TypeName("Object", JAVA_LANG_PACKAGE)
