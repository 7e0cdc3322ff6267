from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Callable, Dict, Literal, Optional, Tuple

from assertgen.cir.graph import ITERABLE, TypeCatalog
from assertgen.cir.model import TypeDecl, TypeRef, Wildcard
from assertgen.description.typename import OBJECT, TypeName

ShapeKind = Literal[
    "array",
    "enumerable",
    "boolean_predicate",
    "real_number",
    "whole_number",
    "char",
    "primitive",
    "boxed_primitive",
    "plain",
]

# enumerable types whose elements are not worth asserting on one by one
ENUMERABLE_DENY_LIST = ("java.nio.file.Path",)


@dataclass(frozen=True)
class ValueType:
    """
    A resolved member type: raw type name, generic arguments, array depth.
    Only generic arguments carry a wildcard; raw is then the upper bound.
    """
    raw: TypeName
    arguments: Tuple["ValueType", ...] = ()
    dimensions: int = 0
    wildcard: Optional[Wildcard] = None
    lower_bound: Optional["ValueType"] = None

    def is_array(self) -> bool:
        return self.dimensions > 0

    def component(self) -> "ValueType":
        return ValueType(self.raw, self.arguments, max(self.dimensions - 1, 0))

    def _spelling(self, raw_name: str, spell: Callable[["ValueType"], str]) -> str:
        if self.wildcard == "any":
            return "?"
        if self.wildcard == "super" and self.lower_bound is not None:
            return "? super " + spell(self.lower_bound)
        out = raw_name
        if self.arguments:
            out += "<" + ", ".join(spell(a) for a in self.arguments) + ">"
        out += "[]" * self.dimensions
        return "? extends " + out if self.wildcard == "extends" else out

    def declaration(self, target_package: Optional[str]) -> str:
        """Source spelling from the point of view of a class in target_package."""
        return self._spelling(self.raw.fully_qualified_name_if_needed(target_package),
                              lambda v: v.declaration(target_package))

    def simple_declaration(self) -> str:
        return self._spelling(self.raw.simple_name_with_outer_class, lambda v: v.simple_declaration())

    def __str__(self) -> str:
        return self._spelling(self.raw.fully_qualified_name, str)


OBJECT_TYPE = ValueType(OBJECT)

# type parameter name -> value it is bound to
Bindings = Dict[str, ValueType]


@dataclass(frozen=True)
class PropertyShape:
    """
    Exactly one semantic category per property. element_type is set for
    array and enumerable shapes only.
    """
    kind: ShapeKind
    boxed: bool = False
    element_type: Optional[ValueType] = None

    def __post_init__(self) -> None:
        has_elements = self.kind in ("array", "enumerable")
        if has_elements != (self.element_type is not None):
            raise ValueError(f"element type mismatch for a {self.kind} shape")

    @property
    def is_array(self) -> bool:
        return self.kind == "array"

    @property
    def is_enumerable(self) -> bool:
        return self.kind == "enumerable"

    @property
    def is_predicate(self) -> bool:
        return self.kind == "boolean_predicate"


class PropertyShapeClassifier:
    """
    Turns a declared member type into a ValueType and classifies it.
    Name resolution and generic element lookup go through the catalog.
    """

    def __init__(self, catalog: TypeCatalog) -> None:
        self.catalog = catalog

    # ---------------- resolution ----------------

    def value_type(self, ref: TypeRef, context: Optional[TypeDecl], type_variables: Tuple[str, ...] = (),
                   bindings: Optional[Bindings] = None) -> ValueType:
        """
        Type variables bound by a subclass (class Sub extends Base<Player>)
        take their bound type, the others are erased to Object. Array
        dimensions are kept either way.
        """
        if bindings and ref.name in bindings and not ref.arguments:
            bound = bindings[ref.name]
            return ValueType(bound.raw, bound.arguments, bound.dimensions + ref.dimensions)
        if self.catalog.is_type_variable(ref.name, context, type_variables):
            return ValueType(OBJECT, (), ref.dimensions)
        package, with_outer = self.catalog.qualify(ref.name, context)
        parts = with_outer.split(".")
        raw = TypeName(parts[-1], package, tuple(parts[:-1]))
        arguments = tuple(self.argument_value_type(a, context, type_variables, bindings) for a in ref.arguments)
        return ValueType(raw, arguments, ref.dimensions)

    def argument_value_type(self, ref: TypeRef, context: Optional[TypeDecl], type_variables: Tuple[str, ...] = (),
                            bindings: Optional[Bindings] = None) -> ValueType:
        """A generic argument, wildcard kept: List<? extends T> stays spelled with its wildcard."""
        value = self.value_type(ref, context, type_variables, bindings)
        if ref.wildcard is None:
            return value
        lower = None
        if ref.lower_bound is not None:
            lower = self.argument_value_type(ref.lower_bound, context, type_variables, bindings)
        return replace(value, wildcard=ref.wildcard, lower_bound=lower)

    def hierarchy_bindings(self, decl: TypeDecl) -> Dict[str, Bindings]:
        """
        For every ancestor of decl, the value of its type parameters as seen
        from decl, keyed by the ancestor's qualified name.
        """
        result: Dict[str, Bindings] = {decl.qualified_name: {}}
        queue = [decl]
        while queue:
            current = queue.pop(0)
            scope_bindings = result[current.qualified_name]
            for sup, sref in self.catalog.supertypes(current):
                if sup.qualified_name in result:
                    continue
                args = [self.value_type(a, current, (), scope_bindings) for a in sref.arguments]
                result[sup.qualified_name] = dict(zip(sup.type_parameters, args))
                queue.append(sup)
        return result

    def is_enumerable(self, ref: TypeRef, context: Optional[TypeDecl]) -> bool:
        if ref.dimensions:
            return False
        decl = self.catalog.resolve(ref.name, context)
        if decl is None or decl.qualified_name in ENUMERABLE_DENY_LIST:
            return False
        return self.catalog.is_subtype_of(decl, ITERABLE)

    def element_type(self, ref: TypeRef, context: Optional[TypeDecl], type_variables: Tuple[str, ...] = (),
                     bindings: Optional[Bindings] = None) -> ValueType:
        element_ref, scope = self.catalog.generic_element_type(ref, context)
        if scope is not context:
            # the reference was rewritten in a super type, outside the member's scope
            type_variables, bindings = (), None
        return self.value_type(element_ref, scope, type_variables, bindings)

    # ---------------- classification ----------------

    def classify(self, ref: TypeRef, context: Optional[TypeDecl], predicate_named: bool,
                 type_variables: Tuple[str, ...] = (),
                 bindings: Optional[Bindings] = None) -> Tuple[ValueType, PropertyShape]:
        value = self.value_type(ref, context, type_variables, bindings)
        raw = value.raw

        if value.is_array():
            return value, PropertyShape("array", element_type=value.component())

        if self.is_enumerable(ref, context):
            element = self.element_type(ref, context, type_variables, bindings)
            return value, PropertyShape("enumerable", element_type=element)

        boxed = raw.is_primitive_wrapper()
        if raw.is_boolean() and predicate_named:
            return value, PropertyShape("boolean_predicate", boxed=boxed)
        if raw.is_real_number():
            return value, PropertyShape("real_number", boxed=boxed)
        if raw.is_whole_number():
            return value, PropertyShape("whole_number", boxed=boxed)
        if raw.is_char():
            return value, PropertyShape("char", boxed=boxed)
        if raw.is_primitive():
            return value, PropertyShape("primitive")
        if boxed:
            return value, PropertyShape("boxed_primitive", boxed=True)
        return value, PropertyShape("plain")
