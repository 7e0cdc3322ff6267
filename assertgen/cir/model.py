from dataclasses import dataclass, field
from typing import Literal, Optional, Tuple

Visibility = Literal["public", "protected", "private", "package"]
TypeKind = Literal["class", "interface", "enum", "annotation"]
Wildcard = Literal["extends", "super", "any"]


@dataclass(frozen=True)
class TypeRef:
    """
    A type as written in source, before resolution.

    name keeps the source spelling ("List", "java.util.List", "Map.Entry"),
    arguments are the generic arguments, dimensions the array depth.

    A wildcard argument is named after its upper bound ("? extends Item" ->
    Item, "?" and "? super X" -> Object) so element lookups can use it as
    is; wildcard and lower_bound keep what is needed to spell it back.
    """
    name: str
    arguments: Tuple["TypeRef", ...] = ()
    dimensions: int = 0
    wildcard: Optional[Wildcard] = None
    lower_bound: Optional["TypeRef"] = None

    def text(self) -> str:
        if self.wildcard == "any":
            return "?"
        if self.wildcard == "super" and self.lower_bound is not None:
            return "? super " + self.lower_bound.text()
        out = self.name
        if self.arguments:
            out += "<" + ", ".join(a.text() for a in self.arguments) + ">"
        out += "[]" * self.dimensions
        return "? extends " + out if self.wildcard == "extends" else out

    def component(self) -> "TypeRef":
        return TypeRef(self.name, self.arguments, max(self.dimensions - 1, 0))


@dataclass
class TypeDecl:
    id: str
    name: str
    kind: TypeKind
    visibility: Visibility = "package"
    package: str = ""
    outer: Optional[str] = None          # qualified name of the enclosing type
    modifiers: Tuple[str, ...] = ()
    annotations: Tuple[str, ...] = ()
    type_parameters: Tuple[str, ...] = ()
    extends: Tuple[TypeRef, ...] = ()
    implements: Tuple[TypeRef, ...] = ()
    imports: Tuple[str, ...] = ()        # imports of the compilation unit
    is_abstract: bool = False
    is_final: bool = False
    is_static: bool = False
    is_local: bool = False
    is_anonymous: bool = False
    source_file: Optional[str] = None

    @property
    def name_with_outer(self) -> str:
        """Outer-qualified simple name, e.g. "Outer.Inner"."""
        if self.package and self.qualified_name.startswith(self.package + "."):
            return self.qualified_name[len(self.package) + 1:]
        return self.qualified_name

    @property
    def qualified_name(self) -> str:
        return self.id[len("type:"):]


@dataclass
class Field:
    id: str
    name: str
    type: TypeRef
    visibility: Visibility = "package"
    modifiers: Tuple[str, ...] = ()
    annotations: Tuple[str, ...] = ()
    is_static: bool = False
    owner: str = ""                      # qualified name of the declaring type


@dataclass
class Parameter:
    id: str
    name: str
    type: TypeRef


@dataclass
class Method:
    id: str
    name: str
    return_type: Optional[TypeRef]       # None means void
    visibility: Visibility = "package"
    modifiers: Tuple[str, ...] = ()
    annotations: Tuple[str, ...] = ()
    parameters: Tuple[Parameter, ...] = ()
    throws: Tuple[str, ...] = ()
    is_static: bool = False
    is_abstract: bool = False
    owner: str = ""                      # qualified name of the declaring type
    type_parameters: Tuple[str, ...] = field(default_factory=tuple)
