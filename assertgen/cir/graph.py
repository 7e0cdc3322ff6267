from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

import networkx as nx  # type: ignore

from assertgen.cir.model import Field, Method, TypeDecl, TypeRef
from assertgen.errors import ClassNotFoundError

HIERARCHY_EDGES = ("INHERITS", "IMPLEMENTS")
PRIMITIVES = {"int", "long", "short", "byte", "float", "double", "char", "boolean", "void"}
OBJECT = "java.lang.Object"
ITERABLE = "java.lang.Iterable"

# (type reference, declaration whose scope the reference was written in)
ScopedRef = Tuple[TypeRef, Optional[TypeDecl]]
Member = Union[Field, Method]


class TypeCatalog:
    """
    Typed multi-graph of parsed Java declarations.
    Nodes: TypeDecl, Field, Method, Parameter
    Edges: HAS_FIELD, HAS_METHOD, PARAM_OF, NESTED_IN, INHERITS, IMPLEMENTS

    INHERITS / IMPLEMENTS edges carry the declared super type reference
    under "ref" so generic arguments can be followed up the hierarchy.

    This is the only place that knows how Java names resolve; the
    description layer talks to it through list_members / member_type /
    generic_element_type.
    """

    def __init__(self) -> None:
        self.g = nx.MultiDiGraph()
        self.g.graph["parse_errors"] = []

    # ---------------- building ----------------

    def add_node(self, node_id: str, kind: str, payload: Any) -> None:
        self.g.add_node(node_id, kind=kind, payload=payload)

    def add_edge(self, src: str, dst: str, etype: str, **attrs: Any) -> None:
        self.g.add_edge(src, dst, etype=etype, **attrs)

    def add_type(self, decl: TypeDecl) -> None:
        self.add_node(decl.id, "TypeDecl", decl)
        if decl.outer:
            self.add_edge(decl.id, f"type:{decl.outer}", "NESTED_IN")

    def add_field(self, owner: TypeDecl, field: Field) -> None:
        self.add_node(field.id, "Field", field)
        self.add_edge(owner.id, field.id, "HAS_FIELD")

    def add_method(self, owner: TypeDecl, method: Method) -> None:
        self.add_node(method.id, "Method", method)
        self.add_edge(owner.id, method.id, "HAS_METHOD")
        for p in method.parameters:
            self.add_node(p.id, "Parameter", p)
            self.add_edge(p.id, method.id, "PARAM_OF")

    def link_hierarchy(self) -> None:
        """
        Resolve extends / implements clauses into INHERITS / IMPLEMENTS
        edges. Classes without an extends clause inherit from Object,
        enums from Enum<Self>. Safe to call again after adding types.
        """
        for decl in self.types():
            if self._has_hierarchy_edges(decl) or decl.qualified_name == OBJECT:
                continue

            extends = list(decl.extends)
            if not extends and decl.kind == "enum":
                extends = [TypeRef("java.lang.Enum", (TypeRef(decl.qualified_name),))]
            elif not extends and decl.kind in ("class", "annotation"):
                extends = [TypeRef(OBJECT)]

            for ref in extends:
                target = self.resolve(ref.name, decl)
                if target is not None and target.id != decl.id:
                    self.add_edge(decl.id, target.id, "INHERITS", ref=ref)

            for ref in decl.implements:
                target = self.resolve(ref.name, decl)
                if target is not None and target.id != decl.id:
                    self.add_edge(decl.id, target.id, "IMPLEMENTS", ref=ref)

    def _has_hierarchy_edges(self, decl: TypeDecl) -> bool:
        return any(d.get("etype") in HIERARCHY_EDGES for _, _, d in self.g.out_edges(decl.id, data=True))

    # ---------------- lookups ----------------

    def types(self) -> List[TypeDecl]:
        return [d["payload"] for _, d in self.g.nodes(data=True) if d.get("kind") == "TypeDecl"]

    def find(self, qualified_name: Optional[str]) -> Optional[TypeDecl]:
        if not qualified_name:
            return None
        data = self.g.nodes.get(f"type:{qualified_name}")
        if data is None or data.get("kind") != "TypeDecl":
            return None
        return data["payload"]

    def _targets(self, decl: TypeDecl, etype: str) -> List[Any]:
        out = []
        for _, dst, data in self.g.out_edges(decl.id, data=True):
            if data.get("etype") == etype:
                out.append(self.g.nodes[dst]["payload"])
        return out

    def fields_of(self, decl: TypeDecl) -> List[Field]:
        return self._targets(decl, "HAS_FIELD")

    def methods_of(self, decl: TypeDecl) -> List[Method]:
        return self._targets(decl, "HAS_METHOD")

    def nested_types_of(self, decl: TypeDecl) -> List[TypeDecl]:
        out = []
        for src, _, data in self.g.in_edges(decl.id, data=True):
            if data.get("etype") == "NESTED_IN":
                out.append(self.g.nodes[src]["payload"])
        return out

    def types_in_package(self, package: str) -> List[TypeDecl]:
        """Types of a package and its sub packages, sorted by qualified name."""
        found = [t for t in self.types() if t.package == package or t.package.startswith(package + ".")]
        return sorted(found, key=lambda t: t.qualified_name)

    def has_package(self, package: str) -> bool:
        return any(t.package == package or t.package.startswith(package + ".") for t in self.types())

    def collect(self, class_or_package_names: Iterable[str]) -> List[TypeDecl]:
        """
        Types named directly, or public types of the named packages (sub
        packages included). Local and anonymous types are left out of
        package scans.
        """
        found: List[TypeDecl] = []
        for name in class_or_package_names:
            decl = self.find(name)
            if decl is not None:
                found.append(decl)
                continue
            if not self.has_package(name):
                raise ClassNotFoundError(f"Class or package not found: {name}")
            for t in self.types_in_package(name):
                if t.visibility == "public" and not t.is_local and not t.is_anonymous \
                        and not self._inside_local_type(t):
                    found.append(t)

        unique: Dict[str, TypeDecl] = {}
        for t in found:
            unique.setdefault(t.id, t)
        return list(unique.values())

    def _inside_local_type(self, decl: TypeDecl) -> bool:
        scope = self.find(decl.outer) if decl.outer else None
        while scope is not None:
            if scope.is_local or scope.is_anonymous:
                return True
            scope = self.find(scope.outer) if scope.outer else None
        return False

    def is_local_or_anonymous(self, decl: TypeDecl) -> bool:
        return decl.is_local or decl.is_anonymous or self._inside_local_type(decl)

    # ---------------- name resolution ----------------

    def resolve(self, name: str, context: Optional[TypeDecl] = None) -> Optional[TypeDecl]:
        """
        Resolve a type name written inside `context` the way javac does:
        enclosing scopes and their member types, single-type imports,
        same package, on-demand imports, then java.lang.
        """
        if not name or name in PRIMITIVES:
            return None

        if "." in name:
            found = self.find(name)
            if found is not None:
                return found
            head, _, rest = name.partition(".")
            if head[:1].isupper():
                outer = self.resolve(head, context)
                if outer is not None:
                    return self.find(f"{outer.qualified_name}.{rest}")
            return None

        if context is not None:
            scope: Optional[TypeDecl] = context
            while scope is not None:
                if scope.name == name:
                    return scope
                member = self._member_type(scope, name)
                if member is not None:
                    return member
                scope = self.find(scope.outer) if scope.outer else None

            for imp in context.imports:
                if not imp.endswith(".*") and imp.rsplit(".", 1)[-1] == name:
                    return self.find(imp)

            same_pkg = f"{context.package}.{name}" if context.package else name
            found = self.find(same_pkg)
            if found is not None:
                return found

            for imp in context.imports:
                if imp.endswith(".*"):
                    found = self.find(f"{imp[:-2]}.{name}")
                    if found is not None:
                        return found

        return self.find(f"java.lang.{name}")

    def _member_type(self, scope: TypeDecl, name: str) -> Optional[TypeDecl]:
        """Member types are inherited, so look at the super types as well."""
        direct = self.find(f"{scope.qualified_name}.{name}")
        if direct is not None:
            return direct
        for sup in self.ancestors(scope):
            found = self.find(f"{sup.qualified_name}.{name}")
            if found is not None:
                return found
        return None

    def qualify(self, name: str, context: Optional[TypeDecl] = None) -> Tuple[str, str]:
        """
        Returns (package, outer-qualified simple name) for a type name.
        Names outside the catalog fall back to their import, or to the
        package of the context when nothing else matches.
        """
        if name in PRIMITIVES:
            return "", name

        decl = self.resolve(name, context)
        if decl is not None:
            return decl.package, decl.name_with_outer

        if "." in name and name[:1].islower():
            parts = name.split(".")
            for i, part in enumerate(parts):
                if part[:1].isupper():
                    return ".".join(parts[:i]), ".".join(parts[i:])
            return ".".join(parts[:-1]), parts[-1]

        if context is not None:
            head = name.split(".")[0]
            for imp in context.imports:
                if not imp.endswith(".*") and imp.rsplit(".", 1)[-1] == head:
                    return imp.rsplit(".", 1)[0], name
            return context.package, name
        return "", name

    def is_type_variable(self, name: str, context: Optional[TypeDecl], extra: Tuple[str, ...] = ()) -> bool:
        if name in extra:
            return True
        scope = context
        while scope is not None:
            if name in scope.type_parameters:
                return True
            if scope.is_static:
                break
            scope = self.find(scope.outer) if scope.outer else None
        return False

    # ---------------- hierarchy ----------------

    def supertypes(self, decl: TypeDecl) -> List[Tuple[TypeDecl, TypeRef]]:
        """Direct super class first, then interfaces, in declaration order."""
        inherits, implements = [], []
        for _, dst, data in self.g.out_edges(decl.id, data=True):
            etype = data.get("etype")
            if etype == "INHERITS":
                inherits.append((self.g.nodes[dst]["payload"], data["ref"]))
            elif etype == "IMPLEMENTS":
                implements.append((self.g.nodes[dst]["payload"], data["ref"]))
        return inherits + implements

    def superclass(self, decl: TypeDecl) -> Optional[TypeDecl]:
        if decl.kind == "interface":
            return None
        for sup, _ in self.supertypes(decl):
            if sup.kind != "interface":
                return sup
        return None

    def ancestors(self, decl: TypeDecl) -> List[TypeDecl]:
        """Transitive super types, nearest first, each listed once."""
        seen = {decl.id}
        order: List[TypeDecl] = []
        queue = [decl]
        while queue:
            current = queue.pop(0)
            for sup, _ in self.supertypes(current):
                if sup.id not in seen:
                    seen.add(sup.id)
                    order.append(sup)
                    queue.append(sup)
        return order

    def is_subtype_of(self, decl: TypeDecl, qualified_name: str) -> bool:
        target = f"type:{qualified_name}"
        if decl.id == target:
            return True
        if target not in self.g:
            return False
        hierarchy = nx.subgraph_view(
            self.g,
            filter_edge=lambda u, v, k: self.g.edges[u, v, k].get("etype") in HIERARCHY_EDGES,
        )
        return nx.has_path(hierarchy, decl.id, target)

    # ---------------- abstract catalog interface ----------------

    def list_members(self, decl: TypeDecl, declared_only: bool = False) -> List[Member]:
        """
        Fields and methods visible on a type. A member declared closer to
        the type hides one with the same signature further up.
        """
        owners = [decl] if declared_only else [decl] + self.ancestors(decl)
        seen_fields, seen_methods = set(), set()
        members: List[Member] = []
        for owner in owners:
            for f in self.fields_of(owner):
                if f.name not in seen_fields:
                    seen_fields.add(f.name)
                    members.append(f)
            for m in self.methods_of(owner):
                key = (m.name, len(m.parameters))
                if key not in seen_methods:
                    seen_methods.add(key)
                    members.append(m)
        return members

    def member_type(self, member: Member) -> Optional[TypeRef]:
        if isinstance(member, Field):
            return member.type
        return member.return_type

    def generic_element_type(self, ref: TypeRef, context: Optional[TypeDecl]) -> ScopedRef:
        """
        Element type of an array or enumerable reference. Falls back to
        Object when the reference carries no usable generic argument.
        """
        fallback: ScopedRef = (TypeRef(OBJECT), None)
        if ref.dimensions:
            return ref.component(), context
        if not ref.arguments:
            return fallback
        decl = self.resolve(ref.name, context)
        if decl is None:
            return fallback
        args = tuple((a, context) for a in ref.arguments)
        found = self._argument_towards(decl, args, ITERABLE, set())
        return found if found is not None else fallback

    def _argument_towards(self, decl: TypeDecl, args: Tuple[ScopedRef, ...], target: str,
                          seen: set) -> Optional[ScopedRef]:
        if decl.qualified_name == target:
            return args[0] if args else None
        if decl.id in seen:
            return None
        seen.add(decl.id)

        bindings: Dict[str, ScopedRef] = dict(zip(decl.type_parameters, args))
        for sup, sref in self.supertypes(decl):
            sup_args = tuple(self._substitute(a, decl, bindings) for a in sref.arguments)
            found = self._argument_towards(sup, sup_args, target, seen)
            if found is not None:
                return found
        return None

    def _substitute(self, ref: TypeRef, scope: TypeDecl, bindings: Dict[str, ScopedRef]) -> ScopedRef:
        if ref.name in bindings and not ref.arguments:
            bound, bound_scope = bindings[ref.name]
            return TypeRef(bound.name, bound.arguments, bound.dimensions + ref.dimensions), bound_scope
        return ref, scope

    # ---------------- debug view ----------------

    def to_debug_json(self) -> Dict[str, Any]:
        """
        Convert graph to JSON-like dict for debugging / API responses.
        """
        nodes = []
        for node_id, data in self.g.nodes(data=True):
            payload = data.get("payload")
            attrs = dict(payload.__dict__) if hasattr(payload, "__dict__") else {}
            for key, value in attrs.items():
                if isinstance(value, TypeRef):
                    attrs[key] = value.text()
                elif isinstance(value, tuple):
                    attrs[key] = [v.text() if isinstance(v, TypeRef) else getattr(v, "name", v) for v in value]
            nodes.append({"id": node_id, "kind": data.get("kind"), "attrs": attrs})

        edges = []
        for src, dst, data in self.g.edges(data=True):
            edges.append({"src": src, "dst": dst, "type": data.get("etype")})

        return {"nodes": nodes, "edges": edges, "parse_errors": list(self.g.graph.get("parse_errors", []))}
