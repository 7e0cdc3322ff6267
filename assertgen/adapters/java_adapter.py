import logging
import os
from typing import Iterable, List, Optional, Tuple

import javalang  # type: ignore

from assertgen.cir.graph import TypeCatalog
from assertgen.cir.model import Field, Method, Parameter, TypeDecl, TypeRef

logger = logging.getLogger(__name__)

OBJECT_REF = TypeRef("java.lang.Object")


class JavaAdapter:
    """
    Java -> TypeCatalog builder.
    Parses one or more Java compilation units and records, for every type
    declaration (top level, nested, local and anonymous):
      - HAS_FIELD, HAS_METHOD, PARAM_OF
      - NESTED_IN
      - INHERITS, IMPLEMENTS (with the declared generic arguments)

    Includes:
      - Multi-file (project-level) support on top of the JDK stubs
      - Generics, wildcards and arrays kept as TypeRef
      - Interface member defaults (public, static fields, abstract methods)
      - Imports kept per type so names resolve like javac does
      - Skips invalid Java files during project parsing (collect errors)
    """

    # ---------------- Helpers ----------------

    def _visibility_from_mods(self, mods: Optional[set], in_interface: bool = False) -> str:
        mods = mods or set()
        if "public" in mods:
            return "public"
        if "private" in mods:
            return "private"
        if "protected" in mods:
            return "protected"
        return "public" if in_interface else "package"

    def _flags_from_mods(self, mods: Optional[set]) -> Tuple[bool, bool, bool]:
        """
        Returns (is_static, is_abstract, is_final)
        """
        mods = mods or set()
        return ("static" in mods, "abstract" in mods, "final" in mods)

    def _annotation_names(self, node) -> Tuple[str, ...]:
        # org.example.GenerateAssertion and GenerateAssertion are the same marker
        return tuple(a.name.split(".")[-1] for a in getattr(node, "annotations", None) or [])

    def _type_ref(self, t, extra_dimensions: int = 0) -> Optional[TypeRef]:
        """
        From a javalang Type node, derive a TypeRef. Qualified names such as
        java.util.List or Map.Entry arrive as a chain of sub_type nodes.
        """
        if t is None:
            return None

        dims = len(getattr(t, "dimensions", None) or []) + extra_dimensions
        if isinstance(t, javalang.tree.BasicType):
            return TypeRef(t.name, (), dims)

        names: List[str] = []
        arguments: Tuple[TypeRef, ...] = ()
        node = t
        while node is not None:
            names.append(node.name)
            if getattr(node, "arguments", None):
                arguments = tuple(self._type_argument(a) for a in node.arguments)
            node = getattr(node, "sub_type", None)
        return TypeRef(".".join(names), arguments, dims)

    def _type_argument(self, arg) -> TypeRef:
        inner = self._type_ref(getattr(arg, "type", None))
        pattern = getattr(arg, "pattern_type", None)
        if pattern == "super" and inner is not None:
            # ? super X has Object as upper bound
            return TypeRef(OBJECT_REF.name, wildcard="super", lower_bound=inner)
        if inner is None:
            return TypeRef(OBJECT_REF.name, wildcard="any")
        if pattern == "extends":
            return TypeRef(inner.name, inner.arguments, inner.dimensions, wildcard="extends")
        return inner

    def _type_parameters(self, node) -> Tuple[str, ...]:
        return tuple(p.name for p in getattr(node, "type_parameters", None) or [])

    def _body_declarations(self, t) -> list:
        body = getattr(t, "body", None)
        if body is None:
            return []
        # enum bodies wrap their members next to the constants
        if hasattr(body, "declarations"):
            return list(body.declarations or [])
        return list(body)

    # ---------------- Local / anonymous classes ----------------

    def _walk_ast_in_order(self, node):
        """
        Pre-order traversal that yields nodes in a stable source-like order.
        Does not descend into class bodies found on the way, those are
        walked when their own declaration is processed.
        """
        if node is None:
            return
        yield node
        if self._is_local_type(node):
            return
        children = getattr(node, "children", None)
        if not children:
            return
        for c in children:
            if c is None:
                continue
            if isinstance(c, (list, tuple)):
                for item in c:
                    yield from self._walk_ast_in_order(item)
            else:
                yield from self._walk_ast_in_order(c)

    def _is_local_type(self, node) -> bool:
        if isinstance(node, (javalang.tree.ClassDeclaration, javalang.tree.InterfaceDeclaration,
                             javalang.tree.EnumDeclaration)):
            return True
        return isinstance(node, javalang.tree.ClassCreator) and bool(getattr(node, "body", None))

    def _extract_local_types(self, method_or_ctor) -> List:
        found = []
        body = getattr(method_or_ctor, "body", None)
        if not body:
            return found
        nodes = body if isinstance(body, list) else [body]
        for stmt in nodes:
            for n in self._walk_ast_in_order(stmt):
                if self._is_local_type(n):
                    found.append(n)
        return found

    # ---------------- Parsing entry points ----------------

    def parse_to_ast(self, code: str):
        try:
            return javalang.parse.parse(code)
        except javalang.parser.JavaSyntaxError as e:
            raise ValueError(f"Java syntax error: {e.description if hasattr(e, 'description') else e}")
        except Exception as e:
            raise ValueError(f"Failed to parse Java code: {e}")

    def build_catalog_for_code(self, code: str, filename: Optional[str] = None,
                               catalog: Optional[TypeCatalog] = None) -> TypeCatalog:
        """
        Single-compilation-unit helper (for the HTTP service and tests).
        """
        from assertgen.cir.jdk import new_catalog

        catalog = catalog if catalog is not None else new_catalog()
        self.process_compilation_unit(code, catalog, source_file=filename)
        catalog.link_hierarchy()
        return catalog

    def build_catalog_for_sources(self, sources: Iterable[str],
                                  catalog: Optional[TypeCatalog] = None) -> TypeCatalog:
        """
        Several in-memory compilation units. Units that do not parse are
        reported under parse_errors like unreadable files.
        """
        from assertgen.cir.jdk import new_catalog

        catalog = catalog if catalog is not None else new_catalog()
        for index, code in enumerate(sources):
            name = f"<source {index}>"
            try:
                self.process_compilation_unit(code, catalog, source_file=name)
            except ValueError as e:
                logger.warning("Skipping %s: %s", name, e)
                catalog.g.graph["parse_errors"].append({"file": name, "error": str(e)})
        catalog.link_hierarchy()
        return catalog

    def build_catalog_for_files(self, files: List[str],
                                catalog: Optional[TypeCatalog] = None) -> TypeCatalog:
        """
        Multi-file/project-level catalog builder.
        Skips invalid Java files but continues parsing the rest.
        """
        from assertgen.cir.jdk import new_catalog

        catalog = catalog if catalog is not None else new_catalog()
        errors = catalog.g.graph["parse_errors"]

        for path in files:
            try:
                with open(path, "r", encoding="utf-8") as f:
                    code = f.read()
                self.process_compilation_unit(code, catalog, source_file=path)
            except (OSError, ValueError) as e:
                logger.warning("Skipping %s: %s", path, e)
                errors.append({"file": path, "error": str(e)})
                continue

        catalog.link_hierarchy()
        return catalog

    # ---------------- Core processing ----------------

    def process_compilation_unit(self, code: str, catalog: TypeCatalog,
                                 source_file: Optional[str] = None) -> List[TypeDecl]:
        tree = self.parse_to_ast(code)
        package_name = getattr(getattr(tree, "package", None), "name", None) or ""

        imports = []
        for imp in tree.imports or []:
            if imp.static:
                continue
            imports.append(f"{imp.path}.*" if imp.wildcard else imp.path)

        declared: List[TypeDecl] = []
        for t in tree.types:
            self._process_type(t, catalog, package_name, tuple(imports), None, source_file, declared)
        return declared

    def _process_type(self, t, catalog: TypeCatalog, package: str, imports: Tuple[str, ...],
                      outer: Optional[TypeDecl], source_file: Optional[str], declared: List[TypeDecl],
                      is_local: bool = False, anonymous_index: Optional[int] = None) -> TypeDecl:
        is_anonymous = anonymous_index is not None
        if is_anonymous:
            short_name = str(anonymous_index)
            kind = "class"
            mods: set = set()
        else:
            short_name = t.name
            kind = type(t).__name__.replace("Declaration", "").lower()
            mods = set(t.modifiers or set())

        if outer is not None:
            full_name = f"{outer.qualified_name}.{short_name}"
        else:
            full_name = f"{package}.{short_name}" if package else short_name

        in_interface = outer is not None and outer.kind in ("interface", "annotation")
        is_static, is_abstract, is_final = self._flags_from_mods(mods)
        if outer is not None and not is_local and (kind in ("interface", "enum", "annotation") or in_interface):
            is_static = True
        if kind == "interface":
            is_abstract = True

        extends: Tuple[TypeRef, ...] = ()
        implements: Tuple[TypeRef, ...] = ()
        if is_anonymous:
            extends = (self._type_ref(t.type),)
        else:
            raw_extends = getattr(t, "extends", None)
            if raw_extends:
                if isinstance(raw_extends, list):
                    refs = tuple(self._type_ref(e) for e in raw_extends)
                else:
                    refs = (self._type_ref(raw_extends),)
                # an interface "extends" other interfaces
                if kind == "interface":
                    implements = refs
                else:
                    extends = refs
            if getattr(t, "implements", None):
                implements = implements + tuple(self._type_ref(i) for i in t.implements)

        type_decl = TypeDecl(
            id=f"type:{full_name}",
            name=short_name,
            kind=kind,
            visibility="package" if is_local or is_anonymous else self._visibility_from_mods(mods, in_interface),
            package=package,
            outer=outer.qualified_name if outer is not None else None,
            modifiers=tuple(sorted(mods)),
            annotations=() if is_anonymous else self._annotation_names(t),
            type_parameters=() if is_anonymous else self._type_parameters(t),
            extends=extends,
            implements=implements,
            imports=imports,
            is_abstract=is_abstract,
            is_final=is_final,
            is_static=is_static,
            is_local=is_local,
            is_anonymous=is_anonymous,
            source_file=source_file,
        )
        catalog.add_type(type_decl)
        declared.append(type_decl)

        is_interface = kind in ("interface", "annotation")
        anonymous_count = 0
        bodies = []

        for member in self._body_declarations(t):
            # ---------- fields ----------
            if isinstance(member, javalang.tree.FieldDeclaration):
                mods_f = set(member.modifiers or set())
                for decl in member.declarators:
                    ref = self._type_ref(member.type, len(getattr(decl, "dimensions", None) or []))
                    field_node = Field(
                        id=f"field:{full_name}:{decl.name}",
                        name=decl.name,
                        type=ref,
                        visibility=self._visibility_from_mods(mods_f, is_interface),
                        modifiers=tuple(sorted(mods_f)),
                        annotations=self._annotation_names(member),
                        is_static=is_interface or "static" in mods_f,
                        owner=full_name,
                    )
                    catalog.add_field(type_decl, field_node)

            # ---------- methods ----------
            elif isinstance(member, javalang.tree.MethodDeclaration):
                mods_m = set(member.modifiers or set())
                m_static, m_abstract, _ = self._flags_from_mods(mods_m)
                if is_interface and member.body is None and not m_static and "default" not in mods_m:
                    m_abstract = True

                params = []
                sig = []
                for p in member.parameters or []:
                    p_ref = self._type_ref(p.type, 1 if getattr(p, "varargs", False) else 0)
                    sig.append(p_ref.text())
                    params.append((p.name, p_ref))
                method_id = f"method:{full_name}:{member.name}({','.join(sig)})"

                method_node = Method(
                    id=method_id,
                    name=member.name,
                    return_type=self._type_ref(member.return_type),
                    visibility=self._visibility_from_mods(mods_m, is_interface),
                    modifiers=tuple(sorted(mods_m)),
                    annotations=self._annotation_names(member),
                    parameters=tuple(
                        Parameter(id=f"param:{method_id}:{name}", name=name, type=ref) for name, ref in params
                    ),
                    throws=tuple(member.throws or ()),
                    is_static=m_static,
                    is_abstract=m_abstract,
                    owner=full_name,
                    type_parameters=self._type_parameters(member),
                )
                catalog.add_method(type_decl, method_node)
                bodies.append(member)

            # ---------- constructors ----------
            elif isinstance(member, javalang.tree.ConstructorDeclaration):
                bodies.append(member)

            # ---------- nested types ----------
            elif isinstance(member, (javalang.tree.ClassDeclaration, javalang.tree.InterfaceDeclaration,
                                     javalang.tree.EnumDeclaration, javalang.tree.AnnotationDeclaration)):
                self._process_type(member, catalog, package, imports, type_decl, source_file, declared)

        # ---------- local / anonymous classes in method bodies ----------
        for body_owner in bodies:
            for local in self._extract_local_types(body_owner):
                if isinstance(local, javalang.tree.ClassCreator):
                    anonymous_count += 1
                    self._process_type(local, catalog, package, imports, type_decl, source_file, declared,
                                       anonymous_index=anonymous_count)
                else:
                    self._process_type(local, catalog, package, imports, type_decl, source_file, declared,
                                       is_local=True)

        return type_decl


def collect_java_files(paths: Iterable[str]) -> List[str]:
    """Expand directories into the .java files below them, sorted."""
    files: List[str] = []
    for path in paths:
        if os.path.isdir(path):
            for root, _, names in os.walk(path):
                files.extend(os.path.join(root, n) for n in names if n.endswith(".java"))
        else:
            files.append(path)
    return sorted(files)
