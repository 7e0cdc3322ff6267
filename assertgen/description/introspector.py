import logging
from typing import Dict, Iterable, List, Optional, Tuple

from assertgen import config
from assertgen.cir.graph import OBJECT, TypeCatalog
from assertgen.cir.model import Field, Method, TypeDecl, TypeRef
from assertgen.description import naming
from assertgen.description.model import ClassDescription, FieldDescription, GetterDescription
from assertgen.description.shape import Bindings, PropertyShapeClassifier
from assertgen.description.typename import TypeName
from assertgen.errors import InvalidArgumentError

logger = logging.getLogger(__name__)

COMPARABLE = "java.lang.Comparable"
ENUM_DECLARING_CLASS_GETTER = "getDeclaringClass"


class AnnotationConfiguration:
    """
    Decides which methods are getters beyond the naming convention.

    A zero-argument, non-void method annotated with one of the included
    annotations is a getter whatever its name; when the type itself carries
    one, every such method of the type is.
    """

    def __init__(self, included_annotations: Iterable[str] = config.INCLUDED_ANNOTATIONS) -> None:
        # annotations are compared by simple name
        self.included_annotations = frozenset(a.split(".")[-1] for a in included_annotations)

    def type_opts_in(self, decl: Optional[TypeDecl]) -> bool:
        return decl is not None and bool(self.included_annotations.intersection(decl.annotations))

    def member_opts_in(self, method: Method) -> bool:
        return bool(self.included_annotations.intersection(method.annotations))

    def is_eligible(self, method: Method, owner: Optional[TypeDecl]) -> bool:
        return self.member_opts_in(method) or self.type_opts_in(owner)


class Introspector:
    """
    Builds the ClassDescription of a catalog type: its getters and fields,
    all visible ones and the ones declared on the type itself.
    """

    def __init__(self, catalog: TypeCatalog, annotation_configuration: Optional[AnnotationConfiguration] = None,
                 include_non_public_fields: bool = False) -> None:
        self.catalog = catalog
        self.classifier = PropertyShapeClassifier(catalog)
        self.annotations = annotation_configuration or AnnotationConfiguration()
        self.include_non_public_fields = include_non_public_fields

    # ---------------- entry points ----------------

    def describe_name(self, qualified_name: str) -> ClassDescription:
        found = self.catalog.collect([qualified_name])
        return self.describe(found[0])

    def describe_all(self, class_or_package_names: Iterable[str]) -> List[ClassDescription]:
        return [self.describe(decl) for decl in self.catalog.collect(class_or_package_names)]

    def describe(self, decl: TypeDecl) -> ClassDescription:
        if self.catalog.is_local_or_anonymous(decl):
            raise InvalidArgumentError(f"Can not support Local class {decl.qualified_name}")

        bindings = self.classifier.hierarchy_bindings(decl)
        getters = self._getters(decl, bindings, declared_only=False)
        declared_getters = self._getters(decl, bindings, declared_only=True)
        fields = self._fields(decl, bindings, declared_only=False)
        declared_fields = self._fields(decl, bindings, declared_only=True)

        description = ClassDescription(
            type_name=self.type_name_of(decl),
            super_type=self._super_type(decl),
            getters=tuple(getters),
            fields=tuple(f for f in fields if not self._has_getter_for_field(getters, f)),
            declared_getters=tuple(declared_getters),
            declared_fields=tuple(f for f in declared_fields if not self._has_getter_for_field(getters, f)),
            implements_comparable=self.catalog.is_subtype_of(decl, COMPARABLE),
        )
        logger.debug("Described %s: %d getters, %d fields", description.fully_qualified_class_name,
                     len(description.getters), len(description.fields))
        return description

    # ---------------- naming ----------------

    def type_name_of(self, decl: TypeDecl) -> TypeName:
        parts = decl.name_with_outer.split(".")
        return TypeName(parts[-1], decl.package, tuple(parts[:-1]))

    def _super_type(self, decl: TypeDecl) -> Optional[TypeName]:
        parent = self.catalog.superclass(decl)
        return self.type_name_of(parent) if parent is not None else None

    # ---------------- getters ----------------

    def is_getter(self, method: Method, subject: TypeDecl) -> bool:
        if method.is_static or method.parameters or method.return_type is None:
            return False
        if method.owner == OBJECT:
            return False
        if subject.kind == "enum" and method.name == ENUM_DECLARING_CLASS_GETTER:
            return False
        owner = self.catalog.find(method.owner)
        is_public = method.visibility == "public"
        if is_public and naming.is_standard_getter(method.name):
            return True
        if is_public and naming.is_predicate(method.name) and self._returns_boolean(method):
            return True
        return is_public and self.annotations.is_eligible(method, owner)

    def _returns_boolean(self, method: Method) -> bool:
        ref = method.return_type
        if ref is None or ref.dimensions:
            return False
        return ref.name in ("boolean", "Boolean", "java.lang.Boolean")

    def _getters(self, decl: TypeDecl, bindings: Dict[str, Bindings], declared_only: bool) -> List[GetterDescription]:
        getters = []
        for member in self.catalog.list_members(decl, declared_only=declared_only):
            if isinstance(member, Method) and self.is_getter(member, decl):
                getters.append(self._getter_description(member, bindings))
        return getters

    def _getter_description(self, method: Method, bindings: Dict[str, Bindings]) -> GetterDescription:
        owner = self.catalog.find(method.owner)
        predicate_named = naming.is_getter_name(method.name)
        value_type, shape = self.classifier.classify(
            method.return_type, owner, predicate_named, method.type_parameters, bindings.get(method.owner),
        )
        exceptions = tuple(
            self.classifier.value_type(TypeRef(name), owner).raw for name in method.throws
        )
        return GetterDescription(
            name=naming.property_name_of(method.name),
            member_name=method.name,
            value_type=value_type,
            shape=shape,
            owner=self.type_name_of(owner) if owner is not None else TypeName.parse(method.owner),
            exceptions=exceptions,
        )

    # ---------------- fields ----------------

    def is_described_field(self, field: Field) -> bool:
        if field.is_static:
            return False
        return field.visibility == "public" or self.include_non_public_fields

    def _fields(self, decl: TypeDecl, bindings: Dict[str, Bindings], declared_only: bool) -> List[FieldDescription]:
        fields = []
        for member in self.catalog.list_members(decl, declared_only=declared_only):
            if isinstance(member, Field) and self.is_described_field(member):
                fields.append(self._field_description(member, bindings))
        return fields

    def _field_description(self, field: Field, bindings: Dict[str, Bindings]) -> FieldDescription:
        owner = self.catalog.find(field.owner)
        # boolean fields are always predicates, "bad" reads as isBad
        value_type, shape = self.classifier.classify(field.type, owner, True, (), bindings.get(field.owner))
        return FieldDescription(
            name=field.name,
            member_name=field.name,
            value_type=value_type,
            shape=shape,
            owner=self.type_name_of(owner) if owner is not None else TypeName.parse(field.owner),
            visibility=field.visibility,
        )

    def _has_getter_for_field(self, getters: List[GetterDescription], field: FieldDescription) -> bool:
        """
        A field is already covered when a getter returns the same type under
        the conventional name (getName for name, any predicate spelling for
        a boolean field).
        """
        names: Tuple[str, ...] = (naming.GET_PREFIX + naming.capitalize(field.name),)
        if field.value_type.raw.is_boolean() and not field.value_type.is_array():
            names = names + naming.predicate_closure(field.name)
        for getter in getters:
            if getter.member_name in names and getter.value_type == field.value_type:
                return True
        return False
