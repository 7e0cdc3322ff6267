import logging
import re
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Set, Tuple, Union

from assertgen import config
from assertgen.description.model import (
    ABSTRACT_PREFIX,
    ASSERT_CLASS_SUFFIX,
    ClassDescription,
    FieldDescription,
    GetterDescription,
    PropertyDescription,
)
from assertgen.description.typename import TypeName
from assertgen.errors import InvalidArgumentError
from assertgen.generator.sink import FileSystemSink
from assertgen.generator.templates import Template, TemplateRegistry, TemplateRole, default_template_registry, fill

logger = logging.getLogger(__name__)

LINE_SEPARATOR = "\n"
OBJECT_ASSERT_DECLARATION = "AbstractObjectAssert<"
COMPARABLE_ASSERT_DECLARATION = "AbstractComparableAssert<"
FIELD_EXTRACTION = 'org.assertj.core.util.introspection.FieldSupport.EXTRACTION.fieldValue("{name}", {type}.class, actual)'
GETTER_CALL = "${getter}()"
ACTUAL_GETTER_CALL = "actual.${getter}()"

# AssertJ types the default templates use by simple name
FRAMEWORK_TYPES = {
    "AbstractObjectAssert": "org.assertj.core.api.AbstractObjectAssert",
    "AbstractComparableAssert": "org.assertj.core.api.AbstractComparableAssert",
    "Objects": "org.assertj.core.util.Objects",
    "Iterables": "org.assertj.core.internal.Iterables",
    "ObjectArrays": "org.assertj.core.internal.ObjectArrays",
    "Assertions": "org.assertj.core.api.Assertions",
}

ROLES_BY_SHAPE = {
    # kind -> (primitive role, boxed role)
    "real_number": (TemplateRole.HAS_FOR_REAL_NUMBER, TemplateRole.HAS_FOR_REAL_NUMBER_WRAPPER),
    "whole_number": (TemplateRole.HAS_FOR_WHOLE_NUMBER, TemplateRole.HAS_FOR_WHOLE_NUMBER_WRAPPER),
    "char": (TemplateRole.HAS_FOR_CHAR, TemplateRole.HAS_FOR_CHARACTER),
}

Batch = Iterable[Union[TypeName, ClassDescription]]


def _uses(content: str, simple_name: str) -> bool:
    # a qualified reference (org.assertj.core.api.Assertions.within) needs no import
    return re.search(rf"(?<![\w.]){re.escape(simple_name)}\b", content) is not None


class AssertionGenerator:
    """
    Renders AssertJ custom assertion classes from ClassDescriptions.

    Flat mode gives one <Type>Assert class, hierarchical mode an
    Abstract<Type>Assert holding the assertions plus a concrete <Type>Assert
    mirroring the subject's inheritance.
    """

    def __init__(self, templates: Optional[TemplateRegistry] = None,
                 output_dir: Union[str, Path, None] = None,
                 generated_assertions_package: Optional[str] = None) -> None:
        self.templates = templates if templates is not None else default_template_registry()
        self.sink = FileSystemSink(output_dir if output_dir is not None else config.OUTPUT_DIR)
        self._generated_assertions_package: Optional[str] = None
        if generated_assertions_package is not None:
            self.generated_assertions_package = generated_assertions_package

    # ---------------- configuration ----------------

    @property
    def generated_assertions_package(self) -> Optional[str]:
        return self._generated_assertions_package

    @generated_assertions_package.setter
    def generated_assertions_package(self, package: Optional[str]) -> None:
        if package is not None and (not package.strip() or package != package.strip()):
            raise InvalidArgumentError(
                f"The given package '{package}' used to generate assertions is blank or has leading/trailing spaces"
            )
        self._generated_assertions_package = package

    def register(self, template: Template) -> None:
        self.templates.register(template)

    def set_directory_where_assertion_files_are_generated(self, directory: Union[str, Path]) -> None:
        self.sink = FileSystemSink(directory)

    def target_package(self, description: ClassDescription) -> str:
        return self._generated_assertions_package or description.package_name

    # ---------------- files ----------------

    def generate_custom_assertion_for(self, description: ClassDescription) -> Path:
        logger.info("Generating assertions for class : %s", description.fully_qualified_class_name)
        content = self.generate_custom_assertion_content_for(description)
        return self.sink.write(self.target_package(description), description.assert_class_filename, content)

    def generate_hierarchical_custom_assertion_for(self, description: ClassDescription,
                                                   batch: Batch) -> Tuple[Path, Path]:
        logger.info("Generating assertions for class : %s", description.fully_qualified_class_name)
        abstract_content, concrete_content = self.generate_hierarchical_custom_assertion_content_for(description, batch)
        package = self.target_package(description)
        return (
            self.sink.write(package, description.abstract_assert_class_filename, abstract_content),
            self.sink.write(package, description.assert_class_filename, concrete_content),
        )

    # ---------------- flat ----------------

    def generate_custom_assertion_content_for(self, description: ClassDescription) -> str:
        skeleton = self.templates.get_template(TemplateRole.ASSERT_CLASS).content
        if description.implements_comparable:
            skeleton = skeleton.replace(OBJECT_ASSERT_DECLARATION, COMPARABLE_ASSERT_DECLARATION)

        package = self.target_package(description)
        content = skeleton + self._properties_content(description, description.getters, description.fields, package)
        content += LINE_SEPARATOR + "}" + LINE_SEPARATOR

        super_assertion = "AbstractComparableAssert" if description.implements_comparable else "AbstractObjectAssert"
        return self._fill_class_level(content, description, package, description.assert_class_name,
                                      self_type=description.assert_class_name, myself="this",
                                      super_assertion_class=super_assertion, extra_imports=())

    # ---------------- hierarchical ----------------

    def generate_hierarchical_custom_assertion_content_for(self, description: ClassDescription,
                                                           batch: Batch) -> Tuple[str, str]:
        return (
            self._abstract_assertion_content(description, self._batch_type_names(batch)),
            self._concrete_assertion_content(description),
        )

    def _batch_type_names(self, batch: Batch) -> Set[TypeName]:
        names: Set[TypeName] = set()
        for item in batch or ():
            names.add(item.type_name if isinstance(item, ClassDescription) else item)
        return names

    def parent_assert_class(self, description: ClassDescription, batch: Set[TypeName]) -> Optional[TypeName]:
        """Abstract assert class of the super type, only when that type is generated too."""
        parent = description.super_type
        if parent is None or parent not in batch:
            return None
        package = self._generated_assertions_package or parent.package
        name = ABSTRACT_PREFIX + parent.simple_name_with_outer_class_not_separated_by_dots + ASSERT_CLASS_SUFFIX
        return TypeName(name, package)

    def _abstract_assertion_content(self, description: ClassDescription, batch: Set[TypeName]) -> str:
        package = self.target_package(description)
        parent_assert = self.parent_assert_class(description, batch)

        if parent_assert is not None:
            super_assertion = parent_assert.simple_name
            getters, fields = description.declared_getters, description.declared_fields
            extra_imports: Tuple[TypeName, ...] = (parent_assert,)
        else:
            # nothing generated above us: carry the inherited properties as well
            super_assertion = "AbstractComparableAssert" if description.implements_comparable \
                else "AbstractObjectAssert"
            getters, fields = description.getters, description.fields
            extra_imports = ()

        content = self.templates.get_template(TemplateRole.ABSTRACT_ASSERT_CLASS).content
        content += self._properties_content(description, getters, fields, package)
        content += LINE_SEPARATOR + "}" + LINE_SEPARATOR
        return self._fill_class_level(content, description, package, description.abstract_assert_class_name,
                                      self_type="S", myself="myself", super_assertion_class=super_assertion,
                                      extra_imports=extra_imports)

    def _concrete_assertion_content(self, description: ClassDescription) -> str:
        package = self.target_package(description)
        content = self.templates.get_template(TemplateRole.HIERARCHICAL_ASSERT_CLASS).content
        return self._fill_class_level(content, description, package, description.assert_class_name,
                                      self_type=description.assert_class_name, myself="this",
                                      super_assertion_class=description.abstract_assert_class_name,
                                      extra_imports=())

    # ---------------- class level ----------------

    def _fill_class_level(self, content: str, description: ClassDescription, package: str,
                          assertion_class: str, self_type: str, myself: str, super_assertion_class: str,
                          extra_imports: Sequence[TypeName]) -> str:
        content = fill(content, {
            "self_type": self_type,
            "myself": myself,
            "custom_assertion_class": assertion_class,
            "class_to_assert": description.class_name_with_outer_class,
            "super_assertion_class": super_assertion_class,
            "package": package,
        })
        imports = self.imports_for(content, description, package, extra_imports)
        content = fill(content, {"imports": imports})
        if not package:
            content = re.sub(r"^package ;\n", "", content, flags=re.MULTILINE)
        return content

    def imports_for(self, content: str, description: ClassDescription, package: str,
                    extra_imports: Sequence[TypeName] = ()) -> str:
        candidates: Set[TypeName] = set(description.imports)
        candidates.update(extra_imports)
        for simple_name, qualified_name in FRAMEWORK_TYPES.items():
            if _uses(content, simple_name):
                candidates.add(TypeName.parse(qualified_name))

        lines = []
        for type_name in sorted(candidates):
            if type_name.is_primitive() or type_name.belongs_to_java_lang_package():
                continue
            if type_name.package == package or not type_name.package:
                continue
            lines.append(f"import {type_name.fully_qualified_name};{LINE_SEPARATOR}")
        return "".join(lines)

    # ---------------- properties ----------------

    def _properties_content(self, description: ClassDescription, getters: Iterable[GetterDescription],
                            fields: Iterable[FieldDescription], package: str) -> str:
        member_names = {p.member_name for p in description.getters} | {p.member_name for p in description.fields}
        parts: List[str] = []
        for getter in getters:
            parts.append(self.property_assertion_content(getter, member_names, package) + LINE_SEPARATOR)
        for field in fields:
            parts.append(self.property_assertion_content(field, member_names, package) + LINE_SEPARATOR)
        return "".join(parts)

    def template_role_for(self, prop: PropertyDescription, member_names: Iterable[str] = ()) -> TemplateRole:
        shape = prop.shape
        if shape.kind == "boolean_predicate":
            # isNotValid() already exists next to isValid(): no negative assertion
            without_negation = prop.negative_predicate in set(member_names)
            if shape.boxed:
                return TemplateRole.IS_WRAPPER_WITHOUT_NEGATION if without_negation else TemplateRole.IS_WRAPPER
            return TemplateRole.IS_WITHOUT_NEGATION if without_negation else TemplateRole.IS
        if shape.kind == "enumerable":
            return TemplateRole.HAS_FOR_ITERABLE
        if shape.kind == "array":
            return TemplateRole.HAS_FOR_ARRAY
        if shape.kind in ROLES_BY_SHAPE:
            primitive_role, boxed_role = ROLES_BY_SHAPE[shape.kind]
            return boxed_role if shape.boxed else primitive_role
        if shape.kind == "primitive":
            return TemplateRole.HAS_FOR_PRIMITIVE
        if shape.kind == "boxed_primitive":
            return TemplateRole.HAS_FOR_PRIMITIVE_WRAPPER
        return TemplateRole.HAS

    def property_assertion_content(self, prop: PropertyDescription, member_names: Iterable[str],
                                   package: str) -> str:
        content = self.templates.get_template(self.template_role_for(prop, member_names)).content
        if isinstance(prop, FieldDescription):
            content = self._field_access(content, prop, package)
        content = self._declare_exceptions(content, prop)

        values = {
            "Property": prop.name[:1].upper() + prop.name[1:],
            "property": prop.name,
            "property_safe": prop.property_name_with_safe_keyword,
            "propertyType": prop.type_name(package),
            "propertyAssertType": prop.assert_type_name(package),
            "getter": prop.getter,
            "elementType": prop.element_type_name(package) or "",
            "elementAssertType": prop.element_assert_type_name(package) or "",
        }
        if prop.is_predicate:
            values.update({
                "predicate": prop.predicate,
                "neg_predicate": prop.negative_predicate,
                "predicate_for_javadoc": prop.predicate_for_javadoc,
                "neg_predicate_for_javadoc": prop.negative_predicate_for_javadoc,
                "predicate_for_error_message_part1": prop.predicate_for_error_message_part1,
                "predicate_for_error_message_part2": prop.predicate_for_error_message_part2,
                "neg_predicate_for_error_message_part1": prop.negative_predicate_for_error_message_part1,
                "neg_predicate_for_error_message_part2": prop.negative_predicate_for_error_message_part2,
            })
        return fill(content, values)

    def _field_access(self, content: str, field: FieldDescription, package: str) -> str:
        if field.is_public:
            return content.replace(GETTER_CALL, field.member_name)
        raw_type = field.value_type.raw.fully_qualified_name_if_needed(package) + "[]" * field.value_type.dimensions
        return content.replace(ACTUAL_GETTER_CALL, FIELD_EXTRACTION.format(name=field.member_name, type=raw_type))

    def _declare_exceptions(self, content: str, prop: PropertyDescription) -> str:
        exceptions = prop.exceptions if isinstance(prop, GetterDescription) else ()
        throws_clause = ""
        throws_javadoc = ""
        if exceptions:
            names = [e.simple_name_with_outer_class for e in exceptions]
            throws_clause = "throws " + ", ".join(names) + " "
            throws_javadoc = "".join(
                f"{LINE_SEPARATOR}   * @throws {name} if actual.{prop.getter}() throws one." for name in names
            )
        return fill(content, {"throws": throws_clause, "throws_javadoc": throws_javadoc})
