import enum
import logging
import re
from pathlib import Path
from typing import Dict, Optional, Set, Union
from urllib.parse import unquote, urlparse

from assertgen import config
from assertgen.errors import InvalidArgumentError, TemplateLoadError

logger = logging.getLogger(__name__)

CLASS_PLACEHOLDERS = frozenset({
    "package", "imports", "class_to_assert", "custom_assertion_class", "super_assertion_class",
    "self_type", "myself", "all_assertions_entry_points",
})
PROPERTY_PLACEHOLDERS = frozenset({
    "Property", "property", "property_safe", "propertyType", "propertyAssertType", "getter",
    "elementType", "elementAssertType", "throws", "throws_javadoc", "predicate", "neg_predicate",
    "predicate_for_javadoc", "neg_predicate_for_javadoc", "predicate_for_error_message_part1",
    "predicate_for_error_message_part2", "neg_predicate_for_error_message_part1",
    "neg_predicate_for_error_message_part2",
})
PLACEHOLDERS = CLASS_PLACEHOLDERS | PROPERTY_PLACEHOLDERS

PLACEHOLDER_PATTERN = re.compile(r"\$\{(\w+)\}")


def fill(content: str, values: Dict[str, str]) -> str:
    """Replace every ${name} found in values, leave the other ones alone."""
    return PLACEHOLDER_PATTERN.sub(lambda m: values.get(m.group(1), m.group(0)), content)


def unresolved_placeholders(content: str) -> Set[str]:
    return {name for name in PLACEHOLDER_PATTERN.findall(content) if name in PLACEHOLDERS}


class TemplateRole(enum.Enum):
    """Every template the generator renders, valued by its default file name."""

    IS = "is_assertion_template.txt"
    IS_WITHOUT_NEGATION = "is_without_negative_assertion_template.txt"
    IS_WRAPPER = "is_wrapper_assertion_template.txt"
    IS_WRAPPER_WITHOUT_NEGATION = "is_wrapper_without_negative_assertion_template.txt"
    HAS = "has_assertion_template.txt"
    HAS_FOR_ARRAY = "has_elements_assertion_template_for_array.txt"
    HAS_FOR_ITERABLE = "has_elements_assertion_template_for_iterable.txt"
    HAS_FOR_PRIMITIVE = "has_assertion_template_for_primitive.txt"
    HAS_FOR_PRIMITIVE_WRAPPER = "has_assertion_template_for_primitive_wrapper.txt"
    HAS_FOR_REAL_NUMBER = "has_assertion_template_for_real_number.txt"
    HAS_FOR_REAL_NUMBER_WRAPPER = "has_assertion_template_for_real_number_wrapper.txt"
    HAS_FOR_WHOLE_NUMBER = "has_assertion_template_for_whole_number.txt"
    HAS_FOR_WHOLE_NUMBER_WRAPPER = "has_assertion_template_for_whole_number_wrapper.txt"
    HAS_FOR_CHAR = "has_assertion_template_for_char.txt"
    HAS_FOR_CHARACTER = "has_assertion_template_for_character.txt"
    ASSERT_CLASS = "custom_assertion_class_template.txt"
    HIERARCHICAL_ASSERT_CLASS = "custom_hierarchical_assertion_class_template.txt"
    ABSTRACT_ASSERT_CLASS = "custom_abstract_assertion_class_template.txt"
    ASSERTIONS_ENTRY_POINT_CLASS = "standard_assertions_entry_point_class_template.txt"
    ASSERTION_ENTRY_POINT = "standard_assertion_entry_point_method_template.txt"
    SOFT_ASSERTIONS_ENTRY_POINT_CLASS = "soft_assertions_entry_point_class_template.txt"
    JUNIT_SOFT_ASSERTIONS_ENTRY_POINT_CLASS = "junit_soft_assertions_entry_point_class_template.txt"
    SOFT_ENTRY_POINT_METHOD_ASSERTION = "soft_assertion_entry_point_method_template.txt"
    BDD_ASSERTIONS_ENTRY_POINT_CLASS = "bdd_assertions_entry_point_class_template.txt"
    BDD_ENTRY_POINT_METHOD_ASSERTION = "bdd_assertion_entry_point_method_template.txt"
    BDD_SOFT_ASSERTIONS_ENTRY_POINT_CLASS = "bdd_soft_assertions_entry_point_class_template.txt"
    BDD_SOFT_ENTRY_POINT_METHOD_ASSERTION = "bdd_soft_assertion_entry_point_method_template.txt"
    JUNIT_BDD_SOFT_ASSERTIONS_ENTRY_POINT_CLASS = "junit_bdd_soft_assertions_entry_point_class_template.txt"
    AUTO_CLOSEABLE_SOFT_ASSERTIONS_ENTRY_POINT_CLASS = "auto_closeable_soft_assertions_entry_point_class_template.txt"
    AUTO_CLOSEABLE_BDD_SOFT_ASSERTIONS_ENTRY_POINT_CLASS = \
        "auto_closeable_bdd_soft_assertions_entry_point_class_template.txt"

    @property
    def default_file(self) -> str:
        return self.value


class Template:
    """A role and the text rendered for it."""

    def __init__(self, role: Optional[TemplateRole], content: Optional[str]) -> None:
        if role is None:
            raise InvalidArgumentError("Expecting a non null Template role")
        if content is None:
            raise InvalidArgumentError("Expecting a non null content in the Template")
        self._role = role
        self.content = content

    @property
    def role(self) -> TemplateRole:
        return self._role

    @classmethod
    def from_file(cls, role: TemplateRole, path: Union[str, Path]) -> "Template":
        try:
            with open(path, "r", encoding="utf-8") as f:
                return cls(role, f.read())
        except OSError as e:
            raise TemplateLoadError(f"Failed to read template from file {path}") from e

    @classmethod
    def from_url(cls, role: TemplateRole, url: str) -> "Template":
        parsed = urlparse(url)
        if parsed.scheme != "file":
            raise TemplateLoadError(f"Failed to read template from {url}")
        path = Path(unquote(parsed.path))
        if not path.is_file():
            raise TemplateLoadError(f"Failed to read template from an URL which is not a file, URL was :{url}")
        try:
            return cls(role, path.read_text(encoding="utf-8"))
        except OSError as e:
            raise TemplateLoadError(f"Failed to read template from {url}") from e

    def __repr__(self) -> str:
        return f"Template({self.role.name})"


class TemplateRegistry:
    """
    role -> Template, last registration wins. Filled once before a
    generation run, read only afterwards.
    """

    def __init__(self) -> None:
        self._templates: Dict[TemplateRole, Template] = {}

    def register(self, template: Optional[Template]) -> None:
        if template is None:
            raise InvalidArgumentError("Expecting a non null Template")
        if template.content is None:
            raise InvalidArgumentError("Expecting a non null content in the Template")
        self._templates[template.role] = template

    def get_template(self, role: TemplateRole) -> Template:
        try:
            return self._templates[role]
        except KeyError:
            raise TemplateLoadError(f"No template registered for {role.name}") from None

    def __contains__(self, role: TemplateRole) -> bool:
        return role in self._templates

    def __len__(self) -> int:
        return len(self._templates)

    def with_overrides(self, directory: Union[str, Path, None]) -> "TemplateRegistry":
        """Register every default template file present in a user directory."""
        if directory is None:
            return self
        directory = Path(directory)
        if not directory.is_dir():
            raise TemplateLoadError(f"Templates directory {directory} does not exist")
        for role in TemplateRole:
            candidate = directory / role.default_file
            if candidate.is_file():
                logger.info("Using custom template for %s loaded from %s", role.name, candidate)
                self.register(Template.from_file(role, candidate))
        return self


def default_template_registry(templates_dir: Union[str, Path, None] = None) -> TemplateRegistry:
    """
    Every role loaded from templates_dir (or the configured directory),
    falling back to the bundled file when a role has no file there.
    """
    directory = Path(templates_dir) if templates_dir is not None else config.TEMPLATES_DIR
    registry = TemplateRegistry()
    for role in TemplateRole:
        candidate = directory / role.default_file
        if not candidate.is_file():
            candidate = config.BUNDLED_TEMPLATES_DIR / role.default_file
        registry.register(Template.from_file(role, candidate))
    return registry
