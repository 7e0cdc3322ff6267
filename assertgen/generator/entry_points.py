import enum
import logging
import re
from pathlib import Path
from typing import Iterable, List, Optional

from assertgen.description.model import ClassDescription
from assertgen.generator.sink import FileSystemSink
from assertgen.generator.templates import TemplateRegistry, TemplateRole, fill

logger = logging.getLogger(__name__)

PUBLIC_CLASS_PATTERN = re.compile(r"public class (\w+)")


class AssertionsEntryPointType(enum.Enum):
    """Entry point flavours: (class template, method template, default file)."""

    STANDARD = (TemplateRole.ASSERTIONS_ENTRY_POINT_CLASS, TemplateRole.ASSERTION_ENTRY_POINT,
                "Assertions.java")
    BDD = (TemplateRole.BDD_ASSERTIONS_ENTRY_POINT_CLASS, TemplateRole.BDD_ENTRY_POINT_METHOD_ASSERTION,
           "BddAssertions.java")
    SOFT = (TemplateRole.SOFT_ASSERTIONS_ENTRY_POINT_CLASS, TemplateRole.SOFT_ENTRY_POINT_METHOD_ASSERTION,
            "SoftAssertions.java")
    JUNIT_SOFT = (TemplateRole.JUNIT_SOFT_ASSERTIONS_ENTRY_POINT_CLASS,
                  TemplateRole.SOFT_ENTRY_POINT_METHOD_ASSERTION, "JUnitSoftAssertions.java")
    BDD_SOFT = (TemplateRole.BDD_SOFT_ASSERTIONS_ENTRY_POINT_CLASS,
                TemplateRole.BDD_SOFT_ENTRY_POINT_METHOD_ASSERTION, "BDDSoftAssertions.java")
    JUNIT_BDD_SOFT = (TemplateRole.JUNIT_BDD_SOFT_ASSERTIONS_ENTRY_POINT_CLASS,
                      TemplateRole.BDD_SOFT_ENTRY_POINT_METHOD_ASSERTION, "JUnitBDDSoftAssertions.java")
    AUTO_CLOSEABLE_SOFT = (TemplateRole.AUTO_CLOSEABLE_SOFT_ASSERTIONS_ENTRY_POINT_CLASS,
                           TemplateRole.SOFT_ENTRY_POINT_METHOD_ASSERTION, "AutoCloseableSoftAssertions.java")
    AUTO_CLOSEABLE_BDD_SOFT = (TemplateRole.AUTO_CLOSEABLE_BDD_SOFT_ASSERTIONS_ENTRY_POINT_CLASS,
                               TemplateRole.BDD_SOFT_ENTRY_POINT_METHOD_ASSERTION,
                               "AutoCloseableBDDSoftAssertions.java")

    @property
    def class_role(self) -> TemplateRole:
        return self.value[0]

    @property
    def method_role(self) -> TemplateRole:
        return self.value[1]

    @property
    def file_name(self) -> str:
        return self.value[2]

    @classmethod
    def from_name(cls, name: str) -> "AssertionsEntryPointType":
        key = name.strip().upper().replace("-", "_")
        try:
            return cls[key]
        except KeyError:
            choices = ", ".join(t.name.lower() for t in cls)
            raise ValueError(f"Unknown entry point type '{name}', expected one of: {choices}") from None


def common_package(descriptions: Iterable[ClassDescription]) -> str:
    # shortest package wins, nested or not
    packages = sorted({d.package_name for d in descriptions}, key=lambda p: (len(p), p))
    return packages[0] if packages else ""


class EntryPointGenerator:
    """One facade class exposing an assertThat/then method per generated assert class."""

    def __init__(self, templates: TemplateRegistry, output_dir=".",
                 generated_assertions_package: Optional[str] = None) -> None:
        self.templates = templates
        self.sink = FileSystemSink(output_dir)
        self.generated_assertions_package = generated_assertions_package

    def assert_class_of(self, description: ClassDescription) -> str:
        if self.generated_assertions_package:
            return f"{self.generated_assertions_package}.{description.assert_class_name}"
        return description.fully_qualified_assert_class_name

    def entry_point_package(self, descriptions: Iterable[ClassDescription], package: Optional[str]) -> str:
        if package is not None:
            return package
        return self.generated_assertions_package or common_package(descriptions)

    def generate_assertions_entry_point_class_content_for(
        self,
        descriptions: Optional[Iterable[ClassDescription]],
        entry_point_type: AssertionsEntryPointType = AssertionsEntryPointType.STANDARD,
        package: Optional[str] = None,
    ) -> str:
        ordered: List[ClassDescription] = sorted(set(descriptions or ()))
        if not ordered:
            return ""
        target_package = self.entry_point_package(ordered, package)

        method_template = self.templates.get_template(entry_point_type.method_role).content
        methods = "".join(
            fill(method_template, {
                "custom_assertion_class": self.assert_class_of(d),
                "class_to_assert": d.fully_qualified_class_name,
            })
            for d in ordered
        )

        content = self.templates.get_template(entry_point_type.class_role).content
        content = fill(content, {"package": target_package, "all_assertions_entry_points": methods})
        if not target_package:
            content = re.sub(r"^package ;\n", "", content, flags=re.MULTILINE)
        return content

    def generate_assertions_entry_point_class_for(
        self,
        descriptions: Optional[Iterable[ClassDescription]],
        entry_point_type: AssertionsEntryPointType = AssertionsEntryPointType.STANDARD,
        package: Optional[str] = None,
    ) -> Optional[Path]:
        descriptions = list(descriptions or ())
        if not descriptions:
            return None
        content = self.generate_assertions_entry_point_class_content_for(descriptions, entry_point_type, package)
        target_package = self.entry_point_package(descriptions, package)
        logger.info("Generating %s entry point for %d classes", entry_point_type.name, len(descriptions))
        return self.sink.write(target_package, self.entry_point_file_name(content, entry_point_type), content)

    @staticmethod
    def entry_point_file_name(content: str, entry_point_type: AssertionsEntryPointType) -> str:
        """A custom class template may rename the facade class, the file follows it."""
        match = PUBLIC_CLASS_PATTERN.search(content)
        if match is None:
            return entry_point_type.file_name
        return match.group(1) + ".java"
