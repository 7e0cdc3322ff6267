import re

import pytest

from assertgen.generator.entry_points import AssertionsEntryPointType, EntryPointGenerator, common_package
from assertgen.generator.templates import Template, TemplateRole, unresolved_placeholders


@pytest.fixture
def entry_points(templates, tmp_path):
    return EntryPointGenerator(templates, tmp_path)


@pytest.mark.parametrize("entry_point_type", list(AssertionsEntryPointType))
def test_empty_batch_gives_empty_content(entry_points, entry_point_type):
    assert entry_points.generate_assertions_entry_point_class_content_for([], entry_point_type) == ""
    assert entry_points.generate_assertions_entry_point_class_content_for(None, entry_point_type) == ""
    assert entry_points.generate_assertions_entry_point_class_for(None, entry_point_type) is None


def test_standard_entry_point(entry_points, describe):
    descriptions = [describe("Team"), describe("ArtWork", "org.example.art"), describe("Player")]

    content = entry_points.generate_assertions_entry_point_class_content_for(descriptions)

    assert content.startswith("package org.example.art;\n")
    assert "public class Assertions {" in content
    assert ("  public static org.example.data.PlayerAssert assertThat(org.example.data.Player actual) {\n"
            "    return new org.example.data.PlayerAssert(actual);\n") in content
    assert not unresolved_placeholders(content)


def test_methods_are_sorted_by_subject_name(entry_points, describe):
    descriptions = [describe("Team"), describe("Player"), describe("Movie"), describe("ArtWork", "org.example.art")]

    content = entry_points.generate_assertions_entry_point_class_content_for(reversed(descriptions))
    subjects = re.findall(r"assertThat\(([\w.]+) actual\)", content)

    assert subjects == ["org.example.art.ArtWork", "org.example.data.Movie", "org.example.data.Player",
                        "org.example.data.Team"]


@pytest.mark.parametrize("entry_point_type, declaration, method", [
    (AssertionsEntryPointType.BDD, "public class BddAssertions {", "public static org.example.data.PlayerAssert then("),
    (AssertionsEntryPointType.SOFT, "public class SoftAssertions extends org.assertj.core.api.SoftAssertions {",
     "public org.example.data.PlayerAssert assertThat("),
    (AssertionsEntryPointType.JUNIT_SOFT, "public class JUnitSoftAssertions", "assertThat("),
    (AssertionsEntryPointType.BDD_SOFT, "public class BDDSoftAssertions", "public org.example.data.PlayerAssert then("),
    (AssertionsEntryPointType.JUNIT_BDD_SOFT, "public class JUnitBDDSoftAssertions", "then("),
    (AssertionsEntryPointType.AUTO_CLOSEABLE_SOFT, "public class AutoCloseableSoftAssertions", "assertThat("),
    (AssertionsEntryPointType.AUTO_CLOSEABLE_BDD_SOFT, "public class AutoCloseableBDDSoftAssertions", "then("),
])
def test_every_entry_point_type(entry_points, describe, entry_point_type, declaration, method):
    content = entry_points.generate_assertions_entry_point_class_content_for([describe("Player")], entry_point_type)

    assert declaration in content
    assert method in content
    assert not unresolved_placeholders(content)
    assert EntryPointGenerator.entry_point_file_name(content, entry_point_type) == entry_point_type.file_name


def test_soft_entry_points_proxy_the_assert_class(entry_points, describe):
    content = entry_points.generate_assertions_entry_point_class_content_for(
        [describe("Player")], AssertionsEntryPointType.SOFT,
    )

    assert ("return proxy(org.example.data.PlayerAssert.class, org.example.data.Player.class, actual);"
            in content)


def test_explicit_package(entry_points, describe):
    content = entry_points.generate_assertions_entry_point_class_content_for(
        [describe("Player")], AssertionsEntryPointType.STANDARD, "my.entry",
    )

    assert content.startswith("package my.entry;\n")


def test_shortest_package_heuristic(describe):
    # not a real common prefix: the shortest package wins even when it is a sibling
    descriptions = [describe("Player"), describe("ArtWork", "org.example.art")]

    assert common_package(descriptions) == "org.example.art"
    assert common_package([describe("Player")]) == "org.example.data"
    assert common_package([]) == ""


def test_generated_assertions_package_is_used(templates, tmp_path, describe):
    generator = EntryPointGenerator(templates, tmp_path, generated_assertions_package="my.assertions")
    content = generator.generate_assertions_entry_point_class_content_for([describe("Player")])

    assert content.startswith("package my.assertions;\n")
    assert "public static my.assertions.PlayerAssert assertThat(org.example.data.Player actual) {" in content


def test_file_is_named_after_the_declared_class(templates, tmp_path, describe):
    templates.register(Template(
        TemplateRole.ASSERTIONS_ENTRY_POINT_CLASS,
        "package ${package};\n\npublic class MyAssertions {\n${all_assertions_entry_points}\n}\n",
    ))
    generator = EntryPointGenerator(templates, tmp_path)

    path = generator.generate_assertions_entry_point_class_for([describe("Player")])

    assert path == tmp_path / "org" / "example" / "data" / "MyAssertions.java"
    assert "public class MyAssertions {" in path.read_text(encoding="utf-8")


def test_default_file_name_without_class_declaration():
    assert EntryPointGenerator.entry_point_file_name("interface X {}", AssertionsEntryPointType.BDD) == \
        "BddAssertions.java"


def test_entry_point_type_from_name():
    assert AssertionsEntryPointType.from_name("junit-soft") is AssertionsEntryPointType.JUNIT_SOFT
    assert AssertionsEntryPointType.from_name("BDD") is AssertionsEntryPointType.BDD
    with pytest.raises(ValueError, match="Unknown entry point type"):
        AssertionsEntryPointType.from_name("fluent")
