import re

import pytest

from assertgen.adapters.java_adapter import JavaAdapter
from assertgen.description.introspector import Introspector
from assertgen.errors import InvalidArgumentError
from assertgen.generator.assertions import AssertionGenerator
from assertgen.generator.templates import Template, TemplateRole, unresolved_placeholders


def assertion_methods(content, assert_class):
    return re.findall(rf"public {assert_class} (\w+)\(", content)


def test_player_flat_assertion(generator, describe):
    content = generator.generate_custom_assertion_content_for(describe("Player"))

    assert content.startswith(
        "package org.example.data;\n\n"
        "import org.assertj.core.api.AbstractObjectAssert;\n"
        "import org.assertj.core.internal.Iterables;\n"
        "import org.assertj.core.internal.ObjectArrays;\n"
        "import org.assertj.core.util.Objects;\n\n"
        "/**\n"
    )
    assert "public class PlayerAssert extends AbstractObjectAssert<PlayerAssert, Player> {" in content
    assert "public PlayerAssert hasAge(int age) {" in content
    assert "public PlayerAssert hasAgeGreaterThan(int age) {" in content
    assert "public PlayerAssert hasSizeCloseTo(double size, double assertjOffset) {" in content
    assert "public PlayerAssert hasRank(Integer rank) {" in content
    assert "public PlayerAssert hasInitial(Character initial) {" in content
    assert "public PlayerAssert hasTeamMates(String... teamMates) {" in content
    assert "public PlayerAssert hasPreviousTeams(String... previousTeams) {" in content
    assert content.endswith("\n}\n")
    assert not unresolved_placeholders(content)


def test_predicates_and_their_negations(generator, describe):
    content = generator.generate_custom_assertion_content_for(describe("Player"))
    methods = assertion_methods(content, "PlayerAssert")

    for predicate in ("isRookie", "isNotRookie", "isInjured", "isNotInjured", "wasRookie", "wasNotRookie",
                      "shouldWin", "shouldNotWin", "shouldNotPlay", "shouldPlay", "willWin", "willNotWin",
                      "hasTrophy", "doesNotHaveTrophy", "doesNotHaveFun", "hasFun"):
        assert methods.count(predicate) == 1, predicate
    # canWin and cannotWin both exist: each one rendered once, no duplicate negation
    assert methods.count("canWin") == 1
    assert methods.count("cannotWin") == 1

    assert "Expecting that actual Player is rookie but is not." in content
    assert "Verifies that the actual Player can win." in content
    assert "if (Boolean.FALSE.equals(actual.isInjured())) {" in content


def test_fields_and_suppressed_fields(generator, describe):
    content = generator.generate_custom_assertion_content_for(describe("Player"))
    methods = assertion_methods(content, "PlayerAssert")

    assert "String actualNickname = actual.nickname;" in content
    assert methods.count("hasJerseyNumber") == 1
    assert "hasSecret" not in methods
    assert "hasHidden" not in methods
    assert "PLAYER_COUNT" not in content


def test_field_and_predicate_scenario(generator, describe):
    rookie = describe("Rookie")

    assert [generator.template_role_for(p, ["isRookie", "team"]) for p in rookie.getters + rookie.fields] == [
        TemplateRole.IS, TemplateRole.HAS,
    ]
    content = generator.generate_custom_assertion_content_for(rookie)
    assert assertion_methods(content, "RookieAssert") == ["isRookie", "isNotRookie", "hasTeam"]


def test_predicate_fields(generator, describe):
    content = generator.generate_custom_assertion_content_for(describe("Fields"))

    assert "public FieldsAssert isBad() {" in content
    assert "public FieldsAssert isNotBad() {" in content
    assert "if (!actual.bad) {" in content
    assert "public FieldsAssert isVisible() {" in content


def test_non_public_fields_use_field_extraction(catalog, templates, tmp_path):
    description = Introspector(catalog, include_non_public_fields=True).describe_name("org.example.data.Fields")
    content = AssertionGenerator(templates, tmp_path).generate_custom_assertion_content_for(description)

    assert ('String actualNotVisible = org.assertj.core.util.introspection.FieldSupport.EXTRACTION'
            '.fieldValue("notVisible", String.class, actual);') in content
    assert 'fieldValue("scores", int[].class, actual)' in content
    assert "${getter}" not in content


def test_java_keywords_are_escaped(generator, describe):
    content = generator.generate_custom_assertion_content_for(describe("Keywords"))

    assert "public KeywordsAssert hasAbstract(String expectedAbstract) {" in content
    assert "public KeywordsAssert hasPackage(int expectedPackage) {" in content
    assert "public KeywordsAssert isDefault() {" in content
    assert "public KeywordsAssert isNotFinal() {" in content
    assert "public KeywordsAssert hasName(String name) {" in content


def test_declared_exceptions(generator, describe):
    content = generator.generate_custom_assertion_content_for(describe("BeanWithExceptions"))

    assert "import java.io.IOException;\n" in content
    assert "import java.lang.IllegalStateException;" not in content
    assert ("public BeanWithExceptionsAssert hasStringPropertyThrowsException(String stringPropertyThrowsException)"
            " throws IOException, IllegalStateException {") in content
    assert "   * @throws IOException if actual.getStringPropertyThrowsException() throws one." in content
    assert "   * @throws IllegalStateException if actual.getStringPropertyThrowsException() throws one." in content
    assert "public BeanWithExceptionsAssert isBooleanPropertyThrowsException() throws IOException {" in content
    assert "   * @throws IOException if actual.isBooleanPropertyThrowsException() throws one." in content
    assert "public BeanWithExceptionsAssert hasPlainValue(int plainValue) {" in content


def test_comparable_subject_extends_comparable_assert(generator, describe):
    content = generator.generate_custom_assertion_content_for(describe("TreeEnum"))

    assert "public class TreeEnumAssert extends AbstractComparableAssert<TreeEnumAssert, TreeEnum> {" in content
    assert "import org.assertj.core.api.AbstractComparableAssert;\n" in content
    assert "AbstractObjectAssert" not in content
    assert "public TreeEnumAssert hasChildren(TreeEnum... children) {" in content


def test_nested_subject(generator, describe):
    content = generator.generate_custom_assertion_content_for(describe("OuterClass.StaticNestedPerson"))

    assert ("public class OuterClassStaticNestedPersonAssert extends "
            "AbstractObjectAssert<OuterClassStaticNestedPersonAssert, OuterClass.StaticNestedPerson> {") in content
    assert "public OuterClassStaticNestedPersonAssert hasChildren(OuterClass.InnerPerson... children) {" in content
    assert "import org.example.data.OuterClass;" not in content


def test_generated_assertions_package(templates, tmp_path, describe):
    generator = AssertionGenerator(templates, tmp_path, generated_assertions_package="my.assertions")
    content = generator.generate_custom_assertion_content_for(describe("Player"))

    assert content.startswith("package my.assertions;\n\n")
    assert "import org.example.data.Player;\n" in content
    assert "public PlayerAssert hasTeam(org.example.data.Team team) {" in content


@pytest.mark.parametrize("package", ["", "  ", " my.assertions", "my.assertions "])
def test_invalid_generated_assertions_package(templates, package):
    with pytest.raises(InvalidArgumentError, match="^The given package"):
        AssertionGenerator(templates, generated_assertions_package=package)


def test_default_package_subject(templates, tmp_path):
    catalog = JavaAdapter().build_catalog_for_code("public class Simple { public String getLabel() { return null; } }")
    description = Introspector(catalog).describe_name("Simple")
    content = AssertionGenerator(templates, tmp_path).generate_custom_assertion_content_for(description)

    assert "package ;" not in content
    assert "public class SimpleAssert extends AbstractObjectAssert<SimpleAssert, Simple> {" in content


def test_generation_is_deterministic(generator, describe):
    player = describe("Player")

    assert generator.generate_custom_assertion_content_for(player) == \
        generator.generate_custom_assertion_content_for(player)


def test_custom_template_is_used(generator, describe):
    generator.register(Template(TemplateRole.HAS_FOR_WHOLE_NUMBER, "\n  // ${property} is a whole number\n"))
    content = generator.generate_custom_assertion_content_for(describe("Player"))

    assert "  // age is a whole number\n" in content
    assert "  // jerseyNumber is a whole number\n" in content


def test_no_leftover_placeholders_for_any_type(catalog, templates, tmp_path):
    introspector = Introspector(catalog, include_non_public_fields=True)
    descriptions = introspector.describe_all(["org.example"])
    generator = AssertionGenerator(templates, tmp_path)

    assert len(descriptions) > 10
    for description in descriptions:
        flat = generator.generate_custom_assertion_content_for(description)
        abstract, concrete = generator.generate_hierarchical_custom_assertion_content_for(description, descriptions)
        for content in (flat, abstract, concrete):
            assert not unresolved_placeholders(content), description


def test_hierarchical_with_parent_in_batch(generator, describe):
    movie, art_work = describe("Movie"), describe("ArtWork", "org.example.art")

    abstract, concrete = generator.generate_hierarchical_custom_assertion_content_for(movie, [movie, art_work])

    assert ("public abstract class AbstractMovieAssert<S extends AbstractMovieAssert<S, A>, A extends Movie>"
            " extends AbstractArtWorkAssert<S, A> {") in abstract
    assert "import org.example.art.AbstractArtWorkAssert;\n" in abstract
    assert "public S hasReleaseDate(java.util.Date releaseDate) {" in abstract
    assert "public S hasDirector(String director) {" in abstract
    assert "return myself;" in abstract
    assert "hasTitle" not in abstract
    assert abstract.endswith("\n}\n")

    assert "public class MovieAssert extends AbstractMovieAssert<MovieAssert, Movie> {" in concrete
    assert "super(actual, MovieAssert.class);" in concrete


def test_hierarchical_without_parent_in_batch(generator, describe):
    movie = describe("Movie")

    abstract, _ = generator.generate_hierarchical_custom_assertion_content_for(movie, [movie])

    assert "AbstractArtWorkAssert" not in abstract
    assert "extends AbstractObjectAssert<S, A> {" in abstract
    assert "import org.assertj.core.api.AbstractObjectAssert;\n" in abstract
    # inherited properties are not lost
    assert "public S hasTitle(String title) {" in abstract
    assert "public S hasYear(long year) {" in abstract


def test_hierarchical_comparable_root(generator, describe):
    abstract, _ = generator.generate_hierarchical_custom_assertion_content_for(describe("Name"), [])

    assert "extends AbstractComparableAssert<S, A> {" in abstract


def test_files_are_written_under_package_directories(generator, describe, tmp_path):
    movie, art_work = describe("Movie"), describe("ArtWork", "org.example.art")

    flat = generator.generate_custom_assertion_for(art_work)
    abstract, concrete = generator.generate_hierarchical_custom_assertion_for(movie, [movie, art_work])

    assert flat == tmp_path / "org" / "example" / "art" / "ArtWorkAssert.java"
    assert abstract == tmp_path / "org" / "example" / "data" / "AbstractMovieAssert.java"
    assert concrete == tmp_path / "org" / "example" / "data" / "MovieAssert.java"
    assert concrete.read_text(encoding="utf-8") == \
        generator.generate_hierarchical_custom_assertion_content_for(movie, [movie, art_work])[1]


def test_field_names_starting_with_underscore_or_dollar(templates, tmp_path):
    code = """
    package rows;

    public class Row {
        public String _id;
        public int $count;
        public boolean $flag;
        public Boolean _deleted;
    }
    """
    description = Introspector(JavaAdapter().build_catalog_for_code(code)).describe_name("rows.Row")
    content = AssertionGenerator(templates, tmp_path).generate_custom_assertion_content_for(description)

    assert "public RowAssert has_id(String _id) {" in content
    assert "public RowAssert has$count(int $count) {" in content
    assert "public RowAssert is$flag() {" in content
    assert "public RowAssert isNot$flag() {" in content
    assert "public RowAssert is_deleted() {" in content
    assert "public RowAssert isNot_deleted() {" in content
    assert "if (!actual.$flag) {" in content
    assert not unresolved_placeholders(content)


def test_wildcard_arguments_are_spelled_back(templates, tmp_path):
    code = """
    package shop;

    import java.util.List;
    import java.util.Map;
    import java.util.Optional;

    public class Basket {
        public Optional<? extends Number> getValue() { return null; }
        public Map<String, ?> getExtras() { return null; }
        public Comparable<? super Integer> getKey() { return null; }
        public List<?> getItems() { return null; }
    }
    """
    description = Introspector(JavaAdapter().build_catalog_for_code(code)).describe_name("shop.Basket")
    content = AssertionGenerator(templates, tmp_path).generate_custom_assertion_content_for(description)

    assert "java.util.Optional<? extends Number> actualValue = actual.getValue();" in content
    assert "public BasketAssert hasValue(java.util.Optional<? extends Number> value) {" in content
    assert "java.util.Map<String, ?> actualExtras = actual.getExtras();" in content
    assert "Comparable<? super Integer> actualKey = actual.getKey();" in content
    assert "public BasketAssert hasItems(Object... items) {" in content
    assert "<Number>" not in content


def test_throws_javadoc_names_the_real_accessor(templates, tmp_path):
    code = """
    package jobs;

    import java.io.IOException;

    public class Job {
        public boolean wasStarted() throws IOException { return true; }
        public boolean canRetry() throws IOException { return true; }
    }
    """
    description = Introspector(JavaAdapter().build_catalog_for_code(code)).describe_name("jobs.Job")
    content = AssertionGenerator(templates, tmp_path).generate_custom_assertion_content_for(description)

    assert "   * @throws IOException if actual.wasStarted() throws one." in content
    assert "   * @throws IOException if actual.canRetry() throws one." in content
    assert "actual.isStarted()" not in content
    assert "actual.isRetry()" not in content
