import pytest

from assertgen.description.typename import OBJECT, TypeName
from assertgen.errors import InvalidArgumentError


def test_parse_splits_package_and_outer_classes():
    name = TypeName.parse("org.example.data.OuterClass.StaticNestedPerson")

    assert name.package == "org.example.data"
    assert name.simple_name == "StaticNestedPerson"
    assert name.simple_name_with_outer_class == "OuterClass.StaticNestedPerson"
    assert name.simple_name_with_outer_class_not_separated_by_dots == "OuterClassStaticNestedPerson"
    assert name.fully_qualified_name == "org.example.data.OuterClass.StaticNestedPerson"
    assert name.is_nested()
    assert name.outermost() == TypeName("OuterClass", "org.example.data")


def test_parse_primitive_and_default_package():
    assert TypeName.parse("int").is_primitive()
    assert TypeName.parse("int").package == ""
    assert TypeName.parse("Simple").fully_qualified_name == "Simple"
    assert not TypeName.parse("Simple").is_primitive()


@pytest.mark.parametrize("blank", [None, "", "   "])
def test_parse_rejects_blank_names(blank):
    with pytest.raises(InvalidArgumentError):
        TypeName.parse(blank)


def test_numeric_categories():
    assert TypeName.parse("double").is_real_number()
    assert TypeName.parse("java.lang.Float").is_real_number()
    assert TypeName.parse("long").is_whole_number()
    assert TypeName.parse("java.lang.Integer").is_whole_number()
    assert TypeName.parse("java.lang.Integer").is_primitive_wrapper()
    assert TypeName.parse("char").is_char()
    assert TypeName.parse("java.lang.Character").is_char()
    assert TypeName.parse("java.lang.Boolean").is_boolean()
    # same simple name in another package is not a wrapper
    assert not TypeName.parse("org.example.Integer").is_whole_number()


def test_fully_qualified_name_if_needed():
    date = TypeName.parse("java.util.Date")
    player = TypeName.parse("org.example.data.Player")

    assert date.fully_qualified_name_if_needed("org.example.data") == "java.util.Date"
    assert player.fully_qualified_name_if_needed("org.example.data") == "Player"
    assert player.fully_qualified_name_if_needed("my.assertions") == "org.example.data.Player"
    assert TypeName.parse("java.lang.String").fully_qualified_name_if_needed("anything") == "String"


def test_assert_type_name():
    assert TypeName.parse("java.util.Date").assert_type_name("org.example") == "org.assertj.core.api.DateAssert"
    nested = TypeName.parse("org.example.data.OuterClass.StaticNestedPerson")
    assert nested.assert_type_name("org.example.data") == "OuterClassStaticNestedPersonAssert"
    assert nested.assert_type_name("other") == "org.example.data.OuterClassStaticNestedPersonAssert"


def test_equality_and_ordering():
    assert TypeName("Player", "org.example.data") == TypeName.parse("org.example.data.Player")
    assert len({TypeName.parse("a.B"), TypeName("B", "a")}) == 1

    names = sorted([TypeName.parse("org.b.Zed"), TypeName.parse("org.a.Zed"), TypeName.parse("org.a.Alpha")])
    assert [str(n) for n in names] == ["org.a.Alpha", "org.a.Zed", "org.b.Zed"]


def test_object_constant():
    assert OBJECT.fully_qualified_name == "java.lang.Object"
    assert OBJECT.belongs_to_java_lang_package()
