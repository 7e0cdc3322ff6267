import os

import pytest

from assertgen.adapters.java_adapter import JavaAdapter, collect_java_files
from assertgen import config
from assertgen.description.introspector import Introspector
from assertgen.generator.assertions import AssertionGenerator
from assertgen.generator.templates import default_template_registry

DATA_DIR = os.path.join(os.path.dirname(__file__), "data")
DATA_PACKAGE = "org.example.data"


@pytest.fixture(scope="session")
def data_dir():
    return DATA_DIR


@pytest.fixture(scope="session")
def catalog():
    adapter = JavaAdapter()
    return adapter.build_catalog_for_files(collect_java_files([DATA_DIR]))


@pytest.fixture
def introspector(catalog):
    return Introspector(catalog)


@pytest.fixture
def describe(introspector):
    def _describe(simple_name, package=DATA_PACKAGE):
        return introspector.describe_name(f"{package}.{simple_name}")
    return _describe


@pytest.fixture
def templates():
    return default_template_registry(config.BUNDLED_TEMPLATES_DIR)


@pytest.fixture
def generator(templates, tmp_path):
    return AssertionGenerator(templates, tmp_path)
