from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence

from assertgen.adapters.java_adapter import JavaAdapter, collect_java_files
from assertgen.cir.graph import TypeCatalog
from assertgen.description.introspector import Introspector
from assertgen.description.model import ClassDescription
from assertgen.generator.assertions import AssertionGenerator
from assertgen.generator.entry_points import AssertionsEntryPointType, EntryPointGenerator
from assertgen.generator.templates import default_template_registry

logger = logging.getLogger(__name__)


def build_catalog(source_paths: Sequence[str] = (), codes: Sequence[str] = ()) -> TypeCatalog:
    """Catalog of the JDK stubs plus the given .java files/directories and in-memory sources."""
    adapter = JavaAdapter()
    catalog = adapter.build_catalog_for_files(collect_java_files(source_paths))
    if codes:
        catalog = adapter.build_catalog_for_sources(codes, catalog=catalog)
    return catalog


def describe(catalog: TypeCatalog, class_or_package_names: Iterable[str],
             all_fields: bool = False) -> List[ClassDescription]:
    introspector = Introspector(catalog, include_non_public_fields=all_fields)
    return sorted(introspector.describe_all(class_or_package_names))


def run_pipeline(
    class_or_package_names: Sequence[str],
    source_paths: Sequence[str],
    output_dir: Path,
    package: Optional[str] = None,
    templates_dir: Optional[Path] = None,
    all_fields: bool = False,
    hierarchical: bool = False,
    entry_points: Sequence[AssertionsEntryPointType] = (),
) -> Dict[str, Any]:
    """
    Main pipeline: parse sources -> describe types -> render assertion classes -> entry points.
    Returns the written files and the sources that could not be parsed.
    """

    # 1) Type catalog over the user sources
    catalog = build_catalog(source_paths)

    # 2) One description per requested type
    descriptions = describe(catalog, class_or_package_names, all_fields)
    logger.info("Described %d types from %d sources", len(descriptions), len(source_paths))

    # 3) Custom assertion classes
    templates = default_template_registry(templates_dir)
    generator = AssertionGenerator(templates, output_dir, package)
    written: List[Path] = []
    for description in descriptions:
        if hierarchical:
            written.extend(generator.generate_hierarchical_custom_assertion_for(description, descriptions))
        else:
            written.append(generator.generate_custom_assertion_for(description))

    # 4) Entry points over the whole batch
    entry_point_generator = EntryPointGenerator(templates, output_dir, package)
    for entry_point_type in entry_points:
        path = entry_point_generator.generate_assertions_entry_point_class_for(
            descriptions, entry_point_type, package,
        )
        if path is not None:
            written.append(path)

    return {
        "descriptions": descriptions,
        "files": written,
        "parse_errors": list(catalog.g.graph["parse_errors"]),
    }
