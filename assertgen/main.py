from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException  # type: ignore
from pydantic import BaseModel  # type: ignore

from assertgen import config
from assertgen.adapters.java_adapter import JavaAdapter
from assertgen.cir.graph import TypeCatalog
from assertgen.description.introspector import Introspector
from assertgen.errors import AssertionGeneratorError, ClassNotFoundError, InvalidArgumentError, TemplateLoadError
from assertgen.generator.assertions import AssertionGenerator
from assertgen.generator.entry_points import AssertionsEntryPointType, EntryPointGenerator
from assertgen.generator.templates import default_template_registry

app = FastAPI(title=config.API_TITLE)
java_adapter = JavaAdapter()


class FlatRequest(BaseModel):
    code: Optional[str] = None
    files: List[str] = []
    class_name: str
    package: Optional[str] = None
    all_fields: bool = False


class FlatResponse(BaseModel):
    assert_class_name: str
    content: str


class HierarchicalRequest(BaseModel):
    code: str
    class_names: List[str]
    package: Optional[str] = None


class HierarchicalUnit(BaseModel):
    class_name: str
    abstract_content: str
    concrete_content: str


class HierarchicalResponse(BaseModel):
    units: List[HierarchicalUnit]


class EntryPointRequest(BaseModel):
    code: str
    class_names: List[str]
    entry_point_type: str = "standard"
    package: Optional[str] = None


class EntryPointResponse(BaseModel):
    file_name: str
    content: str


class CatalogRequest(BaseModel):
    code: str
    filename: Optional[str] = None


def _catalog(code: Optional[str], files: Optional[List[str]] = None,
             filename: Optional[str] = None) -> TypeCatalog:
    try:
        if files:
            catalog = java_adapter.build_catalog_for_files(files)
            if code:
                catalog = java_adapter.build_catalog_for_sources([code], catalog=catalog)
            return catalog
        if not code:
            raise HTTPException(status_code=400, detail="Either code or files is required")
        return java_adapter.build_catalog_for_code(code, filename)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


def _generation_error(e: AssertionGeneratorError) -> HTTPException:
    if isinstance(e, TemplateLoadError):
        return HTTPException(status_code=500, detail=str(e))
    return HTTPException(status_code=400, detail=str(e))


@app.get("/health")
def health() -> Dict[str, bool]:
    return {"ok": True}


@app.post("/catalog")
def catalog(req: CatalogRequest) -> Dict[str, Any]:
    return _catalog(req.code, filename=req.filename).to_debug_json()


@app.post("/assertions/flat", response_model=FlatResponse)
def flat_assertion(req: FlatRequest):
    catalog = _catalog(req.code, req.files)
    try:
        description = Introspector(catalog, include_non_public_fields=req.all_fields).describe_name(req.class_name)
        generator = AssertionGenerator(default_template_registry(), generated_assertions_package=req.package)
        content = generator.generate_custom_assertion_content_for(description)
    except (InvalidArgumentError, ClassNotFoundError, TemplateLoadError) as e:
        raise _generation_error(e)
    return FlatResponse(assert_class_name=description.assert_class_name, content=content)


@app.post("/assertions/hierarchical", response_model=HierarchicalResponse)
def hierarchical_assertions(req: HierarchicalRequest):
    catalog = _catalog(req.code)
    try:
        descriptions = sorted(Introspector(catalog).describe_all(req.class_names))
        generator = AssertionGenerator(default_template_registry(), generated_assertions_package=req.package)
        units = []
        for description in descriptions:
            abstract_content, concrete_content = \
                generator.generate_hierarchical_custom_assertion_content_for(description, descriptions)
            units.append(HierarchicalUnit(
                class_name=description.fully_qualified_class_name,
                abstract_content=abstract_content,
                concrete_content=concrete_content,
            ))
    except (InvalidArgumentError, ClassNotFoundError, TemplateLoadError) as e:
        raise _generation_error(e)
    return HierarchicalResponse(units=units)


@app.post("/assertions/entry-point", response_model=EntryPointResponse)
def entry_point(req: EntryPointRequest):
    try:
        entry_point_type = AssertionsEntryPointType.from_name(req.entry_point_type)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    catalog = _catalog(req.code)
    try:
        descriptions = Introspector(catalog).describe_all(req.class_names)
        generator = EntryPointGenerator(default_template_registry())
        content = generator.generate_assertions_entry_point_class_content_for(
            descriptions, entry_point_type, req.package,
        )
    except (InvalidArgumentError, ClassNotFoundError, TemplateLoadError) as e:
        raise _generation_error(e)
    return EntryPointResponse(
        file_name=EntryPointGenerator.entry_point_file_name(content, entry_point_type),
        content=content,
    )


if __name__ == "__main__":
    import uvicorn  # type: ignore

    uvicorn.run(app, host=config.API_HOST, port=config.API_PORT)
