from __future__ import annotations

from typing import List

from fastapi import FastAPI, Form, Query
from fastapi.responses import JSONResponse

from modules.number_convert.core.config import get_settings
from modules.number_convert.core.operations import COPY_RESULT, operation_by_name
from modules.number_convert.core.search import (
    SearchRequest,
    SearchType,
    app_info,
    handle_result,
    result_for_id,
    search,
)
from universe.errors import (
    DomainError,
    ValidationNormalizeMiddleware,
    register_error_handlers,
)
from universe.logger import setup_logger

setup_logger()

app = FastAPI(title="Number Converter")
app.add_middleware(ValidationNormalizeMiddleware)
register_error_handlers(app)


@app.get("/")
def index():
    return app_info()


@app.get("/search")
def search_numbers(
    q: str = Query(""),
    tag: str | None = Query(None),
    search_type: SearchType = Query(SearchType.TEXT),
):
    request = SearchRequest(searched_text=q, searched_tag=tag, search_type=search_type)
    results = [result.to_dict() for result in search(request, get_settings())]
    return {"results": results}


@app.get("/result")
def result_by_id(id: str = Query(...)):
    result = result_for_id(id, get_settings())
    if result is None:
        return JSONResponse({"error": "Result not found."}, status_code=404)
    return result.to_dict()


@app.post("/copy")
def copy_result(
    id: str | None = Form(None),
    operation: str = Form(COPY_RESULT.name),
):
    result = result_for_id(id, get_settings())
    if result is None:
        return JSONResponse({"error": "Result not found."}, status_code=404)

    selected = operation_by_name(operation)
    if selected is None:
        raise DomainError(
            f"Unsupported operation: {operation!r}", code="unsupported_operation"
        )

    copied: List[str] = []
    handle_result(result, selected, copied.append)
    return {"copied": copied[0]}


@app.get("/settings")
def current_settings():
    return get_settings().model_dump()
