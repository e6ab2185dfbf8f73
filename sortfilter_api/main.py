from __future__ import annotations

from dataclasses import asdict
import logging
import math
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import numpy as np
import pandas as pd
from fastapi import Body, FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.responses import Response
from fastapi.encoders import jsonable_encoder

from sortfilter_api.schemas import (
    ColumnResponse,
    EqualResponse,
    FiltersDiffRequest,
    FiltersPair,
    MergeRequest,
    SortingDiffRequest,
    SortingPair,
    ViewRequest,
)
from sortfilter.codec import (
    DraftFilterEntry,
    DraftSortEntry,
    decode_filters,
    decode_sorting,
    encode_filters,
    encode_sorting,
)
from sortfilter.columns import column_id_for
from sortfilter.definitions import (
    FILTER_DEFINITIONS,
    FilterDefinition,
    group_filter_definitions,
    search_filter_definitions,
)
from sortfilter.equality import (
    diff_against_baseline,
    filter_match_key,
    filters_equal,
    sort_match_key,
    sorting_equal,
)
from sortfilter.merge import merge_filters
from sortfilter.records import Routine, Scope, routine_table_filters, scope_table_filters
from sortfilter.repository import JsonFileRepository, find_record
from sortfilter.rows import evaluate_view


DATA_DIR = Path(__file__).resolve().parents[1] / "data"
ROUTINES_PATH = DATA_DIR / "routines.json"
SCOPES_PATH = DATA_DIR / "scopes.json"

ROUTINES = JsonFileRepository(ROUTINES_PATH, Routine.from_dict, Routine.to_dict)
SCOPES = JsonFileRepository(SCOPES_PATH, Scope.from_dict, Scope.to_dict)

app = FastAPI(title="Sort & Filter Engine API", version="0.1.0")
logger = logging.getLogger(__name__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://127.0.0.1:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _dump(models: List[Any]) -> List[Dict[str, Any]]:
    return [m.model_dump() for m in models]


def _error(exc: Exception, status_code: int = 500) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": str(exc), "type": type(exc).__name__})


def _not_found(kind: str, record_id: str) -> JSONResponse:
    return JSONResponse(status_code=404, content={"error": f"{kind} {record_id!r} not found", "type": "NotFound"})


def _definition_payload(definition: FilterDefinition) -> Dict[str, Any]:
    return {
        **asdict(definition),
        "default_condition": definition.default_condition,
        "conditions": list(definition.conditions),
    }


def _json(data: object) -> JSONResponse:
    """Return JSON with safe encoding for pandas/numpy objects."""

    def _safe_float(value: object) -> float | None:
        try:
            out = float(value)  # type: ignore[arg-type]
        except Exception:
            return None
        if math.isnan(out) or math.isinf(out):
            return None
        return out

    return JSONResponse(
        content=jsonable_encoder(
            data,
            custom_encoder={
                type(pd.NA): lambda _: None,
                np.integer: int,
                float: _safe_float,
                np.floating: _safe_float,
                np.bool_: bool,
                np.ndarray: lambda arr: arr.tolist(),
                pd.Timestamp: lambda ts: ts.isoformat(),
            },
        )
    )


@app.post("/sorting/decode")
def sorting_decode(sorting: List[Dict[str, Any]] = Body(...)):
    try:
        return _json([asdict(s) for s in decode_sorting(sorting)])
    except Exception as exc:
        logger.exception("sorting_decode failed")
        return _error(exc)


@app.post("/sorting/encode")
def sorting_encode(draft: List[Dict[str, Any]] = Body(...)):
    try:
        entries = [DraftSortEntry(**d) for d in draft]
        return _json(encode_sorting(entries))
    except TypeError as exc:
        return _error(exc, status_code=422)
    except Exception as exc:
        logger.exception("sorting_encode failed")
        return _error(exc)


@app.post("/sorting/equal", response_model=EqualResponse)
def sorting_equal_route(pair: SortingPair):
    try:
        return _json({"equal": sorting_equal(_dump(pair.a), _dump(pair.b))})
    except Exception as exc:
        logger.exception("sorting_equal failed")
        return _error(exc)


@app.post("/filters/decode")
def filters_decode(filters: List[Any] = Body(...)):
    # raw list: malformed entries are degraded by the codec, not rejected here
    try:
        return _json([asdict(f) for f in decode_filters(filters)])
    except Exception as exc:
        logger.exception("filters_decode failed")
        return _error(exc)


@app.post("/filters/encode")
def filters_encode(draft: List[Dict[str, Any]] = Body(...)):
    try:
        entries = [DraftFilterEntry(**d) for d in draft]
        return _json(encode_filters(entries))
    except TypeError as exc:
        return _error(exc, status_code=422)
    except Exception as exc:
        logger.exception("filters_encode failed")
        return _error(exc)


@app.post("/filters/equal", response_model=EqualResponse)
def filters_equal_route(pair: FiltersPair):
    try:
        return _json({"equal": filters_equal(_dump(pair.a), _dump(pair.b))})
    except Exception as exc:
        logger.exception("filters_equal failed")
        return _error(exc)


@app.post("/filters/merge")
def filters_merge(req: MergeRequest):
    try:
        return _json(merge_filters(_dump(req.high_priority), _dump(req.low_priority)))
    except Exception as exc:
        logger.exception("filters_merge failed")
        return _error(exc)


@app.post("/diff/sorting")
def diff_sorting(req: SortingDiffRequest):
    """Draft sort rows that are not saved in the baseline routine."""
    try:
        draft = [DraftSortEntry(**d.model_dump()) for d in req.draft]
        baseline = decode_sorting(_dump(req.baseline))
        return _json([asdict(s) for s in diff_against_baseline(draft, baseline, sort_match_key)])
    except Exception as exc:
        logger.exception("diff_sorting failed")
        return _error(exc)


@app.post("/diff/filters")
def diff_filters(req: FiltersDiffRequest):
    """Draft filter rows that are not saved in the baseline routine."""
    try:
        draft = [DraftFilterEntry(**d.model_dump()) for d in req.draft]
        baseline = decode_filters(_dump(req.baseline))
        return _json([asdict(f) for f in diff_against_baseline(draft, baseline, filter_match_key)])
    except Exception as exc:
        logger.exception("diff_filters failed")
        return _error(exc)


@app.get("/columns/{filter_id}", response_model=ColumnResponse)
def column_for_filter(filter_id: str):
    return _json({"filter_id": filter_id, "column_id": column_id_for(filter_id)})


@app.get("/filter-definitions")
def filter_definitions(q: str = Query(default="")):
    try:
        matches = search_filter_definitions(FILTER_DEFINITIONS, q)
        grouped = group_filter_definitions(matches)
        return _json({group: [_definition_payload(d) for d in defs] for group, defs in grouped.items()})
    except Exception as exc:
        logger.exception("filter_definitions failed")
        return _error(exc)


def _resolve_view(req: ViewRequest) -> Tuple[Optional[JSONResponse], pd.DataFrame]:
    sorting = _dump(req.sorting)
    filters = _dump(req.filters)
    scope_filters = _dump(req.scope_filters)

    if req.routine_id:
        routine: Optional[Routine] = find_record(ROUTINES, req.routine_id)
        if routine is None:
            return _not_found("Routine", req.routine_id), pd.DataFrame()
        sorting = sorting or list(routine.sorting)
        filters = filters or routine_table_filters(routine)
    if req.scope_id:
        scope: Optional[Scope] = find_record(SCOPES, req.scope_id)
        if scope is None:
            return _not_found("Scope", req.scope_id), pd.DataFrame()
        scope_filters = scope_table_filters(scope)

    df = pd.DataFrame(req.rows)
    return None, evaluate_view(df, sorting, filters, scope_filters)


@app.post("/view")
def view(req: ViewRequest):
    try:
        missing, out = _resolve_view(req)
        if missing is not None:
            return missing
        return _json({"row_count": int(len(out)), "rows": out.to_dict(orient="records")})
    except Exception as exc:
        logger.exception("view failed")
        return _error(exc)


@app.post("/export/view")
def export_view(req: ViewRequest):
    missing, out = _resolve_view(req)
    if missing is not None:
        return missing
    csv_bytes = out.to_csv(index=False).encode("utf-8")
    return Response(content=csv_bytes, media_type="text/csv", headers={"Content-Disposition": "attachment; filename=view.csv"})
