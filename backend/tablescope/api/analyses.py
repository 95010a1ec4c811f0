"""
Analyses API Endpoints

Accepts decoded rows, profiles them, and serves derived aggregates
(histograms, correlations, time series, scatter pairs) on demand.
"""

import asyncio
import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from ..core.config import settings
from ..models.analysis import AnalysisResponse, AnalyzeRequest
from ..services.analysis_store import analysis_store
from ..services.correlation import PairingPolicy, correlation_matrix
from ..services.dataset_profiler import AnalysisResult, analyze
from ..services.derived_series import build_scatter_pairs, build_time_series, column_count_series
from ..services.histogram import build_column_histograms
from ..services.values import normalize_rows, to_raw

logger = logging.getLogger("tablescope.api.analyses")

router = APIRouter(prefix="/analyses", tags=["Analyses"])


def _get_result(analysis_id: str) -> AnalysisResult:
    result = analysis_store.get(analysis_id)
    if result is None:
        raise HTTPException(status_code=404, detail="Analysis not found")
    return result


def _summary(analysis_id: str, result: AnalysisResult) -> dict:
    return {
        "analysis_id": analysis_id,
        "created_at": analysis_store.created_at(analysis_id),
        **result.to_dict(),
    }


async def _derived(analysis_id: str, key, factory):
    _get_result(analysis_id)
    value = await asyncio.to_thread(analysis_store.derived, analysis_id, key, factory)
    if value is None and analysis_store.get(analysis_id) is None:
        raise HTTPException(status_code=404, detail="Analysis not found")
    return value


@router.post("", response_model=AnalysisResponse, status_code=201)
async def create_analysis(request: AnalyzeRequest):
    """
    Profile a dataset.

    The rows must already be decoded: one JSON object per row, cell values
    as strings, numbers or null. An empty row list is answered with 422.
    """
    if len(request.rows) > settings.MAX_ROWS:
        raise HTTPException(
            status_code=413,
            detail=f"Dataset has {len(request.rows)} rows; the limit is {settings.MAX_ROWS}",
        )

    rows = normalize_rows(request.rows)
    result = await asyncio.to_thread(
        analyze,
        rows,
        date_sample_size=settings.DATE_SAMPLE_SIZE,
        date_min_matches=settings.DATE_MIN_MATCHES,
    )
    analysis_id = analysis_store.save(result)
    logger.info("Stored analysis %s (%d rows, %d columns)", analysis_id, result.total_rows, result.total_columns)
    return _summary(analysis_id, result)


@router.get("")
async def list_analyses():
    """List the ids of analyses currently held in memory."""
    ids = analysis_store.list_ids()
    return {"analyses": ids, "count": len(ids)}


@router.get("/{analysis_id}", response_model=AnalysisResponse)
async def get_analysis(analysis_id: str):
    result = _get_result(analysis_id)
    return _summary(analysis_id, result)


@router.delete("/{analysis_id}")
async def delete_analysis(analysis_id: str):
    if not analysis_store.delete(analysis_id):
        raise HTTPException(status_code=404, detail="Analysis not found")
    return {"status": "deleted", "analysis_id": analysis_id}


@router.get("/{analysis_id}/rows")
async def get_analysis_rows(
    analysis_id: str,
    limit: int = Query(default=100, ge=1, le=10000),
    offset: int = Query(default=0, ge=0),
):
    """Page through the rows retained by an analysis."""
    result = _get_result(analysis_id)
    page = result.rows[offset:offset + limit]
    return {
        "analysis_id": analysis_id,
        "rows": [{key: to_raw(value) for key, value in row.items()} for row in page],
        "count": len(page),
        "total_rows": result.total_rows,
        "limit": limit,
        "offset": offset,
    }


@router.get("/{analysis_id}/column-counts")
async def get_column_counts(analysis_id: str):
    """Null and positive counts per column."""
    result = _get_result(analysis_id)
    return {"analysis_id": analysis_id, "columns": column_count_series(result)}


@router.get("/{analysis_id}/histograms")
async def get_histograms(
    analysis_id: str,
    bins: Optional[int] = Query(default=None, ge=1, le=200),
):
    """One histogram per numeric column."""
    bin_count = bins or settings.HISTOGRAM_BINS
    histograms = await _derived(
        analysis_id,
        ("histograms", bin_count),
        lambda result: build_column_histograms(result, bin_count),
    )
    return {"analysis_id": analysis_id, "bins": bin_count, "histograms": histograms}


@router.get("/{analysis_id}/correlations")
async def get_correlations(
    analysis_id: str,
    pairing: Optional[PairingPolicy] = Query(default=None),
):
    """Pearson correlation matrix over the numeric columns."""
    policy = pairing or PairingPolicy(settings.CORRELATION_PAIRING)
    matrix = await _derived(
        analysis_id,
        ("correlations", policy.value),
        lambda result: correlation_matrix(result.numeric_columns, result.rows, policy),
    )
    return {"analysis_id": analysis_id, **matrix.to_dict()}


@router.get("/{analysis_id}/time-series")
async def get_time_series(analysis_id: str):
    """Time series of the first numeric column over the first date column, if any."""
    series = await _derived(analysis_id, ("time_series",), build_time_series)
    return {
        "analysis_id": analysis_id,
        "time_series": series.to_dict() if series is not None else None,
    }


@router.get("/{analysis_id}/scatter-pairs")
async def get_scatter_pairs(
    analysis_id: str,
    max_pairs: Optional[int] = Query(default=None, ge=1, le=50),
):
    """Scatter plot data for the first numeric column pairs that share points."""
    limit = max_pairs or settings.MAX_SCATTER_PAIRS
    pairs = await _derived(
        analysis_id,
        ("scatter_pairs", limit),
        lambda result: build_scatter_pairs(result, limit),
    )
    return {"analysis_id": analysis_id, "pairs": [pair.to_dict() for pair in pairs]}
