"""Request and response schemas for the analysis API."""

from typing import Dict, List, Optional, Union

from pydantic import BaseModel, Field

Cell = Optional[Union[float, str]]


class AnalyzeRequest(BaseModel):
    rows: List[Dict[str, Cell]] = Field(
        ..., description="Decoded rows; blank cells should already be null"
    )


class ColumnStatsResponse(BaseModel):
    name: str
    total_rows: int
    null_count: int
    positive_count: int
    data_type: str
    order: str


class AnalysisResponse(BaseModel):
    analysis_id: str
    created_at: Optional[str] = None
    total_rows: int
    total_columns: int
    has_nulls: bool
    ordered_by_first_column: bool
    total_positive_values: int
    columns_with_nulls: int
    column_stats: List[ColumnStatsResponse]
    numeric_columns: List[str]
    date_columns: List[str]


class ErrorResponse(BaseModel):
    error: str
    message: str
