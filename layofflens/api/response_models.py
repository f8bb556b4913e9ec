"""
Pydantic request/response schemas for the API.
"""
from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import BaseModel, Field

from layofflens.config import MAX_COUNT


class HealthResponse(BaseModel):
    status: str
    records: int
    sectors: int
    locations: int


class OptionsResponse(BaseModel):
    data: list[str]
    success: bool = True


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    totalPages: int


class LayoffListResponse(BaseModel):
    data: list[dict[str, Any]]
    pagination: Pagination
    success: bool = True


class LayoffCreateRequest(BaseModel):
    company: str = Field(..., min_length=1)
    date: str
    count: Optional[int] = Field(None, ge=0, le=MAX_COUNT)
    sector: str = "Unknown"
    location: str = ""
    source_url: str = ""


class DashboardStats(BaseModel):
    totalLayoffs: int
    totalCompanies: int
    totalEmployeesAffected: int | float
    averageLayoffSize: int
    mostAffectedIndustry: str
    mostAffectedCountry: str
    recentTrend: Literal["increasing", "decreasing", "stable"]


class StatsResponse(BaseModel):
    data: DashboardStats
    success: bool = True


class DataResponse(BaseModel):
    """Generic wrapper for any JSON payload."""
    data: Any
    success: bool = True
