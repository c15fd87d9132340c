"""Data contracts for the net-worth snapshot, capacity and advice endpoints."""

from typing import List, Optional

from pydantic import BaseModel, Field

from wealthplan.models import AppSettings, FinancialItem


class HoldingsRequest(BaseModel):
    items: List[FinancialItem] = Field(default_factory=list)
    settings: AppSettings = Field(default_factory=AppSettings)


class NetWorthSnapshot(BaseModel):
    totalAssets: float
    totalLiabilities: float
    netWorth: float
    debtToAssetRatio: Optional[float] = None


class NetWorthPoint(BaseModel):
    """Single year of the long-range (real terms) net-worth projection."""

    year: int
    assets: float
    liabilities: float
    netWorth: float


class CategoryTotal(BaseModel):
    name: str
    value: float


class NetWorthResponse(BaseModel):
    snapshot: NetWorthSnapshot
    allocation: List[CategoryTotal]
    projection: List[NetWorthPoint]


class CapacitySummary(BaseModel):
    totalIncome: float
    totalFixed: float
    totalVariable: float
    totalSeasonal: float
    totalExpenses: float
    monthlySurplus: float
    safeCapacity: float = Field(..., ge=0)
    stretchCapacity: float = Field(..., ge=0)


class AdviceResponse(BaseModel):
    advice: str
