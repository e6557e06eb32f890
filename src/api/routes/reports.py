"""Report API Routes"""

from fastapi import APIRouter, Depends
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.use_cases.reports import (
    GetOverviewReport,
    GetRevenueReport,
    GetClientReport,
    OverviewReportDTO,
    RevenueReportDTO,
    ClientReportDTO,
)
from src.adapter.repositories import SqlAlchemyReportRepository
from src.app.services.cache_service import CacheService
from src.depends import get_clock, get_report_cache, get_session
from src.domain.clock import Clock

router = APIRouter(prefix="/reports", tags=["Reports"])


@router.get("/overview", response_model=OverviewReportDTO)
async def get_overview_report(
    session: AsyncSession = Depends(get_session),
    cache: CacheService = Depends(get_report_cache),
    clock: Clock = Depends(get_clock),
):
    """Entity totals, lifetime revenue and the last 30 days of activity"""
    result = await GetOverviewReport(SqlAlchemyReportRepository(session), cache, clock).execute()
    return result.value


@router.get("/revenue", response_model=RevenueReportDTO)
async def get_revenue_report(
    session: AsyncSession = Depends(get_session),
    cache: CacheService = Depends(get_report_cache),
    clock: Clock = Depends(get_clock),
):
    """
    Revenue by month over the trailing twelve months and the top ten
    clients by order revenue. Cached for REPORT_CACHE_TTL_SECONDS.
    """
    result = await GetRevenueReport(SqlAlchemyReportRepository(session), cache, clock).execute()
    return result.value


@router.get("/clients", response_model=ClientReportDTO)
async def get_client_report(
    session: AsyncSession = Depends(get_session),
    cache: CacheService = Depends(get_report_cache),
    clock: Clock = Depends(get_clock),
):
    result = await GetClientReport(SqlAlchemyReportRepository(session), cache, clock).execute()
    return result.value
