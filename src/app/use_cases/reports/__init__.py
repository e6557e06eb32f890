"""Reporting use cases"""
from .get_overview_report import GetOverviewReport
from .get_revenue_report import GetRevenueReport
from .get_client_report import GetClientReport
from .dtos import (
    EntityTotalsDTO,
    RecentActivityDTO,
    OverviewReportDTO,
    MonthlyRevenueDTO,
    TopClientDTO,
    RevenueReportDTO,
    ClientStatisticsDTO,
    ClientReportDTO,
)

__all__ = [
    "GetOverviewReport",
    "GetRevenueReport",
    "GetClientReport",
    "EntityTotalsDTO",
    "RecentActivityDTO",
    "OverviewReportDTO",
    "MonthlyRevenueDTO",
    "TopClientDTO",
    "RevenueReportDTO",
    "ClientStatisticsDTO",
    "ClientReportDTO",
]
