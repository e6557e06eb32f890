"""Data Transfer Objects for Report Use Cases"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field


class EntityTotalsDTO(BaseModel):
    """Row counts per entity"""

    clients: int = Field(..., description="Number of clients")
    companies: int = Field(default=0, description="Number of companies")
    orders: int = Field(..., description="Number of orders")
    invoices: int = Field(..., description="Number of invoices")
    payments: int = Field(..., description="Number of payments")


class RecentActivityDTO(BaseModel):
    """Rows created during the recent window"""

    days: int = Field(..., description="Window length in days")
    clients: int = Field(..., description="Clients created")
    orders: int = Field(..., description="Orders created")
    invoices: int = Field(..., description="Invoices created")
    payments: int = Field(..., description="Payments recorded")


class OverviewReportDTO(BaseModel):
    """Response DTO for GetOverviewReport"""

    totals: EntityTotalsDTO = Field(..., description="Lifetime counts")
    total_revenue: Decimal = Field(..., description="Sum of all payments")
    recent_activity: RecentActivityDTO = Field(..., description="Last 30 days")
    generated_at: datetime = Field(..., description="When the report was computed")


class MonthlyRevenueDTO(BaseModel):
    """Payments received in one calendar month"""

    month: str = Field(..., description="YYYY-MM")
    revenue: Decimal = Field(..., description="Sum of payments in the month")


class TopClientDTO(BaseModel):
    """A client ranked by revenue from its orders"""

    client_id: int = Field(..., description="Client ID")
    name: str = Field(..., description="Client name")
    email: str = Field(..., description="Client email")
    revenue: Decimal = Field(..., description="Payments on invoices of the client's orders")


class RevenueReportDTO(BaseModel):
    """
    Response DTO for GetRevenueReport

    monthly_revenue always holds the trailing twelve months, oldest first,
    including months without payments.
    """

    total_revenue: Decimal = Field(..., description="Lifetime sum of payments")
    monthly_revenue: List[MonthlyRevenueDTO] = Field(..., description="Trailing 12 months")
    top_clients: List[TopClientDTO] = Field(..., description="Top 10 clients by revenue")
    generated_at: datetime = Field(..., description="When the report was computed")

    class Config:
        json_schema_extra = {
            "example": {
                "total_revenue": "1500.00",
                "monthly_revenue": [
                    {"month": "2024-03", "revenue": "0.00"},
                    {"month": "2025-02", "revenue": "100.00"}
                ],
                "top_clients": [
                    {"client_id": 1, "name": "Acme Corp", "email": "billing@acme.test", "revenue": "100.00"}
                ],
                "generated_at": "2025-02-20T09:00:00"
            }
        }


class ClientStatisticsDTO(BaseModel):
    """Activity of one client"""

    client_id: int = Field(..., description="Client ID")
    name: str = Field(..., description="Client name")
    email: str = Field(..., description="Client email")
    total_orders: int = Field(..., description="Orders placed")
    total_invoices: int = Field(..., description="Invoices issued")
    total_payments: int = Field(..., description="Payments received")
    total_revenue: Decimal = Field(..., description="Sum of payments")
    last_order_date: Optional[datetime] = Field(default=None, description="Most recent order creation")


class ClientReportDTO(BaseModel):
    """Response DTO for GetClientReport"""

    total_clients: int = Field(..., description="Number of clients")
    new_clients: int = Field(..., description="Clients created in the last 30 days")
    average_orders_per_client: Decimal = Field(..., description="Orders divided by clients")
    average_revenue_per_client: Decimal = Field(..., description="Revenue divided by clients")
    clients: List[ClientStatisticsDTO] = Field(..., description="Clients by revenue, highest first")
    generated_at: datetime = Field(..., description="When the report was computed")
