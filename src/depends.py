from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.repositories import (
    SqlAlchemyCompanyRepository,
    SqlAlchemyInvoiceRepository,
    SqlAlchemyOrderRepository,
)
from src.adapter.services.cache_service import TTLCacheService
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.use_cases.invoices import GenerateInvoiceFromOrder
from src.domain.clock import Clock, SystemClock

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

report_cache = TTLCacheService(
    ttl_seconds=ApplicationConfig.REPORT_CACHE_TTL_SECONDS,
    maxsize=ApplicationConfig.REPORT_CACHE_MAX_SIZE,
)

system_clock = SystemClock()


async def get_session() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        yield session


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_clock() -> Clock:
    return system_clock


def get_report_cache() -> TTLCacheService:
    return report_cache


def build_generate_invoice(session: AsyncSession, clock: Clock) -> GenerateInvoiceFromOrder:
    """GenerateInvoiceFromOrder wired to a session and the configured invoicing defaults"""
    return GenerateInvoiceFromOrder(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyOrderRepository(session),
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyCompanyRepository(session),
        clock=clock,
        max_retries=ApplicationConfig.INVOICE_NUMBER_MAX_RETRIES,
        default_lead_time_days=ApplicationConfig.DEFAULT_LEAD_TIME_DAYS,
        currency=ApplicationConfig.DEFAULT_CURRENCY,
    )
