import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./billing.db")
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    API_RELOAD = bool(data.get("API_RELOAD", 0))
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ENABLE_LOGGING_MIDDLEWARE = bool(data.get("ENABLE_LOGGING_MIDDLEWARE", 1))
    ENABLE_SENTRY = data.get("ENABLE_SENTRY", 0)
    DSN_SENTRY = data.get("DSN_SENTRY", "")
    SENTRY_ENVIRONMENT = data.get("SENTRY_ENVIRONMENT", "dev")

    # Invoicing
    DEFAULT_CURRENCY = data.get("DEFAULT_CURRENCY", "USD")
    SUPPORTED_CURRENCIES = data.get("SUPPORTED_CURRENCIES", ["USD", "EUR", "GBP", "BTC", "ETH"])
    DEFAULT_LEAD_TIME_DAYS = data.get("DEFAULT_LEAD_TIME_DAYS", 30)  # Payment terms when the order has none
    INVOICE_NUMBER_MAX_RETRIES = data.get("INVOICE_NUMBER_MAX_RETRIES", 3)

    # Listing
    DEFAULT_PAGE_SIZE = data.get("DEFAULT_PAGE_SIZE", 10)
    MAX_PAGE_SIZE = data.get("MAX_PAGE_SIZE", 100)

    # Report cache
    REPORT_CACHE_TTL_SECONDS = data.get("REPORT_CACHE_TTL_SECONDS", 300)
    REPORT_CACHE_MAX_SIZE = data.get("REPORT_CACHE_MAX_SIZE", 256)

    # Recurring invoice generation sweep
    INVOICE_GENERATION_ENABLED = bool(data.get("INVOICE_GENERATION_ENABLED", True))
    INVOICE_GENERATION_INTERVAL_SECONDS = data.get("INVOICE_GENERATION_INTERVAL_SECONDS", 3600)  # Hourly

    # Overdue sweep
    OVERDUE_SWEEP_ENABLED = bool(data.get("OVERDUE_SWEEP_ENABLED", True))
    OVERDUE_SWEEP_INTERVAL_SECONDS = data.get("OVERDUE_SWEEP_INTERVAL_SECONDS", 86400)  # Daily

    NOTIFICATION_WEBHOOK = data.get("NOTIFICATION_WEBHOOK", None)
