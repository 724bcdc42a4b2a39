# app/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # --- Runtime ---
    ENV: str = "dev"  # dev|prod
    STAYFRANK_DB_URL: str = "sqlite+aiosqlite:///./stayfrank.db"

    # --- Minimal B2B Auth (API key) for admin routes ---
    # Send: X-API-Key: <key>
    API_KEY: str | None = None

    # --- Property data provider (ATTOM) ---
    ATTOM_API_KEY: str | None = None
    ATTOM_BASE_URL: str = "https://api.gateway.attomdata.com/propertyapi/v1.0.0"

    # --- Downstream partner (EquityAdvance deal creation) ---
    EQUITYADVANCE_API_URL: str | None = None
    EQUITYADVANCE_PARTNER_KEY: str | None = None
    EQUITYADVANCE_SOURCE: str = "stayfrank_portal"

    # --- Outbound HTTP resilience (shared by provider + partner clients) ---
    HTTP_TIMEOUT_S: float = 20.0
    HTTP_MAX_RETRIES: int = 2
    HTTP_BACKOFF_BASE_S: float = 0.5
    HTTP_RATE_LIMIT_RPS: float = 5.0
    HTTP_CIRCUIT_FAIL_THRESHOLD: int = 5
    HTTP_CIRCUIT_RESET_S: float = 60.0

    # --- Provider sanity floors (below these we fall back to defaults) ---
    INTAKE_DEFAULT_HOME_VALUE: float = 500000.0
    INTAKE_MIN_HOME_VALUE: float = 50000.0
    INTAKE_MIN_MORTGAGE_BALANCE: float = 1000.0
    INTAKE_DEFAULT_MORTGAGE_RATIO: float = 0.5

    # Apply the LLC/Corporation/Partnership ownership rule to Sale-Leaseback too.
    SL_CHECK_OWNERSHIP: bool = False

    # --- Funding reasons lookup cache ---
    FUNDING_REASONS_CACHE_TTL_S: float = 300.0

    # --- Outbox delivery (webhook sinks) ---
    OUTBOX_BATCH_SIZE: int = 50
    OUTBOX_MAX_ATTEMPTS: int = 10
    OUTBOX_WEBHOOK_RPS: float = 2.0
    OUTBOX_BACKOFF_BASE_SECONDS: float = 5.0
    OUTBOX_BACKOFF_CAP_SECONDS: float = 3600.0
    OUTBOX_WEBHOOK_TIMEOUT_S: float = 20.0

    # --- Scheduler tuning ---
    SCHED_DISPATCH_INTERVAL_MINUTES: int = 5
    SCHED_DISPATCH_BATCH_SIZE: int = 50


settings = Settings()
