from decimal import Decimal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # App
    APP_NAME: str = "Binary Outcome AMM"
    DEBUG: bool = False  # Safe default for production; set DEBUG=True in .env for local dev
    LOG_LEVEL: str = "INFO"

    # Market defaults (applied when the caller omits them)
    DEFAULT_INITIAL_LIQUIDITY: Decimal = Decimal("1000")
    DEFAULT_ORDERBOOK_DEPTH: int = 10
    DEFAULT_ORDERBOOK_STEP: Decimal = Decimal("10")
    MAX_ORDERBOOK_DEPTH: int = 100

    # Relative tolerance for |pool_a * pool_b - k| / k after every trade
    INVARIANT_TOLERANCE: Decimal = Decimal("1e-18")


settings = Settings()
