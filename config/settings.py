from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    APP_NAME: str = "Indie Star Market"

    # Identity derivation seeds
    MARKET_SEED: str = "market_v2"
    POOL_SEED: str = "liquidity"

    # Market limits
    PROJECT_NAME_MAX_BYTES: int = 256

    # Run INV-1..INV-4 after every committed operation
    VERIFY_INVARIANTS: bool = True


settings = Settings()
