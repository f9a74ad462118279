from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="CARDVAULT_")

    app_name: str = "CardVault"
    debug: bool = False

    database_url: str = "postgresql+asyncpg://localhost:5432/cardvault"

    # Draw credit economy
    initial_credits: int = 5
    daily_bonus: int = 5
    max_stored_credits: int = 99
    excess_card_value: int = 1
    daily_cooldown_hours: int = 24


settings = Settings()
