from decimal import Decimal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "env_prefix": "PROPCALC_"}

    # App
    debug: bool = False
    log_level: str = "INFO"
    cors_origins: list[str] = ["*"]

    # Form defaults (the engine itself never reads settings)
    default_capital_growth_rate: Decimal = Decimal("5")
    default_rental_growth_rate: Decimal = Decimal("3")
    default_weeks_rented: int = 52
    default_loan_term_years: int = 30


settings = Settings()
