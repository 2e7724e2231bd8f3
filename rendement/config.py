from decimal import Decimal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # App
    debug: bool = False
    log_level: str = "INFO"

    # IMI default municipal rates, % of VPT (municipalities set 0.3-0.45%,
    # non-resident default is 0.5%)
    imi_rates: dict[str, Decimal] = {
        "standaard": Decimal("0.5"),
        "grote_stad": Decimal("0.45"),
        "landelijk": Decimal("0.3"),
    }

    # IRS 2026-2029 regime: monthly rent at or below this pays the reduced rate
    irs_rent_threshold: Decimal = Decimal("2300")

    # Old-regime contract duration assumed when the caller gives none (years)
    default_contract_years: int = 1

    # Snowball simulation safety cap (months)
    snowball_max_months: int = 600


settings = Settings()
