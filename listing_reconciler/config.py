from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings can be overridden via environment variables with the LISTING_ prefix.
    Example: LISTING_SQFT_SCAN_MAX=25000
    """
    model_config = {"env_prefix": "LISTING_"}

    # Whole-page scan thresholds
    sqft_scan_min: int = 500
    sqft_scan_max: int = 20000
    price_noise_ceiling: int = 100000  # stat values at or above this are prices
    price_scan_min_digits: int = 6
    description_max_length: int = 1000

    # Site registry (defaults to the packaged sites.yaml)
    sites_file: Optional[Path] = None

    # Deep link consumed by the companion app
    deep_link_scheme: str = "homescout"
    deep_link_path: str = "add-property"

    # Logging configuration
    log_level: str = "INFO"
    log_file: Optional[Path] = None

    # API configuration
    host: str = "127.0.0.1"
    port: int = 8000

    @property
    def sqft_scan_bounds(self) -> tuple[int, int]:
        """Inclusive square-footage bounds applied to whole-page scans."""
        return self.sqft_scan_min, self.sqft_scan_max


settings = Settings()
