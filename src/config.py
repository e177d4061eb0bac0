"""
Configuration settings for the application.
"""

import logging
import os

from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Application settings loaded from environment variables."""

    # Environment
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")

    # Remote catalog (WooCommerce REST API)
    WOOCOMMERCE_BASE_URL: str = os.getenv("WOOCOMMERCE_BASE_URL", "")
    WOOCOMMERCE_CONSUMER_KEY: str = os.getenv("WOOCOMMERCE_CONSUMER_KEY", "")
    WOOCOMMERCE_CONSUMER_SECRET: str = os.getenv("WOOCOMMERCE_CONSUMER_SECRET", "")
    WOOCOMMERCE_TIMEOUT_SECONDS: float = float(
        os.getenv("WOOCOMMERCE_TIMEOUT_SECONDS", "10")
    )

    # On-demand revalidation webhook
    REVALIDATE_SECRET: str | None = os.getenv("REVALIDATE_SECRET")

    # Cache settings
    CACHE_BACKEND: str = os.getenv("CACHE_BACKEND", "memory")
    REDIS_URL: str = os.getenv("REDIS_URL", "redis://localhost:6379/0")
    TRANSPORT_CACHE_TTL_SECONDS: int = int(
        os.getenv("TRANSPORT_CACHE_TTL_SECONDS", "900")
    )
    HOME_PAGE_TTL_SECONDS: int = int(os.getenv("HOME_PAGE_TTL_SECONDS", "7200"))
    CATEGORY_PAGE_TTL_SECONDS: int = int(
        os.getenv("CATEGORY_PAGE_TTL_SECONDS", "3600")
    )
    PRODUCT_PAGE_TTL_SECONDS: int = int(os.getenv("PRODUCT_PAGE_TTL_SECONDS", "1800"))
    SEARCH_PAGE_TTL_SECONDS: int = int(os.getenv("SEARCH_PAGE_TTL_SECONDS", "900"))

    # Storefront presentation
    SITE_NAME: str = os.getenv("SITE_NAME", "PC Wala Online")
    SITE_URL: str = os.getenv("SITE_URL", "https://www.pcwalaonline.com")
    WA_NUMBER: str = os.getenv("WA_NUMBER", "+923423355119")

    @property
    def is_production(self) -> bool:
        """
        Check if running in production environment.
        """
        return self.ENVIRONMENT.lower() == "production"

    @property
    def catalog_configured(self) -> bool:
        """Return True when all remote catalog credentials are present."""
        return bool(
            self.WOOCOMMERCE_BASE_URL
            and self.WOOCOMMERCE_CONSUMER_KEY
            and self.WOOCOMMERCE_CONSUMER_SECRET
        )

    @property
    def uses_redis_cache(self) -> bool:
        """Indicates whether cache entries should live in Redis."""
        return self.CACHE_BACKEND.lower() == "redis"

    def __init__(self):
        self.log_level = os.getenv("LOG_LEVEL", "INFO")
        logging.basicConfig(level=self.log_level)
        self.logger = logging.getLogger(__name__)

        self.logger.debug(
            f"Config initialized with environment={self.ENVIRONMENT}, "
            f"log_level={self.log_level}"
        )


# Create a global settings instance for import
settings = Settings()
