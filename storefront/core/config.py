"""Storefront Service Configuration"""

from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment"""

    # Application
    app_name: str = "Wellness Storefront"
    debug: bool = True
    host: str = "0.0.0.0"
    port: int = 8000

    # Remote commerce API
    api_base_url: str = "http://localhost:8001/api"
    request_timeout: float = 30.0

    # Where the payment gateway sends the shopper back to
    frontend_url: str = "http://localhost:8000"
    payment_callback_path: str = "/verify-payment"

    # Sessions
    session_max_age_hours: int = 24

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False

    @property
    def payment_callback_url(self) -> str:
        """Absolute URL the payment gateway redirects to after payment"""
        return f"{self.frontend_url.rstrip('/')}{self.payment_callback_path}"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()
