from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import Optional

class Settings(BaseSettings):
    DATABASE_URL: Optional[str] = None
    POSTGRES_HOST: str = "postgres"
    POSTGRES_PORT: int = 5432
    POSTGRES_DB: str = "storefront"
    POSTGRES_USER: str = "storefront"
    POSTGRES_PASSWORD: str = "storefront"
    JWT_SECRET: str = "change-me"
    JWT_ALG: str = "HS256"
    STRIPE_SECRET_KEY: str = ""
    SITE_DOMAIN: str = "http://localhost:5173"
    CHECKOUT_CURRENCY: str = "usd"
    DEFAULT_PRODUCT_NAME: str = "Garment Order"
    # Role required for endpoints the original service left at "any authenticated user"
    PRODUCT_WRITE_ROLE: str = "manager"
    USER_DELETE_ROLE: str = "admin"
    USER_PROMOTE_ROLE: str = "admin"
    LOG_LEVEL: str = "INFO"
    SERVICE_VERSION: str = "1.0.0"
    CORS_ORIGINS: list[str] = ["*"]

    class Config:
        env_file = ".env"

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return f"postgresql+psycopg2://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"

@lru_cache
def get_settings() -> Settings:
    return Settings()
