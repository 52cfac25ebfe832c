"""
Application configuration with Pydantic Settings for validation and type safety.
Values come from environment variables or a .env file.
"""

from enum import Enum
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator


class Environment(str, Enum):
    """Application environment types"""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class Settings(BaseSettings):
    """
    Application settings with validation.
    Settings are loaded from environment variables or .env file.
    """

    # Application settings
    app_name: str = Field(default="Lyfe", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    environment: Environment = Field(
        default=Environment.DEVELOPMENT, description="Application environment"
    )
    debug: bool = Field(default=False, description="Debug mode")

    # Server settings
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=5002, ge=1, le=65535, description="Server port")

    # SQL database settings
    database_url: str = Field(
        default="postgresql+psycopg2://lyfe@localhost:5432/lyfe",
        description="SQLAlchemy database URL",
    )
    db_echo: bool = Field(default=False, description="SQLAlchemy echo SQL statements")
    db_init_attempts: int = Field(
        default=8, ge=1, description="Database initialization retry attempts"
    )
    db_init_delay_sec: float = Field(
        default=2.0, ge=0, description="Delay between DB init attempts"
    )

    # MongoDB settings (food catalog)
    mongo_uri: str = Field(
        default="mongodb://localhost:27017", description="MongoDB connection URI"
    )
    mongo_db_name: str = Field(default="lyfe", description="MongoDB database name")

    # Auth
    jwt_secret: str = Field(default="change-me", description="JWT signing secret")
    jwt_algorithm: str = Field(default="HS256", description="JWT signing algorithm")
    jwt_expires_minutes: int = Field(
        default=60 * 24 * 7, ge=1, description="JWT lifetime in minutes"
    )

    # OpenAI
    openai_api_key: Optional[str] = Field(default=None, description="OpenAI API key")
    openai_model: str = Field(default="gpt-4", description="Chat model")
    openai_analysis_model: str = Field(
        default="gpt-4o-mini", description="Model used for journal analysis"
    )
    openai_temperature: float = Field(default=0.7, ge=0, le=2)
    openai_max_tokens: int = Field(default=1000, ge=1)

    # Food data sources
    usda_api_key: Optional[str] = Field(default=None, description="USDA FDC API key")
    usda_base_url: str = Field(default="https://api.nal.usda.gov/fdc/v1")
    off_base_url: str = Field(default="https://world.openfoodfacts.org")
    off_disable: bool = Field(default=False, description="Skip Open Food Facts ingest")
    http_timeout_sec: float = Field(default=15.0, gt=0)

    # Seed QA
    seed_qa_atwater_tolerance: float = Field(default=30.0, ge=0)
    seed_qa_portion_bands: dict[str, list[float]] = Field(
        default={"roti": [35, 60], "idli": [80, 180]},
        description="Allowed gram range per traditional portion unit",
    )

    # Day boundaries for daily metrics (minutes east of UTC, default IST)
    day_utc_offset_minutes: int = Field(default=330, ge=-720, le=840)

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(
        default="%(asctime)s %(levelname)s %(name)s: %(message)s",
        description="Log format string",
    )

    # CORS settings
    cors_origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:5002"],
        description="Allowed CORS origins",
    )
    cors_allow_credentials: bool = Field(
        default=True, description="Allow CORS credentials"
    )
    cors_allow_methods: list[str] = Field(
        default=["*"], description="Allowed HTTP methods"
    )
    cors_allow_headers: list[str] = Field(
        default=["*"], description="Allowed HTTP headers"
    )

    # API settings
    api_prefix: str = Field(default="/api", description="API route prefix")
    api_title: str = Field(default="Lyfe API", description="API documentation title")
    api_description: str = Field(
        default="Personal lifestyle management: meals, mindfulness, habits, tasks, finance and journal",
        description="API documentation description",
    )

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    @field_validator("environment", mode="before")
    @classmethod
    def validate_environment(cls, v):
        """Validate and normalize environment value"""
        if isinstance(v, str):
            return Environment(v.lower())
        return v

    @field_validator("openai_api_key", "usda_api_key", mode="before")
    @classmethod
    def blank_key_is_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    def is_production(self) -> bool:
        """Check if running in production environment"""
        return self.environment == Environment.PRODUCTION

    def is_development(self) -> bool:
        """Check if running in development environment"""
        return self.environment == Environment.DEVELOPMENT

    def is_testing(self) -> bool:
        """Check if running in testing environment"""
        return self.environment == Environment.TESTING


# Global settings instance
settings = Settings()
