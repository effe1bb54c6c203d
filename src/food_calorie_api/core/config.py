"""Application configuration using Pydantic Settings."""

from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Upload
    file_upload_max_size: int = 5242880  # 5 MB

    # Prediction service (model is addressed by project/region/model)
    project_id: str = Field(
        default="",
        validation_alias=AliasChoices("GCLOUD_PROJECT", "PROJECT_ID"),
    )
    region_name: str = Field(
        default="",
        validation_alias=AliasChoices("REGION_NAME", "COMPUTE_REGION"),
    )
    model_id: str = ""
    score_threshold: str = "0.5"
    prediction_api_url: str = "https://automl.googleapis.com"
    prediction_access_token: str = ""
    prediction_timeout: float = 30.0

    # Audit log store
    mongo_uri: str = "mongodb://localhost:27017"
    db_name: str = "food_calorie_db"

    # Resources
    food_mapping_path: str = "data/food_mapping.txt"
    static_dir: str = "web"

    # App
    app_name: str = "WhatAmIEating"
    api_version: str = "1.0.0"
    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "INFO"

    def missing_prediction_settings(self) -> list[str]:
        """Return the names of required prediction settings that are unset."""
        required = {
            "project_id": self.project_id,
            "region_name": self.region_name,
            "model_id": self.model_id,
        }
        return [name for name, value in required.items() if not value]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
