"""Process configuration, read once from the environment at startup."""

import os
from functools import lru_cache
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, SecretStr

DEFAULT_MODEL_ID = "us.anthropic.claude-3-5-haiku-20241022-v1:0"


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    host: str = "0.0.0.0"
    port: int = 3001

    aws_region: str = "us-east-1"
    aws_access_key_id: Optional[str] = None
    aws_secret_access_key: Optional[SecretStr] = None

    knowledge_base_id: str = ""
    foundation_model_id: str = DEFAULT_MODEL_ID

    app_env: str = "production"
    log_level: str = "INFO"
    cors_allow_origins: List[str] = ["*"]

    @property
    def is_development(self) -> bool:
        return self.app_env.lower() == "development"

    @classmethod
    def from_env(cls) -> "Settings":
        secret = os.getenv("AWS_SECRET_ACCESS_KEY")
        return cls(
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "3001")),
            aws_region=os.getenv("AWS_REGION", "us-east-1"),
            aws_access_key_id=os.getenv("AWS_ACCESS_KEY_ID") or None,
            aws_secret_access_key=SecretStr(secret) if secret else None,
            knowledge_base_id=os.getenv("KNOWLEDGE_BASE_ID", ""),
            foundation_model_id=os.getenv("FOUNDATION_MODEL_ID") or DEFAULT_MODEL_ID,
            app_env=os.getenv("APP_ENV", "production"),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            cors_allow_origins=[
                origin.strip()
                for origin in os.getenv("CORS_ALLOW_ORIGINS", "*").split(",")
                if origin.strip()
            ],
        )


@lru_cache
def get_settings() -> Settings:
    load_dotenv()
    return Settings.from_env()
