"""Settings and configuration."""
from typing import List, Optional

from dotenv import load_dotenv
from pydantic_settings import BaseSettings

# Load .env file if it exists
load_dotenv()


class Settings(BaseSettings):
    # Core
    LOG_LEVEL: str = "info"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 3001
    CORS_ORIGINS: List[str] = ["*"]

    # Security
    # Read per request by the service layer only; never by the envelope core.
    MASTER_KEY_HEX: Optional[str] = None

    # Storage
    USE_JSON_STORES: bool = False
    RECORDS_FILE: str = "data/records.json"

    model_config = {
        "case_sensitive": True,
        "env_file": ".env",
        "extra": "ignore"
    }


settings = Settings()
