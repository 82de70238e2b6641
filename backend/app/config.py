# backend configuration
# loads env vars for gemini mood analysis, seed user, cors

import os
from pathlib import Path
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

# load .env from project root
load_dotenv(Path(__file__).parent.parent.parent / ".env")


class Settings(BaseSettings):
    # gemini (for mood analysis)
    GEMINI_API_KEY: str = os.getenv("GEMINI_API_KEY", "")
    GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
    ANALYSIS_TEMPERATURE: float = 0.2
    ANALYSIS_TIMEOUT_SECONDS: float = float(os.getenv("ANALYSIS_TIMEOUT_SECONDS", "15"))

    # single hard-coded user, no auth
    DEFAULT_USER_ID: int = 1
    SEED_USERNAME: str = os.getenv("SEED_USERNAME", "test")
    SEED_PASSWORD: str = os.getenv("SEED_PASSWORD", "password")

    # journal listing
    RECENT_ENTRIES_DEFAULT_LIMIT: int = 5

    # cors
    FRONTEND_URL: str = os.getenv("FRONTEND_URL", "http://localhost:5173")

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
