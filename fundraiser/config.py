# fundraiser/config.py
import os
from pathlib import Path

from dotenv import load_dotenv

# .env is looked up next to the package, not in the current working directory
load_dotenv(Path(__file__).resolve().parent.with_name(".env"))


def _default_db_url() -> str:
    db_path = Path(__file__).with_name("app.db")
    return f"sqlite:///{db_path}"


class Settings:
    DATABASE_URL = (os.getenv("DATABASE_URL") or "").strip() or _default_db_url()
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
    HOST = os.getenv("HOST", "127.0.0.1")
    PORT = int(os.getenv("PORT", 8000))


settings = Settings()
