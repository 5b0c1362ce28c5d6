"""Environment settings, loaded from .env with python-dotenv."""
import os
from typing import List

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def voucher_store() -> str:
    """Which store backs the service: "memory" or "firebase"."""
    return os.getenv("VOUCHER_STORE", "memory").strip().lower()


def firebase_cred_path() -> str:
    return os.getenv("FIREBASE_CRED_JSON", "./firebase-adminsdk.json")


def firebase_db_url() -> str:
    return os.getenv("FIREBASE_DB_URL", "").strip()


def allowed_origins() -> List[str]:
    raw = os.getenv("ALLOWED_ORIGINS", "http://127.0.0.1:5500")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def log_level() -> str:
    return os.getenv("LOG_LEVEL", "INFO").strip().upper()
