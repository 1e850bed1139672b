"""Configuration: env, data paths, remote endpoint, timeouts."""
import os
from pathlib import Path

# Base paths (project root = parent of scantoreturn package)
BASE_DIR = Path(__file__).resolve().parent.parent

# Load .env from project root so SCANTORETURN_* / GEMINI_API_KEY are set
try:
    from dotenv import load_dotenv
    load_dotenv(BASE_DIR / ".env")
except ImportError:
    pass
DATA_DIR = Path(os.getenv("SCANTORETURN_DATA_DIR", str(BASE_DIR / "data")))
TAG_CACHE_PATH = DATA_DIR / "tag_cache.json"
SETTINGS_PATH = DATA_DIR / "settings.json"

# Namespaced keys inside the persisted JSON documents
TAG_CACHE_KEY = "scan_to_return_db"
ENDPOINT_KEY = "gas_api_url"

# API
API_HOST = os.getenv("SCANTORETURN_API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("SCANTORETURN_API_PORT", "8000"))

# Remote record service (spreadsheet web app). Empty string = offline/demo mode.
DEFAULT_ENDPOINT = os.getenv(
    "SCANTORETURN_DEFAULT_ENDPOINT",
    "https://script.google.com/macros/s/AKfycbwDvbsM6B3GoqqAsGCXR-vkhBhve5dT3ExSF0ukrWqQcZP0LKQRf_tguIcRkXZ5mLq5/exec",
)
LOOKUP_TIMEOUT_SEC = float(os.getenv("SCANTORETURN_LOOKUP_TIMEOUT_SEC", "8.0"))
WRITE_TIMEOUT_SEC = float(os.getenv("SCANTORETURN_WRITE_TIMEOUT_SEC", "15.0"))

# Simulated latency for the local store (keeps demo mode feeling like a network call)
LOCAL_READ_LATENCY_SEC = float(os.getenv("SCANTORETURN_LOCAL_READ_LATENCY_SEC", "0.8"))
LOCAL_WRITE_LATENCY_SEC = float(os.getenv("SCANTORETURN_LOCAL_WRITE_LATENCY_SEC", "1.0"))

# After a successful activation, re-resolve the tag after this delay
REDIRECT_DELAY_SEC = float(os.getenv("SCANTORETURN_REDIRECT_DELAY_SEC", "2.0"))

# Demo seed: ID_0001..ID_<SEED_COUNT>, ID_0001 active
SEED_COUNT = int(os.getenv("SCANTORETURN_SEED_COUNT", "10"))

# Contact deep links and printed scan URLs
MESSAGING_BASE = os.getenv("SCANTORETURN_MESSAGING_BASE", "https://wa.me")
TAG_BASE_URL = os.getenv("SCANTORETURN_TAG_BASE_URL", "https://therameshiam.github.io/soultag/")

# Optional text assist (Gemini); features fall back to fixed text when unset
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY", "")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
GEMINI_BASE_URL = os.getenv("GEMINI_BASE_URL", "https://generativelanguage.googleapis.com")
ASSIST_TIMEOUT_SEC = float(os.getenv("SCANTORETURN_ASSIST_TIMEOUT_SEC", "10.0"))


def ensure_data_dir() -> None:
    DATA_DIR.mkdir(parents=True, exist_ok=True)
