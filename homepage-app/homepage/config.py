import os
import json
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

BASE_DIR = Path(__file__).resolve().parent.parent
DATA_DIR = Path(os.getenv("HOMEPAGE_DATA_DIR", BASE_DIR / "data"))
CONFIG_FILE = DATA_DIR / "config.json"
IP_DATA_FILE = DATA_DIR / "ip_data.json"
IMAGES_DIR = BASE_DIR / "images"
MUSIC_DIR = BASE_DIR / "music"

# Ensure directories exist
DATA_DIR.mkdir(parents=True, exist_ok=True)
IMAGES_DIR.mkdir(parents=True, exist_ok=True)
MUSIC_DIR.mkdir(parents=True, exist_ok=True)

PORT = int(os.getenv("PORT", "5000"))
SECRET_KEY = os.getenv("SECRET_KEY", "change-me-in-production")

# Upload limits
PHOTO_MAX_BYTES = 10 * 1024 * 1024
MUSIC_MAX_BYTES = 20 * 1024 * 1024

GEO_API_URL = "http://ip-api.com/json/{ip}"
GEO_API_FIELDS = (
    "status,message,country,countryCode,region,regionName,city,zip,"
    "lat,lon,timezone,isp,org,as,query"
)


# Load app config from JSON
def load_app_config():
    if CONFIG_FILE.exists():
        with open(CONFIG_FILE, "r") as f:
            content = f.read().strip()
            return json.loads(content) if content else {}
    return {}


APP_CONFIG = load_app_config()

# Telegram config (env wins over config.json)
_telegram = APP_CONFIG.get("telegram") or {}
TELEGRAM_BOT_TOKEN = os.getenv("TELEGRAM_BOT_TOKEN") or _telegram.get("botToken", "")
TELEGRAM_CHAT_ID = str(os.getenv("TELEGRAM_CHAT_ID") or _telegram.get("chatId", ""))
TELEGRAM_POLL_TIMEOUT = int(os.getenv("TELEGRAM_POLL_TIMEOUT", "30"))


def owner_chat_id():
    """Owner chat id, re-read on each call so edits to config.json apply without a restart."""
    env = os.getenv("TELEGRAM_CHAT_ID")
    if env:
        return str(env)
    return str((load_app_config().get("telegram") or {}).get("chatId", ""))
