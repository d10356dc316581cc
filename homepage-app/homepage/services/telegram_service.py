import requests

from homepage.config import TELEGRAM_BOT_TOKEN, TELEGRAM_CHAT_ID
from homepage.utils.helpers import now_display, format_kb, format_mb, sanitize

API_BASE = "https://api.telegram.org/bot{token}/{method}"
REQUEST_TIMEOUT = 10


class TelegramError(RuntimeError):
    pass


class TelegramClient:
    """Minimal Bot API client over HTTPS."""

    def __init__(self, token, session=None):
        self.token = token
        self.session = session or requests.Session()

    def _call(self, method, payload, timeout=REQUEST_TIMEOUT):
        url = API_BASE.format(token=self.token, method=method)
        try:
            resp = self.session.post(url, json=payload, timeout=timeout)
            data = resp.json()
        except (requests.RequestException, ValueError) as e:
            raise TelegramError(f"{method} failed: {e}") from e
        if not data.get("ok"):
            raise TelegramError(f"{method} failed: {data.get('description', 'unknown error')}")
        return data.get("result")

    def send_message(self, chat_id, text, parse_mode=None):
        payload = {"chat_id": chat_id, "text": text}
        if parse_mode:
            payload["parse_mode"] = parse_mode
        return self._call("sendMessage", payload)

    def get_updates(self, offset=None, timeout=30):
        payload = {"timeout": timeout, "allowed_updates": ["message"]}
        if offset is not None:
            payload["offset"] = offset
        # Leave headroom over the long-poll window
        return self._call("getUpdates", payload, timeout=timeout + REQUEST_TIMEOUT)


def _ensure_configured():
    if not TELEGRAM_BOT_TOKEN or not TELEGRAM_CHAT_ID:
        raise RuntimeError(
            "Telegram is not configured. "
            "Set TELEGRAM_BOT_TOKEN and TELEGRAM_CHAT_ID in .env or telegram.* in config.json"
        )


_client = None


def _get_client():
    global _client
    if _client is None or _client.token != TELEGRAM_BOT_TOKEN:
        _client = TelegramClient(TELEGRAM_BOT_TOKEN)
    return _client


def notify(text):
    """Send a notification to the owner's chat.

    ``text`` is Telegram HTML; the message builders below escape every value
    they interpolate.

    Raises:
        RuntimeError: If the bot token or owner chat id is not configured.
        TelegramError: If the Bot API call fails.
    """
    _ensure_configured()
    _get_client().send_message(TELEGRAM_CHAT_ID, text, parse_mode="HTML")


# --- Notification texts ---

def _field(data, key):
    return sanitize((data or {}).get(key)) or "Unknown"


def visit_message(ip, ip_data, user_agent):
    return (
        f"🚀 Website Visited!\n\n"
        f"🌐 IP: {sanitize(ip)}\n"
        f"📍 Location: {_field(ip_data, 'city')}, {_field(ip_data, 'country')}\n"
        f"🏢 ISP: {_field(ip_data, 'isp')}\n"
        f"📮 ZIP: {_field(ip_data, 'zip')}\n"
        f"⏰ Time: {now_display()}\n"
        f"🌍 Region: {_field(ip_data, 'regionName')}\n"
        f"👀 User Agent: {sanitize(user_agent) or 'Unknown'}\n"
        f"🖥️ Path: Homepage Visit"
    )


def photo_uploaded_message(ip, filename, size):
    return (
        f"📸 New Photo Uploaded!\n\n"
        f"👤 Admin IP: {sanitize(ip)}\n"
        f"📁 Filename: {sanitize(filename)}\n"
        f"📦 Size: {format_kb(size)}\n"
        f"⏰ Time: {now_display()}"
    )


def photo_deleted_message(ip, filename):
    return (
        f"🗑️ Photo Deleted!\n\n"
        f"👤 Admin IP: {sanitize(ip)}\n"
        f"📁 Filename: {sanitize(filename)}\n"
        f"⏰ Time: {now_display()}"
    )


def music_uploaded_message(ip, filename, size):
    return (
        f"🎵 New Music Uploaded!\n\n"
        f"👤 Admin IP: {sanitize(ip)}\n"
        f"📁 Filename: {sanitize(filename)}\n"
        f"📦 Size: {format_mb(size)}\n"
        f"⏰ Time: {now_display()}"
    )
