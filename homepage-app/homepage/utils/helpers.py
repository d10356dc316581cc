import random
import time
import bleach
from datetime import datetime


def now_display():
    """Local wall-clock time as shown in notifications."""
    return datetime.now().strftime("%Y-%m-%d %H:%M:%S")


def unique_suffix():
    """`<epoch ms>-<random int>` used to keep uploaded photo names unique."""
    return f"{int(time.time() * 1000)}-{random.randint(0, 10**9 - 1)}"


def sanitize(text):
    """Escape untrusted input for Telegram HTML messages. No tags survive."""
    if text is None:
        return ""
    return bleach.clean(str(text).strip(), tags=set())


def format_kb(size):
    return f"{size / 1024:.2f} KB"


def format_mb(size):
    return f"{size / 1024 / 1024:.2f} MB"
