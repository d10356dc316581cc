"""Admin IP allow-list: canonical keys, storage, the admin check and registration.

Admin IPs live under ``adminIps`` in the config document. Requests are compared
by canonical key (``0x`` + two hex digits per octet), so ``10.0.0.1`` and
``010.000.000.001`` authorize the same requester. Registration deduplicates on
the literal string only, so both spellings can be stored side by side.
"""
import re
from dataclasses import dataclass

from homepage.utils.file_lock import locked_json_write, read_json

IP_SHAPE = re.compile(r"(\d{1,3}\.){3}\d{1,3}", re.ASCII)
_LEADING_INT = re.compile(r"\s*([+-]?\d+)", re.ASCII)

MSG_NOT_OWNER = "❌ Unauthorized! Only the owner can add admin IPs."
MSG_USAGE = "⚠️ Usage: /admin <IP_ADDRESS>\n\nExample: /admin 192.168.1.100"
MSG_BAD_SHAPE = "❌ Invalid IP address format!"
MSG_DUPLICATE = "⚠️ This IP address is already authorized!"
MSG_STORE_ERROR = "❌ Could not update the admin list. Check config.json."


def _octet_to_hex(part):
    match = _LEADING_INT.match(part)
    if not match:
        return "nan"
    return format(int(match.group(1)), "x").rjust(2, "0")


def ip_to_hex(ip):
    """Canonical comparison key for a dotted-quad IP string.

    Lenient: each segment contributes its leading integer, out-of-range values
    pass through and segments without digits become ``nan``.
    """
    return "0x" + "".join(_octet_to_hex(part) for part in ip.split("."))


class AdminIPStore:
    """Where the admin list lives. Subclasses implement ``load`` and ``append``."""

    def load(self):
        """Return the current admin IP strings."""
        raise NotImplementedError

    def append(self, ip):
        """Add ``ip`` verbatim. Return the new count, or None if already present."""
        raise NotImplementedError


class JSONAdminIPStore(AdminIPStore):
    """Admin list stored in the site's config.json, next to the Telegram settings."""

    key = "adminIps"

    def __init__(self, path):
        self.path = path

    def load(self):
        config = read_json(self.path, default=dict)
        if not isinstance(config, dict):
            raise ValueError(f"{self.path} does not hold a JSON object")
        ips = config.get(self.key) or []
        if not isinstance(ips, list):
            raise ValueError(f"'{self.key}' in {self.path} is not a list")
        return [str(ip) for ip in ips]

    def append(self, ip):
        with locked_json_write(self.path, default=dict) as config:
            if not isinstance(config, dict):
                raise ValueError(f"{self.path} does not hold a JSON object")
            ips = config.get(self.key)
            if not ips:
                ips = config[self.key] = []
            if not isinstance(ips, list):
                raise ValueError(f"'{self.key}' in {self.path} is not a list")
            if ip in ips:
                return None
            ips.append(ip)
            return len(ips)


class MemoryAdminIPStore(AdminIPStore):
    def __init__(self, ips=None):
        self.ips = list(ips or [])

    def load(self):
        return list(self.ips)

    def append(self, ip):
        if ip in self.ips:
            return None
        self.ips.append(ip)
        return len(self.ips)


def is_admin_ip(ip, store):
    """True if ``ip`` matches any stored admin IP by canonical key.

    The store is re-read on every call so a freshly registered IP is honoured
    by the very next request. Any problem reading the store denies access.
    """
    if not ip:
        return False
    try:
        admin_ips = store.load()
    except (OSError, ValueError) as e:
        print(f"[Admin] Could not load admin IPs, denying {ip}: {e}")
        return False

    ip_hex = ip_to_hex(ip)
    return any(ip_to_hex(admin_ip) == ip_hex for admin_ip in admin_ips)


@dataclass
class RegistrationResult:
    ok: bool
    message: str
    count: int = None


def _success_message(ip, count):
    return (
        f"✅ Admin IP Added!\n\n"
        f"🌐 IP: {ip}\n"
        f"📊 Total Admin IPs: {count}\n\n"
        f"This IP can now:\n"
        f"• Upload photos 📸\n"
        f"• Upload music 🎵\n"
        f"• Delete photos 🗑️"
    )


def register_admin_ip(store, caller_id, ip, owner_id):
    """Add ``ip`` to the admin list on behalf of ``caller_id``.

    Only the owner may register. The IP must look like a dotted quad (octet
    values are not range checked) and must not already be stored verbatim.
    """
    if not owner_id or str(caller_id) != str(owner_id):
        return RegistrationResult(False, MSG_NOT_OWNER)

    if not ip:
        return RegistrationResult(False, MSG_USAGE)

    if not IP_SHAPE.fullmatch(ip):
        return RegistrationResult(False, MSG_BAD_SHAPE)

    try:
        count = store.append(ip)
    except (OSError, ValueError) as e:
        print(f"[Admin] Could not register admin IP {ip}: {e}")
        return RegistrationResult(False, MSG_STORE_ERROR)
    if count is None:
        return RegistrationResult(False, MSG_DUPLICATE)

    print(f"[Admin] Registered admin IP {ip} (total {count})")
    return RegistrationResult(True, _success_message(ip, count), count)
