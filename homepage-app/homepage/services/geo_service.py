import requests

from homepage.config import IP_DATA_FILE, GEO_API_URL, GEO_API_FIELDS
from homepage.utils.file_lock import locked_json_write, read_json

REQUEST_TIMEOUT = 5


def get_cached(ip):
    """Return the stored ip-api.com record for ``ip``, or None."""
    try:
        for entry in read_json(IP_DATA_FILE):
            if entry.get("query") == ip:
                return entry
    except (OSError, ValueError, AttributeError) as e:
        print(f"[Geo] Error reading IP data: {e}")
    return None


def _save(ip_data):
    try:
        with locked_json_write(IP_DATA_FILE) as all_ip_data:
            all_ip_data.append(ip_data)
    except (OSError, ValueError, AttributeError) as e:
        print(f"[Geo] Error saving IP data: {e}")


def fetch(ip):
    """Query ip-api.com for ``ip``.

    Raises:
        requests.RequestException: On transport or HTTP errors.
    """
    resp = requests.get(
        GEO_API_URL.format(ip=ip),
        params={"fields": GEO_API_FIELDS},
        timeout=REQUEST_TIMEOUT,
    )
    resp.raise_for_status()
    return resp.json()


def lookup(ip):
    """Geolocation record for ``ip``, from the cache or fetched and cached."""
    ip_data = get_cached(ip)
    if ip_data is None:
        ip_data = fetch(ip)
        _save(ip_data)
    return ip_data
