import json
import sys
from pathlib import Path
from contextlib import contextmanager

# Cross-platform file locking
if sys.platform == "win32":
    import msvcrt

    def _lock_shared(f):
        msvcrt.locking(f.fileno(), msvcrt.LK_NBLCK, 1)

    def _lock_exclusive(f):
        msvcrt.locking(f.fileno(), msvcrt.LK_NBLCK, 1)

    def _unlock(f):
        try:
            f.seek(0)
            msvcrt.locking(f.fileno(), msvcrt.LK_UNLCK, 1)
        except OSError:
            pass
else:
    import fcntl

    def _lock_shared(f):
        fcntl.flock(f.fileno(), fcntl.LOCK_SH)

    def _lock_exclusive(f):
        fcntl.flock(f.fileno(), fcntl.LOCK_EX)

    def _unlock(f):
        fcntl.flock(f.fileno(), fcntl.LOCK_UN)


def _parse(content, default):
    return json.loads(content) if content else default()


@contextmanager
def locked_json_read(filepath, default=list):
    """Read a JSON file with a shared lock."""
    filepath = Path(filepath)
    if not filepath.exists():
        yield default()
        return
    with open(filepath, "r") as f:
        _lock_shared(f)
        try:
            yield _parse(f.read().strip(), default)
        finally:
            _unlock(f)


@contextmanager
def locked_json_write(filepath, default=list):
    """Read-modify-write a JSON file with an exclusive lock.

    Usage:
        with locked_json_write('config.json', default=dict) as data:
            data.setdefault("adminIps", []).append(ip)
        # File is written on context exit

    Nothing is written if the block raises.
    """
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    # Never truncate here: another writer may already hold the lock
    filepath.touch(exist_ok=True)

    with open(filepath, "r+") as f:
        _lock_exclusive(f)
        try:
            data = _parse(f.read().strip(), default)
            yield data
            f.seek(0)
            f.truncate()
            json.dump(data, f, indent=2, default=str)
            f.flush()
        finally:
            _unlock(f)


def read_json(filepath, default=list):
    """Read a JSON file with a shared lock."""
    with locked_json_read(filepath, default=default) as data:
        return data
