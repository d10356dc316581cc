import os
import random
import re
from pathlib import Path
from werkzeug.utils import secure_filename

from homepage.config import IMAGES_DIR, MUSIC_DIR, PHOTO_MAX_BYTES, MUSIC_MAX_BYTES
from homepage.utils.helpers import unique_suffix

PHOTO_TYPES = re.compile(r"jpeg|jpg|png|gif|webp")
MUSIC_TYPES = re.compile(r"mp3|mpeg")
GALLERY_FILE = re.compile(r"\.(jpg|jpeg|png|gif|webp)$", re.IGNORECASE)


class UploadError(ValueError):
    """Rejected upload. ``status`` is the HTTP status to answer with."""

    def __init__(self, message, status=400):
        super().__init__(message)
        self.status = status


def _file_size(file):
    file.stream.seek(0, os.SEEK_END)
    size = file.stream.tell()
    file.stream.seek(0)
    return size


def _check_upload(file, allowed, max_bytes, type_error):
    ext = Path(file.filename or "").suffix.lower()
    mimetype = file.mimetype or ""
    if not (allowed.search(ext) and allowed.search(mimetype)):
        raise UploadError(type_error)
    size = _file_size(file)
    if size > max_bytes:
        raise UploadError(f"File too large (max {max_bytes // (1024 * 1024)}MB)", status=413)
    return ext, size


# --- Photos ---

def list_photos():
    """Gallery URLs for every image in the images folder."""
    images_dir = Path(IMAGES_DIR)
    if not images_dir.exists():
        return []
    return [
        f"/images/{name}"
        for name in sorted(os.listdir(images_dir))
        if GALLERY_FILE.search(name)
    ]


def save_photo(file):
    """Store an uploaded image as ``photo<ms>-<rand><ext>``. Returns (filename, size)."""
    ext, size = _check_upload(file, PHOTO_TYPES, PHOTO_MAX_BYTES, "Only image files are allowed!")
    images_dir = Path(IMAGES_DIR)
    images_dir.mkdir(parents=True, exist_ok=True)
    filename = f"photo{unique_suffix()}{ext}"
    file.save(images_dir / filename)
    return filename, size


def delete_photo(image_path):
    """Delete a gallery image by URL or name. Returns the filename, or None if absent."""
    filename = os.path.basename(image_path)
    path = Path(IMAGES_DIR) / filename
    if not filename or not path.is_file():
        return None
    path.unlink()
    return filename


# --- Music ---

def list_tracks():
    music_dir = Path(MUSIC_DIR)
    if not music_dir.exists():
        return []
    return sorted(name for name in os.listdir(music_dir) if name.endswith(".mp3"))


def random_track():
    """A random MP3 filename, or None when the folder has none.

    Raises:
        OSError: If the music folder cannot be read.
    """
    tracks = list_tracks()
    if not tracks:
        return None
    return random.choice(tracks)


def save_track(file):
    """Store an uploaded MP3 under its original (secured) name. Returns (filename, size)."""
    _, size = _check_upload(file, MUSIC_TYPES, MUSIC_MAX_BYTES, "Only MP3 files are allowed!")
    filename = secure_filename(file.filename)
    if not filename:
        raise UploadError("Invalid filename")
    music_dir = Path(MUSIC_DIR)
    music_dir.mkdir(parents=True, exist_ok=True)
    file.save(music_dir / filename)
    return filename, size
