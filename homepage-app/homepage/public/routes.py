from flask import Blueprint, render_template, request, jsonify, send_from_directory, current_app

from homepage.services import admin_ip_service, geo_service, media_service, telegram_service

public_bp = Blueprint(
    "public", __name__,
    template_folder="templates",
)


def get_user_ip():
    """Client IP, honouring the first X-Forwarded-For hop set by the proxy."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.remote_addr


def _is_admin(ip):
    return admin_ip_service.is_admin_ip(ip, current_app.config["ADMIN_IP_STORE"])


def _notify(text):
    try:
        telegram_service.notify(text)
    except RuntimeError as e:
        print(f"[Notify] Telegram notification failed: {e}")


def _error(message, status):
    return jsonify({"success": False, "error": message}), status


@public_bp.app_errorhandler(413)
def request_too_large(e):
    return _error("File too large", 413)


# --- Homepage ---

@public_bp.route("/")
def index():
    ip = get_user_ip()
    try:
        ip_data = geo_service.lookup(ip)
        telegram_service.notify(
            telegram_service.visit_message(ip, ip_data, request.headers.get("User-Agent"))
        )
    except Exception as e:
        print(f"[Visit] Error tracking homepage visit from {ip}: {e}")
    return render_template("index.html")


@public_bp.route("/random-music")
def random_music():
    try:
        track = media_service.random_track()
    except OSError as e:
        print(f"[Music] Error reading music directory: {e}")
        return jsonify({"error": "Error reading music files"}), 500
    if track is None:
        return jsonify({"error": "No music files found"}), 404
    return jsonify({"file": track, "url": f"/music/{track}"})


# --- Static media ---

@public_bp.route("/images/<path:filename>")
def image_file(filename):
    return send_from_directory(media_service.IMAGES_DIR, filename)


@public_bp.route("/music/<path:filename>")
def music_file(filename):
    return send_from_directory(media_service.MUSIC_DIR, filename)


# --- API ---

@public_bp.route("/api/check-admin")
def check_admin():
    ip = get_user_ip()
    is_admin = _is_admin(ip)
    print(f"[Admin] Admin check: IP={ip}, Admin={is_admin}")
    return jsonify({"isAdmin": is_admin})


@public_bp.route("/api/gallery-images")
def gallery_images():
    try:
        images = media_service.list_photos()
    except OSError as e:
        print(f"[Gallery] Error reading images directory: {e}")
        return jsonify({"error": "Error reading images"}), 500
    return jsonify({"images": images})


@public_bp.route("/api/upload-photo", methods=["POST"])
def upload_photo():
    ip = get_user_ip()
    if not _is_admin(ip):
        return _error("Unauthorized", 403)

    file = request.files.get("photo")
    if not file or not file.filename:
        return _error("No file uploaded", 400)

    try:
        filename, size = media_service.save_photo(file)
    except media_service.UploadError as e:
        return _error(str(e), e.status)
    except OSError as e:
        print(f"[Upload] Photo upload error: {e}")
        return _error(str(e), 500)

    print(f"[Upload] Photo {filename} ({size} bytes) from {ip}")
    _notify(telegram_service.photo_uploaded_message(ip, filename, size))
    return jsonify({"success": True, "filename": filename})


@public_bp.route("/api/delete-photo", methods=["POST"])
def delete_photo():
    ip = get_user_ip()
    if not _is_admin(ip):
        return _error("Unauthorized", 403)

    body = request.get_json(silent=True) or {}
    image_path = body.get("imagePath")
    if not image_path:
        return _error("No image path provided", 400)

    try:
        filename = media_service.delete_photo(str(image_path))
    except OSError as e:
        print(f"[Delete] Photo delete error: {e}")
        return _error(str(e), 500)
    if filename is None:
        return _error("File not found", 404)

    print(f"[Delete] Photo {filename} deleted by {ip}")
    _notify(telegram_service.photo_deleted_message(ip, filename))
    return jsonify({"success": True})


@public_bp.route("/api/upload-music", methods=["POST"])
def upload_music():
    ip = get_user_ip()
    if not _is_admin(ip):
        return _error("Unauthorized", 403)

    file = request.files.get("music")
    if not file or not file.filename:
        return _error("No file uploaded", 400)

    try:
        filename, size = media_service.save_track(file)
    except media_service.UploadError as e:
        return _error(str(e), e.status)
    except OSError as e:
        print(f"[Upload] Music upload error: {e}")
        return _error(str(e), 500)

    print(f"[Upload] Track {filename} ({size} bytes) from {ip}")
    _notify(telegram_service.music_uploaded_message(ip, filename, size))
    return jsonify({"success": True, "filename": filename})
