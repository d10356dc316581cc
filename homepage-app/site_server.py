#!/usr/bin/env python3
"""Personal site server. Port configurable via PORT in .env."""

from flask import Flask
from homepage.config import SECRET_KEY, CONFIG_FILE, PORT, MUSIC_MAX_BYTES
from homepage.public.routes import public_bp
from homepage.services.admin_ip_service import JSONAdminIPStore


def create_app(admin_store=None):
    app = Flask(__name__)
    app.secret_key = SECRET_KEY
    # Per-route limits are checked in media_service; this caps the whole request
    app.config["MAX_CONTENT_LENGTH"] = MUSIC_MAX_BYTES + 1024 * 1024
    app.config["ADMIN_IP_STORE"] = admin_store or JSONAdminIPStore(CONFIG_FILE)
    app.register_blueprint(public_bp)
    return app


app = create_app()

if __name__ == "__main__":
    print(f"Server is running on http://0.0.0.0:{PORT}")
    app.run(host="0.0.0.0", port=PORT, debug=False)
