#!/usr/bin/env python3
"""Telegram bot - answers /uid, /help and the owner's /admin <ip> by long polling."""

import sys

from homepage.config import CONFIG_FILE, TELEGRAM_BOT_TOKEN, TELEGRAM_POLL_TIMEOUT, owner_chat_id
from homepage.bot.dispatcher import Dispatcher
from homepage.services.admin_ip_service import JSONAdminIPStore
from homepage.services.telegram_service import TelegramClient


def main():
    if not TELEGRAM_BOT_TOKEN:
        print("TELEGRAM_BOT_TOKEN is not set (env or telegram.botToken in config.json)", file=sys.stderr)
        return 1
    if not owner_chat_id():
        print("[Bot] No owner chat id configured; /admin will reject everyone", flush=True)

    dispatcher = Dispatcher(
        client=TelegramClient(TELEGRAM_BOT_TOKEN),
        admin_store=JSONAdminIPStore(CONFIG_FILE),
        owner_id=owner_chat_id,
    )
    try:
        dispatcher.run_polling(timeout=TELEGRAM_POLL_TIMEOUT)
    except KeyboardInterrupt:
        print("[Bot] Stopped", flush=True)
    return 0


if __name__ == "__main__":
    sys.exit(main())
