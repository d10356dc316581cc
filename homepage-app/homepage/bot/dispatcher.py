import re
import time

from homepage.bot.commands import COMMANDS, CommandContext
from homepage.services.telegram_service import TelegramError

COMMAND_PATTERN = re.compile(r"^/(\w+)(.*)")
ERROR_REPLY = "❌ An error occurred while executing the command."


def parse_command(text):
    """Split ``/name arg1 arg2`` into ("name", ["arg1", "arg2"]).

    Returns None when ``text`` is not a command. A ``@botname`` suffix on the
    command (group chat form) is dropped.
    """
    match = COMMAND_PATTERN.match(text or "")
    if not match:
        return None
    name = match.group(1).lower()
    rest = match.group(2)
    if rest.startswith("@"):
        rest = rest.partition(" ")[2]
    return name, rest.split()


class Dispatcher:
    def __init__(self, client, admin_store, owner_id, commands=None):
        """``owner_id`` is the owner chat id, or a callable returning it per command."""
        self.client = client
        self.admin_store = admin_store
        self.owner_id = owner_id
        self.commands = COMMANDS if commands is None else commands
        self.offset = None

    def handle_message(self, message):
        """Run the command in ``message``. Returns True if a command ran."""
        parsed = parse_command(message.get("text"))
        if not parsed:
            return False
        name, args = parsed
        cmd = self.commands.get(name)
        if cmd is None:
            return False

        ctx = CommandContext(
            client=self.client,
            message=message,
            args=args,
            admin_store=self.admin_store,
        )
        try:
            ctx.owner_id = self.owner_id() if callable(self.owner_id) else self.owner_id
            cmd.execute(ctx)
        except Exception as e:
            print(f"[Bot] Error executing command {name}: {e}", flush=True)
            ctx.reply(ERROR_REPLY)
        return True

    def handle_update(self, update):
        self.offset = update["update_id"] + 1
        message = update.get("message")
        if message and "chat" in message:
            self.handle_message(message)

    def poll_once(self, timeout=30):
        for update in self.client.get_updates(offset=self.offset, timeout=timeout) or []:
            self.handle_update(update)

    def run_polling(self, timeout=30, backoff=5):
        """Long-poll getUpdates forever, pausing ``backoff`` seconds after API errors."""
        print("[Bot] Polling for updates", flush=True)
        while True:
            try:
                self.poll_once(timeout=timeout)
            except TelegramError as e:
                print(f"[Bot] Polling error: {e}", flush=True)
                time.sleep(backoff)
