from dataclasses import dataclass, field
from typing import Callable

from homepage.services import admin_ip_service


@dataclass
class CommandContext:
    """Everything a command handler needs to answer one message."""
    client: object
    message: dict
    args: list = field(default_factory=list)
    admin_store: admin_ip_service.AdminIPStore = None
    owner_id: str = ""

    @property
    def chat_id(self):
        return self.message["chat"]["id"]

    @property
    def sender(self):
        return self.message.get("from") or {}

    def reply(self, text):
        return self.client.send_message(self.chat_id, text)


@dataclass
class Command:
    name: str
    description: str
    execute: Callable[[CommandContext], None]


COMMANDS = {}


def command(name, description):
    """Register the decorated function as ``/<name>``."""
    def register(func):
        COMMANDS[name] = Command(name, description, func)
        return func
    return register


@command("uid", "Get your Telegram user ID")
def uid(ctx):
    sender = ctx.sender
    first_name = sender.get("first_name") or ""
    last_name = sender.get("last_name") or ""
    user_info = (
        f"👤 User Information\n\n"
        f"🆔 User ID: {sender.get('id')}\n"
        f"💬 Chat ID: {ctx.chat_id}\n"
        f"👤 Username: @{sender.get('username') or 'N/A'}\n"
        f"📝 Name: {first_name} {last_name}"
    ).strip()
    ctx.reply(user_info)


@command("admin", "Add new admin IP address (Owner only)")
def admin(ctx):
    # The owner is identified by the chat the command arrives in
    result = admin_ip_service.register_admin_ip(
        ctx.admin_store,
        caller_id=ctx.chat_id,
        ip=ctx.args[0] if ctx.args else None,
        owner_id=ctx.owner_id,
    )
    ctx.reply(result.message)


@command("help", "List available commands")
def help_(ctx):
    lines = [f"/{cmd.name} - {cmd.description}" for cmd in COMMANDS.values()]
    ctx.reply("🤖 Available commands\n\n" + "\n".join(lines))
