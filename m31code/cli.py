"""
m31code — Entry Point
Command-line host for model selection, code suggestions and chat.
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

from m31code import __version__
from m31code.config.settings import build_registry, load_config, load_descriptors
from m31code.core.ai_service import AIService
from m31code.core.chat_session import ChatSession
from m31code.core.errors import M31CodeError, UnknownModelError
from m31code.core.model_manager import ModelRegistry

logger = logging.getLogger(__name__)

EXIT_COMMANDS = {"exit", "quit"}


# =====================================================================
#  BOOTSTRAP
# =====================================================================

async def _bootstrap(args: argparse.Namespace) -> Optional[AIService]:
    """Load config, build every configured model and apply ``--model``."""
    config_path = Path(args.config) if args.config else None
    try:
        config = load_config(config_path)
        registry = build_registry(config)
        await registry.initialize(load_descriptors(config))
    except (ValueError, M31CodeError) as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return None

    if args.model:
        try:
            registry.switch_active(args.model)
        except UnknownModelError:
            print("Failed to switch model", file=sys.stderr)
            return None
        print(f"Switched to {args.model} model", file=sys.stderr)

    return AIService(registry)


# =====================================================================
#  COMMANDS
# =====================================================================

def _format_models(registry: ModelRegistry) -> str:
    lines = []
    for name in registry.list_available():
        marker = "*" if name == registry.active_name else " "
        status = "" if registry.is_initialized(name) else " (not initialized)"
        lines.append(f"{marker} {name}{status}")
    return "\n".join(lines)


async def cmd_models(args: argparse.Namespace) -> int:
    """List declared models, marking the active one."""
    service = await _bootstrap(args)
    if service is None:
        return 1
    print(_format_models(service.registry))
    return 0


async def cmd_suggest(args: argparse.Namespace) -> int:
    """Print a suggestion for code read from a file or stdin."""
    service = await _bootstrap(args)
    if service is None:
        return 1

    if args.file:
        try:
            code = Path(args.file).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            print(f"Cannot read {args.file}: {e}", file=sys.stderr)
            return 1
    else:
        code = sys.stdin.read()

    try:
        suggestion = await service.get_suggestion(code)
    except M31CodeError:
        print("Error getting suggestion", file=sys.stderr)
        return 1
    print(suggestion)
    return 0


async def cmd_chat(args: argparse.Namespace) -> int:
    """One-shot chat, or an interactive loop when no message is given."""
    service = await _bootstrap(args)
    if service is None:
        return 1
    session = ChatSession(service)

    if args.message:
        reply = await session.send(" ".join(args.message))
        print(reply.content, file=sys.stderr if reply.type == "error" else sys.stdout)
        return 1 if reply.type == "error" else 0

    while True:
        try:
            text = input("you> ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            break
        if not text:
            continue
        if text.lower() in EXIT_COMMANDS:
            break
        reply = await session.send(text)
        prefix = "error" if reply.type == "error" else service.registry.active_name
        print(f"{prefix}> {reply.content}")
    return 0


# =====================================================================
#  CLI ENTRY WITH SUBCOMMANDS
# =====================================================================

def _create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog="m31code",
        description="m31code — route code suggestions and chat to a selectable model",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  m31code models                   # List declared models
  m31code suggest app.py           # Suggest an improvement for a file
  m31code --model codellama chat   # Interactive chat with codellama
        """
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"m31code {__version__}"
    )
    parser.add_argument(
        "--config",
        type=str,
        help="Path to config.json (default: ~/.m31code/config.json)"
    )
    parser.add_argument(
        "--model",
        type=str,
        help="Switch to this model before running the command"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging"
    )

    subparsers = parser.add_subparsers(
        dest="command",
        help="Available commands"
    )

    subparsers.add_parser(
        "models",
        help="List available models"
    )

    parser_suggest = subparsers.add_parser(
        "suggest",
        help="Get a suggestion for a code snippet"
    )
    parser_suggest.add_argument(
        "file",
        nargs="?",
        help="File to read code from (default: stdin)"
    )

    parser_chat = subparsers.add_parser(
        "chat",
        help="Chat with the active model"
    )
    parser_chat.add_argument(
        "message",
        nargs="*",
        help="Message to send (omit for interactive mode)"
    )

    return parser


def main(argv=None) -> int:
    """Main entry point with subcommand routing."""
    parser = _create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "models":
        return asyncio.run(cmd_models(args))
    elif args.command == "suggest":
        return asyncio.run(cmd_suggest(args))
    elif args.command == "chat":
        return asyncio.run(cmd_chat(args))
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main() or 0)
