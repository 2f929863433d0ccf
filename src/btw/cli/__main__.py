"""Entry point for running the CLI as a module."""

import argparse
import sys

from btw.configs.config import get_settings
from btw.configs.options import get_options
from btw.configs.system import LoggingConfig
from btw.infra.logging import setup_logging
from btw.tools.registry import get_tool_registry

from .commands import show_context, show_tools


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="btw",
        description="Inspect btw tools and project context",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Emit logs as JSON lines",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    tools = subparsers.add_parser("tools", help="List the available tools")
    tools.add_argument(
        "tokens",
        nargs="*",
        help="Tool names or groups to show (default: all)",
    )

    context = subparsers.add_parser(
        "context", help="Show the tools and project prompt of a new session"
    )
    context.add_argument(
        "--path",
        type=str,
        default=None,
        help="Path to a btw.md file (default: search from the working directory)",
    )
    context.add_argument(
        "--tools",
        type=str,
        default=None,
        help="Comma-separated tool names or groups, 'all' or 'none'",
    )

    return parser.parse_args(argv)


def cli_entry(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    args = parse_args(argv)

    logging_config = get_settings().logging
    if args.debug or args.json_logs:
        logging_config = LoggingConfig(
            level="DEBUG" if args.debug else logging_config.level,
            json_output=args.json_logs or logging_config.json_output,
        )
    setup_logging(logging_config)

    registry = get_tool_registry()
    if args.command == "tools":
        code = show_tools(registry, args.tokens)
    else:
        code = show_context(registry, get_options(), args.path, args.tools)
    sys.exit(code)


if __name__ == "__main__":
    cli_entry()
