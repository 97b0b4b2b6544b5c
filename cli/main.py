#!/usr/bin/env python3
"""
PitchSite CLI - Main Entry Point

Usage:
    pitchsite serve                      # Run the API server
    pitchsite cleanup                    # Delete expired pitch decks
    pitchsite generate form.json         # Print generated deck content
    pitchsite generate form.json --fallback
    pitchsite check                      # Validate configuration
    pitchsite --help                     # Show help
"""

import argparse
import sys
from pathlib import Path

# Add backend directory to path so `app` imports work from a source checkout
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI"""
    parser = argparse.ArgumentParser(
        prog="pitchsite",
        description="PitchSite - real estate investment pitch decks",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  pitchsite serve --port 3001 --reload     Start a development server
  pitchsite cleanup                        Remove expired decks (for cron)
  pitchsite generate deal.json             Generate content for a form
  pitchsite check --ping                   Validate config and database access
        """
    )

    parser.add_argument(
        "--version",
        action="version",
        version="%(prog)s 1.0.0"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show tracebacks on failure"
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the API server")
    serve_parser.add_argument("--host", default=None, help="Bind address (default: SERVER_HOST)")
    serve_parser.add_argument("--port", type=int, default=None, help="Port (default: SERVER_PORT)")
    serve_parser.add_argument("--reload", action="store_true", help="Reload on code changes")

    # Cleanup command
    subparsers.add_parser("cleanup", help="Delete expired pitch decks")

    # Generate command
    generate_parser = subparsers.add_parser("generate", help="Generate deck content from a form JSON file")
    generate_parser.add_argument("file", help="Path to a JSON file with the investment form")
    generate_parser.add_argument(
        "--fallback",
        action="store_true",
        help="Use deterministic template content instead of the AI service"
    )

    # Check command
    check_parser = subparsers.add_parser("check", help="Validate configuration")
    check_parser.add_argument("--ping", action="store_true", help="Also ping the database")

    return parser


def main(argv=None):
    """Main entry point"""
    parser = create_parser()
    args = parser.parse_args(argv)

    from rich.console import Console
    from cli import commands

    console = Console()

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    handlers = {
        "serve": lambda: commands.serve(args.host, args.port, args.reload),
        "cleanup": lambda: commands.cleanup(console),
        "generate": lambda: commands.generate(console, args.file, args.fallback),
        "check": lambda: commands.check(console, ping=args.ping),
    }

    try:
        exit_code = handlers[args.command]()
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted[/yellow]")
        sys.exit(130)
    except Exception as e:
        if args.verbose:
            console.print_exception()
        else:
            console.print(f"[red]✗ Error:[/red] {e}")
        sys.exit(1)

    sys.exit(exit_code or 0)


if __name__ == "__main__":
    main()
