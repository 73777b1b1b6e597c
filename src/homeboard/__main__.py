"""homeboard entry point.

Changes:
  - 2026-10-08: Added ``hash-pin`` for seeding PINs by hand.
  - 2026-10-03: ``serve`` runs the API with uvicorn; Rich console logging.
"""

import argparse
import logging
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version

from homeboard.config import get_settings
from homeboard.logging_setup import setup_logging

setup_logging(level="INFO")
logger = logging.getLogger(__name__)


def _version() -> str:
    try:
        return get_version("homeboard")
    except PackageNotFoundError:
        from homeboard import __version__

        return __version__


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="homeboard - household dashboard API",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  homeboard serve                    Start the API server
  homeboard serve --dev              Start with auto-reload (dev mode)
  homeboard hash-pin 1234            Print a stored-format hash for a PIN
""",
    )
    parser.add_argument(
        "command",
        choices=["serve", "hash-pin"],
        help="'serve' starts the API server, 'hash-pin' hashes a PIN",
    )
    parser.add_argument("pin", nargs="?", default=None, help="PIN to hash (hash-pin only)")
    parser.add_argument(
        "--host",
        type=str,
        default=None,
        help="Host to bind (default: HOMEBOARD_HOST or 127.0.0.1)",
    )
    parser.add_argument(
        "--port",
        "-p",
        type=int,
        default=None,
        help="Port to bind (default: HOMEBOARD_PORT or 8787)",
    )
    parser.add_argument(
        "--dev", action="store_true", help="Development mode with auto-reload"
    )
    parser.add_argument(
        "--version",
        "-v",
        action="version",
        version=f"%(prog)s {_version()}",
    )

    args = parser.parse_args(argv)

    if args.command == "hash-pin":
        if not args.pin:
            parser.error("hash-pin needs a PIN")
        from homeboard.security.pin import hash_pin

        print(hash_pin(args.pin))
        return

    settings = get_settings()
    host = args.host or settings.host
    port = args.port or settings.port

    try:
        from homeboard.api.serve import run_api_server

        run_api_server(host=host, port=port, dev=args.dev)
    except KeyboardInterrupt:
        logger.info("homeboard stopped.")


if __name__ == "__main__":
    main()
