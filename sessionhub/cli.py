#!/usr/bin/env python3
"""
Command-line interface for checking session configuration against a grid.
"""

import argparse
import logging
import sys
from typing import List, Optional

from dotenv import load_dotenv

from .config import SessionSettings, YamlConfigProvider
from .core.session.grid import DEFAULT_GRID_MARKER, derive_grid_url, is_grid_enabled
from .core.session.manager import SessionManager
from .errors import SessionHubError


def setup_logging(verbose: bool = False) -> None:
    """Set up logging configuration."""
    level = logging.DEBUG if verbose else logging.INFO

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)

    logging.basicConfig(
        level=level,
        handlers=[console_handler]
    )

    # Reduce noise from external libraries
    logging.getLogger('selenium').setLevel(logging.WARNING)
    logging.getLogger('urllib3').setLevel(logging.WARNING)
    logging.getLogger('playwright').setLevel(logging.WARNING)


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog='sessionhub',
        description='Browser session lifecycle tools',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Print the grid resource URL for a session
  sessionhub grid-url supergrid-east.example.com abc-123

  # Start and retire one session using sessionhub.yml / environment
  sessionhub smoke --config sessionhub.yml --browser firefox
        """
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable verbose logging'
    )

    subparsers = parser.add_subparsers(dest='command', required=True)

    grid = subparsers.add_parser('grid-url', help='Derive a grid resource URL')
    grid.add_argument('host', help='Grid hostname')
    grid.add_argument('session_id', help='Remote session identifier')
    grid.add_argument(
        '--marker',
        default=DEFAULT_GRID_MARKER,
        help=f'Substring that marks a grid-enabled host (default: {DEFAULT_GRID_MARKER})'
    )

    smoke = subparsers.add_parser('smoke', help='Start one session, report it, retire it')
    smoke.add_argument(
        '--config', '-c',
        default='sessionhub.yml',
        help='Configuration file (default: sessionhub.yml)'
    )
    smoke.add_argument(
        '--browser', '-b',
        help='Browser name capability (default: from configuration)'
    )
    smoke.add_argument(
        '--url',
        help='Optional page to open once the session is up'
    )

    return parser.parse_args(argv)


def print_settings(settings: SessionSettings) -> None:
    """Print current configuration."""
    print("📋 Configuration:")
    print(f"  Host: {settings.host or '(local engine)'}")
    print(f"  Grid enabled: {settings.grid_enabled}")
    print(f"  Implicit wait: {settings.implicit_wait}s")
    print(f"  Browser: {settings.browser_name}")
    print()


def run_grid_url(args: argparse.Namespace) -> int:
    url = derive_grid_url(args.host, args.session_id, is_grid_enabled(args.host, args.marker))
    if url is None:
        print(f"❌ {args.host} is not a grid-enabled host (marker '{args.marker}')")
        return 1
    print(url)
    return 0


def run_smoke(args: argparse.Namespace) -> int:
    provider = YamlConfigProvider(args.config)
    manager = SessionManager.from_config(provider)
    print_settings(manager.settings())

    capabilities = {'browserName': args.browser} if args.browser else {}
    try:
        with manager.session(capabilities) as driver:
            record = manager.current_session()
            print(f"✅ Session started: {record.session_id or 'local'}")
            if record.grid_url:
                print(f"🔗 Grid resources: {record.grid_url}")
            if args.url:
                driver.get(args.url)
                print(f"🧭 Opened: {driver.current_url}")
    finally:
        manager.shutdown()
    print("🧹 Session retired")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    args = parse_arguments(argv)
    setup_logging(args.verbose)

    try:
        if args.command == 'grid-url':
            return run_grid_url(args)
        return run_smoke(args)
    except SessionHubError as e:
        print(f"❌ {e}")
        return 1
    except KeyboardInterrupt:
        print("\n⏹️  Interrupted by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
