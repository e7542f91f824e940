#!/usr/bin/env python
"""
Command-line interface for Pali Reader
"""

import argparse
import os
import sys
from pathlib import Path

from palireader.version_info import __version__, __build_timestamp__, __build_type__, __description__

def print_version():
    """Print version information."""
    print(f"Pali Reader v{__version__}")
    print(__description__)
    print(f"Build: {__build_timestamp__}")
    print(f"Build Type: {__build_type__}")


def start_server(args):
    """Start the Flask server."""
    # Environment must be set before the app module loads its config
    if args.config:
        os.environ['PALIREADER_CONFIG'] = str(Path(args.config).resolve())
    if args.library:
        os.environ['PALIREADER_LIBRARY'] = str(Path(args.library).resolve())

    from palireader.core.logging_config import setup_logging
    setup_logging(Path(args.log_dir), args.debug)

    from palireader.app import app

    host = args.host or app.config['HOST']
    port = args.port or app.config['PORT']

    print(f"Starting Pali Reader v{__version__}")
    print(f"Library: {app.config['LIBRARY_DIR']}")
    print(f"Server: http://{host}:{port}")
    print("Press Ctrl+C to stop")
    print()

    app.run(host=host, port=port, debug=args.debug)


def build_parser():
    parser = argparse.ArgumentParser(
        description=f'Pali Reader v{__version__}',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  palireader --version                Show version information
  palireader start                    Start server on 0.0.0.0:8000
  palireader --port 8080              Start server on port 8080
  palireader --library ./2_pali       Serve texts from ./2_pali
        """
    )

    parser.add_argument(
        '--version', '-v',
        action='store_true',
        help='Show version information'
    )
    parser.add_argument(
        '--host',
        type=str,
        default=None,
        help='Host to bind to (default: from config, 0.0.0.0)'
    )
    parser.add_argument(
        '--port', '-p',
        type=int,
        default=None,
        help='Port to bind to (default: from config, 8000)'
    )
    parser.add_argument(
        '--debug', '-d',
        action='store_true',
        help='Run in debug mode'
    )
    parser.add_argument(
        '--library', '-l',
        type=str,
        default=None,
        help='Folder containing the Pali .htm texts'
    )
    parser.add_argument(
        '--config', '-c',
        type=str,
        default=None,
        help='Path to a config.json file'
    )
    parser.add_argument(
        '--log-dir',
        type=str,
        default='logs',
        help='Folder for log files (default: ./logs)'
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')
    subparsers.add_parser('start', help='Start the reader server')
    return parser


def main(argv=None):
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    if args.version:
        print_version()
        return 0

    if args.command == 'start' or args.command is None:
        try:
            start_server(args)
            return 0
        except KeyboardInterrupt:
            print("\nServer stopped.")
            return 0
        except Exception as e:
            if args.debug:
                import traceback
                traceback.print_exc()
            print(f"Error starting server: {e}", file=sys.stderr)
            return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
