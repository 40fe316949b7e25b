"""
Command-line interface for Remitano Python SDK
Sends signed requests to the Remitano API or prints them without sending
"""

import argparse
import json
import logging
import sys
from typing import Any, Dict, List, Optional

from . import __version__
from .config import (
    DEFAULT_API_URL,
    ENV_API_KEY,
    ENV_API_SECRET,
    ENV_API_URL,
    ENV_TIMEOUT_MS,
    ClientConfig,
)
from .exceptions import RemitanoSDKError
from .http_client import RemitanoClient
from .signing.types import HttpMethod


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog='remitano-cli',
        description='Remitano SDK command-line interface for signed API requests'
    )
    
    parser.add_argument(
        '--version',
        action='version',
        version=f'Remitano Python SDK {__version__}'
    )
    
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable debug logging'
    )
    
    subparsers = parser.add_subparsers(dest='command', help='Available commands')
    
    setup_request_parser(subparsers)
    
    return parser


def setup_request_parser(subparsers):
    """Setup request subcommand."""
    request_parser = subparsers.add_parser('request', help='Send a signed API request')
    request_parser.add_argument(
        'method',
        type=str.upper,
        choices=[m.value for m in HttpMethod],
        help='HTTP method'
    )
    request_parser.add_argument(
        'endpoint',
        help='Endpoint path below api/v1/, e.g. users/me'
    )
    request_parser.add_argument(
        '--param', '-p',
        action='append',
        default=[],
        metavar='KEY=VALUE',
        help='Query parameter (repeatable)'
    )
    request_parser.add_argument(
        '--body', '-d',
        help='JSON request body'
    )
    request_parser.add_argument(
        '--key',
        help=f'API key (default: ${ENV_API_KEY})'
    )
    request_parser.add_argument(
        '--secret',
        help=f'API secret (default: ${ENV_API_SECRET})'
    )
    request_parser.add_argument(
        '--api-url',
        help=f'API origin (default: ${ENV_API_URL} or {DEFAULT_API_URL})'
    )
    request_parser.add_argument(
        '--timeout-ms',
        type=int,
        help=f'Request timeout in milliseconds (default: ${ENV_TIMEOUT_MS} or 3000)'
    )
    request_parser.add_argument(
        '--dry-run',
        action='store_true',
        help='Print the signed request instead of sending it'
    )
    request_parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        default=argparse.SUPPRESS,
        help='Enable debug logging'
    )


def parse_params(raw_params: List[str]) -> Optional[Dict[str, str]]:
    """Parse KEY=VALUE pairs into a params mapping (None when there are none)."""
    if not raw_params:
        return None
    
    params = {}
    for item in raw_params:
        key, sep, value = item.partition('=')
        if not sep or not key:
            raise ValueError(f"Invalid parameter '{item}', expected KEY=VALUE")
        params[key] = value
    return params


def load_config(args) -> ClientConfig:
    """Build configuration from arguments, falling back to the environment."""
    return ClientConfig.from_env(
        key=args.key,
        secret=args.secret,
        api_url=args.api_url,
        timeout_ms=args.timeout_ms,
    )


def handle_request_command(args) -> int:
    """Handle the request subcommand."""
    try:
        params = parse_params(args.param)
        body: Any = json.loads(args.body) if args.body is not None else None
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    
    config = load_config(args)
    
    with RemitanoClient(config) as client:
        if args.dry_run:
            signed = client.prepare(args.method, args.endpoint, params=params, body=body)
            print(json.dumps({
                'method': signed.method,
                'url': signed.url,
                'headers': signed.headers,
                'canonical_string': signed.canonical_string,
                'body': signed.body.decode('utf-8'),
            }, indent=2))
            return 0
        
        result = client.request(args.method, args.endpoint, params=params, body=body)
    
    print(json.dumps(result, indent=2))
    return 0


def main(argv: Optional[list] = None) -> int:
    """
    Main entry point for the CLI
    
    Args:
        argv: Command line arguments (None to use sys.argv)
        
    Returns:
        int: Exit code (0 for success, non-zero for failure)
    """
    if argv is None:
        argv = sys.argv[1:]
    
    parser = create_parser()
    args = parser.parse_args(argv)
    
    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format='%(asctime)s %(levelname)s %(name)s: %(message)s'
        )
    
    try:
        if args.command == 'request':
            return handle_request_command(args)
        else:
            # No command specified, show help
            parser.print_help()
            return 1
        
    except KeyboardInterrupt:
        print("\nOperation cancelled by user", file=sys.stderr)
        return 130
    except RemitanoSDKError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
