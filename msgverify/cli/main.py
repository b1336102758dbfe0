"""
CLI entry point for msgverify.

Parses command-line arguments and dispatches to the appropriate command handler.
"""

import sys
import argparse

from msgverify.bitcoin.config import Config, NETWORKS
from msgverify.cli.commands import (
    EXIT_ERROR,
    cmd_address,
    cmd_pubkey,
    cmd_inspect,
    cmd_derive,
)
from msgverify.log import configure_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='msgverify',
        description="BIP-0137 Bitcoin signed message verifier",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s address 1A1z... "Hello" IOeVH...=     Verify against an address
  %(prog)s pubkey 036cb4... "Hello" IOeVH...=    Verify against a public key
  %(prog)s inspect IOeVH...=                     Decode the header byte
  %(prog)s derive 036cb4...                      Show addresses for a key
  %(prog)s --testnet address tb1q... "Hi" KD...= Verify on testnet
        """
    )

    parser.add_argument('--network', choices=sorted(NETWORKS), help='Network (default: mainnet)')
    parser.add_argument('--testnet', action='store_true', help='Shortcut for --network testnet')
    parser.add_argument('--timeout', type=float, help='Seconds to wait for a verdict (0 = no limit)')
    parser.add_argument('--config', type=str, help='Path to config.json')
    parser.add_argument('-v', '--verbose', action='store_true', help='Debug logging')
    parser.add_argument('--trace', action='store_true', help='Trace logging (most detailed)')

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    addr_parser = subparsers.add_parser('address', help='Verify a signed message against an address')
    addr_parser.add_argument('address', help='Bitcoin address that allegedly signed')
    addr_parser.add_argument('message', help='Signed message text')
    addr_parser.add_argument('signature', help='Base64 signature')

    pub_parser = subparsers.add_parser('pubkey', help='Verify a signed message against a public key')
    pub_parser.add_argument('pubkey', help='Public key (hex, 33 or 65 bytes)')
    pub_parser.add_argument('message', help='Signed message text')
    pub_parser.add_argument('signature', help='Base64 signature')

    inspect_parser = subparsers.add_parser('inspect', help='Decode a signature header')
    inspect_parser.add_argument('signature', help='Base64 signature')
    inspect_parser.add_argument('--hex', action='store_true', help='Dump raw signature bytes')

    derive_parser = subparsers.add_parser('derive', help='Derive addresses from a public key')
    derive_parser.add_argument('pubkey', help='Public key (hex, 33 or 65 bytes)')

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        Config.load_saved_settings(args.config)
        Config.load_environment()
        if args.network:
            Config.NETWORK = args.network
        if args.testnet:
            Config.NETWORK = "testnet"
        level = "TRACE" if args.trace else "DEBUG" if args.verbose else Config.LOG_LEVEL
        configure_logging(level)
    except (ValueError, TypeError) as e:
        print(f"[FAIL] Configuration error: {e}")
        return EXIT_ERROR

    commands = {
        'address': cmd_address,
        'pubkey': cmd_pubkey,
        'inspect': cmd_inspect,
        'derive': cmd_derive,
    }

    if args.command in commands:
        return commands[args.command](args)
    parser.print_help()
    return EXIT_ERROR


if __name__ == '__main__':
    sys.exit(main())
