"""
Module 07 - CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m ballotproof_cli generate <source> [--column C] [--no-header] [--out-dir DIR]
                                       [--no-self-check] [--lenient-checksum] [--json]
    python -m ballotproof_cli proof <proofs.json> <address> [--json]
    python -m ballotproof_cli verify --root R (--address A | --leaf L)
                                     [--proof TEXT | --proofs FILE] [--json]
    python -m ballotproof_cli config --init|--show

Environment Variables:
    BALLOTPROOF_ENFORCE_CHECKSUM   Reject mixed-case addresses with a bad checksum (default: true)
    BALLOTPROOF_SELF_CHECK         Verify every proof before writing (default: true)
    BALLOTPROOF_ADDRESS_COLUMN     CSV column holding addresses (default: first column)
    BALLOTPROOF_OUT_DIR            Output directory for generate (default: .)
    BALLOTPROOF_LOG_LEVEL          Log level (default: INFO)
    BALLOTPROOF_LOG_FILE           Optional log file
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from ballotproof_cli import __version__
from ballotproof_cli.commands import generate, proof, verify
from ballotproof_cli.config import load_config, get_default_config_template


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="ballotproof",
        description="BallotProof CLI - Build ballot whitelists, look up and verify Merkle proofs.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to configuration file (default: ./ballotproof.json or ~/.config/ballotproof/config.json)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- generate command ---
    generate_parser = subparsers.add_parser(
        "generate",
        help="Build a whitelist root and per-address proofs",
        description="Read addresses, build the Merkle tree, and write proofs.json and merkle_root.json.",
    )
    generate_parser.add_argument(
        "source",
        type=str,
        help="CSV file (or one address per line with --no-header)",
    )
    generate_parser.add_argument(
        "--column",
        type=str,
        default=None,
        help="Address column: header name or 0-based index (default: first column)",
    )
    generate_parser.add_argument(
        "--no-header",
        action="store_true",
        default=False,
        help="Treat the first line as data, not a header",
    )
    generate_parser.add_argument(
        "--out-dir", "-o",
        type=str,
        default=None,
        help="Directory for proofs.json, merkle_root.json and addresses.json",
    )
    generate_parser.add_argument(
        "--no-self-check",
        action="store_true",
        default=False,
        help="Skip verifying every proof against the root before writing",
    )
    generate_parser.add_argument(
        "--lenient-checksum",
        action="store_true",
        default=False,
        help="Accept mixed-case addresses even if the EIP-55 checksum is wrong",
    )
    generate_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON summary",
    )
    generate_parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Print tracebacks on errors",
    )
    generate_parser.set_defaults(func=generate.generate_cmd)

    # --- proof command ---
    proof_parser = subparsers.add_parser(
        "proof",
        help="Look up an address in proofs.json",
        description="Find the leaf and proof for one address (case-insensitive).",
    )
    proof_parser.add_argument("proofs_file", type=str, help="Path to proofs.json")
    proof_parser.add_argument("address", type=str, help="Address to look up")
    proof_parser.add_argument("--json", action="store_true", help="JSON output")
    proof_parser.set_defaults(func=proof.proof_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Check a proof against a root offline",
        description="Recompute the root from a leaf and proof, exactly as the ballot registry does.",
    )
    verify_parser.add_argument(
        "--root",
        type=str,
        required=True,
        help="Whitelist root (0x-prefixed bytes32; all zeros = open voting)",
    )
    claim = verify_parser.add_mutually_exclusive_group(required=True)
    claim.add_argument("--address", type=str, help="Voter address (hashed into the leaf)")
    claim.add_argument("--leaf", type=str, help="Leaf digest (0x-prefixed bytes32)")
    source = verify_parser.add_mutually_exclusive_group()
    source.add_argument("--proof", type=str, help="Comma-separated proof digests")
    source.add_argument("--proofs", type=str, help="proofs.json to take the address's proof from")
    verify_parser.add_argument("--json", action="store_true", help="JSON output")
    verify_parser.set_defaults(func=verify.verify_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Manage CLI configuration",
        description="Initialize or display configuration.",
    )
    config_parser.add_argument(
        "--init",
        action="store_true",
        default=False,
        help="Create a template configuration file",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show current configuration",
    )
    config_parser.add_argument(
        "--path",
        type=str,
        default="ballotproof.json",
        help="Path for config file (default: ballotproof.json)",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path)
        if config_path.exists():
            print(f"Error: Config file already exists: {config_path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

        config_path.write_text(get_default_config_template())
        print(f"Created configuration file: {config_path}")
        print("\nEdit this file to configure your settings.")
        print("You can also use environment variables (BALLOTPROOF_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        config = args.cli_config
        config_dict = {
            "whitelist": {
                "enforce_checksum": config.enforce_checksum,
                "self_check": config.self_check,
                "address_column": config.address_column,
                "has_header": config.has_header,
            },
            "out_dir": config.out_dir,
            "log_level": config.log_level,
            "log_file": config.log_file,
        }
        print(json.dumps(config_dict, indent=2))
        return EXIT_SUCCESS

    print("Usage: ballotproof config [--init|--show]")
    print("  --init  Create a template configuration file")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=verification failed / not found)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    log_level = args.log_level or config.log_level
    setup_logging(level=log_level, log_file=config.log_file)

    # Attach config to args for commands to use
    args.cli_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if getattr(args, "debug", False):
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
