"""
Module 07 - CLI Generate Command

Build a whitelist from an address list:
- Read the address column from a CSV (or one-address-per-line) file
- Report invalid rows, continue with the valid ones
- Write proofs.json, merkle_root.json and addresses.json
- Self-check every proof against the root before writing

Usage:
    ballotproof generate voters.csv [--column address] [--out-dir ./out] [--json]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any

from core.schemas.errors import EmptyInputException
from core.schemas.proofs import WhitelistArtifact, save_proofs_file, save_root_file
from core.whitelist.csv_source import AddressSourceError, read_address_file
from core.whitelist.generator import generate_from_column


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2

PROOFS_FILE = "proofs.json"
ROOT_FILE = "merkle_root.json"
ADDRESSES_FILE = "addresses.json"


@dataclass
class GenerateSummary:
    """Summary of a generation run for CLI output."""
    source: str = ""
    root: str = ""
    valid_count: int = 0
    invalid_count: int = 0
    height: int = 0
    self_check_ok: bool | None = None
    files: list[str] = field(default_factory=list)
    invalid_rows: list[dict[str, Any]] = field(default_factory=list)
    duplicates: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        if self.self_check_ok is None:
            del d["self_check_ok"]
        if not d["duplicates"]:
            del d["duplicates"]
        return d


def write_artifact(artifact: WhitelistArtifact, out_dir: Path) -> list[Path]:
    """Write the three export files and return their paths."""
    out_dir.mkdir(parents=True, exist_ok=True)
    proofs_path = save_proofs_file(artifact.proofs_file(), out_dir / PROOFS_FILE)
    root_path = save_root_file(artifact.root_file(), out_dir / ROOT_FILE)
    addresses_path = out_dir / ADDRESSES_FILE
    addresses_path.write_text(json.dumps(artifact.addresses, indent=2) + "\n", encoding="utf-8")
    return [proofs_path, root_path, addresses_path]


def build_summary(source: str, artifact: WhitelistArtifact, files: list[Path]) -> GenerateSummary:
    return GenerateSummary(
        source=source,
        root=artifact.root,
        valid_count=len(artifact.addresses),
        invalid_count=len(artifact.invalid_rows),
        height=artifact.height,
        self_check_ok=artifact.self_check.ok if artifact.self_check else None,
        files=[str(p) for p in files],
        invalid_rows=[r.model_dump() for r in artifact.invalid_rows],
        duplicates=list(artifact.duplicates),
    )


def print_summary_human(summary: GenerateSummary) -> None:
    print(f"source: {summary.source}")
    print(f"root: {summary.root}")
    print(f"addresses: {summary.valid_count} valid, {summary.invalid_count} invalid")
    print(f"proof_length: {summary.height}")
    if summary.self_check_ok is not None:
        print(f"self_check_ok: {str(summary.self_check_ok).lower()}")

    if summary.invalid_rows:
        print(f"\ninvalid rows ({len(summary.invalid_rows)}):")
        for row in summary.invalid_rows[:10]:
            print(f"  ✗ row {row['row']}: {row['raw']!r} ({row['reason']})")

    if summary.duplicates:
        print(f"\nduplicated addresses ({len(summary.duplicates)}):")
        for address in summary.duplicates[:10]:
            print(f"  - {address}")

    if summary.files:
        print("\nwrote:")
        for path in summary.files:
            print(f"  {path}")


def generate_cmd(args: Namespace) -> int:
    """
    Execute the generate command.

    Returns:
        Exit code
    """
    config = args.cli_config
    source = Path(args.source)
    column = args.column if args.column is not None else config.address_column
    if args.no_header or not config.has_header:
        has_header: bool | None = False
    elif column is None:
        # Plain one-address-per-line files have no header
        has_header = None
    else:
        has_header = True
    enforce_checksum = config.enforce_checksum and not args.lenient_checksum
    self_check = config.self_check and not args.no_self_check
    out_dir = Path(args.out_dir or config.out_dir)

    if not source.exists():
        print(f"Error: Source not found: {source}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    try:
        address_column = read_address_file(source, column, has_header=has_header)
    except AddressSourceError as e:
        print(f"Error reading addresses: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    logger.info(f"Read {len(address_column.values)} rows from {source}")

    try:
        artifact = generate_from_column(
            address_column,
            enforce_checksum=enforce_checksum,
            self_check=self_check,
        )
    except EmptyInputException as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    if artifact.self_check is not None and not artifact.self_check.ok:
        # Never publish proofs that do not verify
        files: list[Path] = []
    else:
        files = write_artifact(artifact, out_dir)

    summary = build_summary(str(source), artifact, files)
    if args.json:
        print(json.dumps(summary.to_dict(), indent=2))
    else:
        print_summary_human(summary)

    if summary.self_check_ok is False:
        logger.error("Self-check failed; nothing written")
        return EXIT_VERIFICATION_FAILED
    return EXIT_SUCCESS
