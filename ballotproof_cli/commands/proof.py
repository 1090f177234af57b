"""
Module 07 - CLI Proof Lookup Command

Find one address in a proofs.json document.

Usage:
    ballotproof proof proofs.json 0xAbC... [--json]
"""

from __future__ import annotations

import json
import sys
from argparse import Namespace
from pathlib import Path

from pydantic import ValidationError

from core.schemas.errors import InvalidIdentifierException
from core.schemas.proofs import load_proofs_file
from core.whitelist.lookup import find_proof


EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_NOT_FOUND = 2


def proof_cmd(args: Namespace) -> int:
    """Execute the proof lookup command."""
    proofs_path = Path(args.proofs_file)
    if not proofs_path.exists():
        print(f"Error: Proofs file not found: {proofs_path}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    try:
        proofs = load_proofs_file(proofs_path)
    except (ValidationError, json.JSONDecodeError) as e:
        print(f"Error loading proofs: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    try:
        found = find_proof(
            proofs,
            args.address,
            enforce_checksum=args.cli_config.enforce_checksum,
        )
    except InvalidIdentifierException as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    if found is None:
        if args.json:
            print(json.dumps({"found": False, "address": args.address}, indent=2))
        else:
            print(f"No proof found for address {args.address}")
        return EXIT_NOT_FOUND

    if args.json:
        print(json.dumps({
            "found": True,
            "address": found.address,
            "leaf": found.entry.leaf,
            "proof": found.entry.proof,
        }, indent=2))
    else:
        print(f"address: {found.address}")
        print(f"leaf: {found.entry.leaf}")
        print(f"proof ({len(found.entry.proof)}):")
        for item in found.entry.proof:
            print(f"  {item}")
        print(f"\nproof_text: {','.join(found.entry.proof)}")

    return EXIT_SUCCESS
