"""
Module 07 - CLI Verify Command

Offline membership check, identical to the one the ballot registry runs:
- A zero root means open voting: accepted without looking at the proof
- Otherwise the proof must rebuild the root from the voter's leaf

Usage:
    ballotproof verify --root 0x... --address 0x... --proof "0x..,0x.."
    ballotproof verify --root 0x... --address 0x... --proofs proofs.json
    ballotproof verify --root 0x... --leaf 0x... --proof "0x..,0x.."
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from core.crypto.hashing import is_zero_digest, parse_digest, to_hex
from core.merkle.merkle_tree import verify_merkle_proof
from core.schemas.errors import InvalidDigestException, InvalidIdentifierException
from core.schemas.proofs import load_proofs_file, parse_proof_text
from core.whitelist.leaves import hash_leaf
from core.whitelist.lookup import find_proof


logger = logging.getLogger(__name__)


EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


@dataclass
class VerifySummary:
    root: str = ""
    leaf: str = ""
    address: str | None = None
    proof_length: int = 0
    whitelist_enabled: bool = True
    accepted: bool = False

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        if d["address"] is None:
            del d["address"]
        return d


def _resolve_proof(args: Namespace, enforce_checksum: bool) -> list[bytes]:
    if args.proofs:
        proofs = load_proofs_file(Path(args.proofs))
        if not args.address:
            raise ValueError("--proofs requires --address")
        found = find_proof(proofs, args.address, enforce_checksum=enforce_checksum)
        if found is None:
            logger.info(f"No entry for {args.address} in {args.proofs}")
            return []
        return found.entry.proof_bytes()
    return parse_proof_text(args.proof or "")


def verify_cmd(args: Namespace) -> int:
    """
    Execute the verify command.

    Returns:
        0 if accepted, 2 if rejected, 1 on bad input
    """
    enforce_checksum = args.cli_config.enforce_checksum

    try:
        root = parse_digest(args.root)
        if args.leaf:
            leaf = parse_digest(args.leaf)
        else:
            leaf = hash_leaf(args.address.strip(), enforce_checksum=enforce_checksum)
        proof = _resolve_proof(args, enforce_checksum)
    except (InvalidDigestException, InvalidIdentifierException) as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except (ValueError, ValidationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    summary = VerifySummary(
        root=to_hex(root),
        leaf=to_hex(leaf),
        address=args.address,
        proof_length=len(proof),
    )

    if is_zero_digest(root):
        summary.whitelist_enabled = False
        summary.accepted = True
    else:
        summary.accepted = verify_merkle_proof(leaf, proof, root)

    if args.json:
        print(json.dumps(summary.to_dict(), indent=2))
    else:
        if summary.address:
            print(f"address: {summary.address}")
        print(f"leaf: {summary.leaf}")
        print(f"root: {summary.root}")
        print(f"proof_length: {summary.proof_length}")
        if not summary.whitelist_enabled:
            print("whitelist: disabled (zero root)")
        print(f"accepted: {str(summary.accepted).lower()}")

    if summary.accepted:
        return EXIT_SUCCESS
    logger.info("Proof rejected: not eligible")
    return EXIT_VERIFICATION_FAILED
