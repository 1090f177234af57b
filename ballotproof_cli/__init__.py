"""
Module 07 - BallotProof CLI

Command-line interface for ballot whitelists.

Usage:
    python -m ballotproof_cli generate voters.csv --out-dir ./whitelist
    python -m ballotproof_cli proof ./whitelist/proofs.json 0xAbC...
    python -m ballotproof_cli verify --root 0x... --address 0x... --proof "0x..,0x.."
    python -m ballotproof_cli config --init
"""

__version__ = "0.1.0"
