"""
CLI command modules.
"""

from ballotproof_cli.commands import generate, proof, verify

__all__ = ["generate", "proof", "verify"]
