"""
Module 05 - Ballots

Ballot bookkeeping with whitelist-gated voting.
"""
from .registry import Ballot, BallotRegistry

__all__ = ["Ballot", "BallotRegistry"]
