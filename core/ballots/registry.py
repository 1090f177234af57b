"""
Module 05 - Ballot Registry
In-process model of the ballot contract: ballots keyed by id, votes,
finalization, pausing, and the whitelist membership check at vote time.

Vote checks run in this order (first failure wins):
1. Contract paused            -> ContractPausedException
2. Unknown ballot id          -> BallotNotFoundException
3. Ballot finalized           -> BallotFinalizedException
4. Outside [start, end]       -> VotingClosedException
5. Unknown candidate          -> InvalidCandidateException
6. Voter already voted        -> AlreadyVotedException
7. Whitelist proof rejected   -> NotEligibleException

A ballot whose root is all zeros has no whitelist: step 7 is skipped.
"""
from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Sequence

from core.crypto.hashing import DIGEST_SIZE, ZERO_DIGEST, is_zero_digest, to_hex
from core.merkle.merkle_tree import verify_merkle_proof
from core.schemas.errors import (
    AlreadyVotedException,
    BallotFinalizedException,
    BallotNotEndedException,
    BallotNotFoundException,
    ContractPausedException,
    InvalidBallotException,
    InvalidCandidateException,
    NotEligibleException,
    NotOwnerException,
    VotingClosedException,
)
from core.whitelist.leaves import hash_leaf, normalize_address


logger = logging.getLogger(__name__)


def _now() -> int:
    return int(time.time())


@dataclass
class Ballot:
    """Stored ballot record."""
    ballot_id: int
    title: str
    start: int
    end: int
    merkle_root: bytes
    candidates: list[str]
    creator: str | None = None
    votes: list[int] = field(default_factory=list)
    voters: set[str] = field(default_factory=set)
    finalized: bool = False

    def __post_init__(self) -> None:
        if not self.votes:
            self.votes = [0] * len(self.candidates)

    @property
    def whitelisted(self) -> bool:
        return not is_zero_digest(self.merkle_root)

    @property
    def total_votes(self) -> int:
        return sum(self.votes)

    def is_open(self, now: int) -> bool:
        return self.start <= now <= self.end and not self.finalized

    def to_dict(self) -> dict[str, Any]:
        return {
            "ballot_id": self.ballot_id,
            "title": self.title,
            "start": self.start,
            "end": self.end,
            "merkle_root": to_hex(self.merkle_root),
            "whitelisted": self.whitelisted,
            "candidates": list(self.candidates),
            "creator": self.creator,
            "total_votes": self.total_votes,
            "finalized": self.finalized,
        }


class BallotRegistry:
    """
    Repository of ballots keyed by sequential id (starting at 0).

    Mutations are serialized with a lock so a single registry can back
    concurrent API requests.

    Args:
        owner: Address allowed to pause/unpause
        clock: Returns the current unix time in seconds
    """

    def __init__(
        self,
        owner: str | None = None,
        clock: Callable[[], int] | None = None,
    ) -> None:
        self.owner = normalize_address(owner) if owner else None
        self._clock = clock or _now
        self._ballots: list[Ballot] = []
        self._paused = False
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # Admin
    # ------------------------------------------------------------------

    @property
    def paused(self) -> bool:
        return self._paused

    def _require_owner(self, caller: str) -> None:
        if self.owner is None or normalize_address(caller) != self.owner:
            raise NotOwnerException(caller)

    def pause(self, caller: str) -> None:
        with self._lock:
            self._require_owner(caller)
            self._paused = True
            logger.info("Registry paused")

    def unpause(self, caller: str) -> None:
        with self._lock:
            self._require_owner(caller)
            self._paused = False
            logger.info("Registry unpaused")

    def _require_not_paused(self) -> None:
        if self._paused:
            raise ContractPausedException()

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def _get(self, ballot_id: int) -> Ballot:
        if ballot_id < 0 or ballot_id >= len(self._ballots):
            raise BallotNotFoundException(ballot_id)
        return self._ballots[ballot_id]

    def get_ballot(self, ballot_id: int) -> Ballot:
        return self._get(ballot_id)

    def get_root(self, ballot_id: int) -> bytes:
        """Stored whitelist root for a ballot (ZERO_DIGEST = open voting)."""
        return self._get(ballot_id).merkle_root

    def ballot_count(self) -> int:
        return len(self._ballots)

    def list_ballots(self) -> list[Ballot]:
        return list(self._ballots)

    def has_voted(self, ballot_id: int, voter: str) -> bool:
        return normalize_address(voter) in self._get(ballot_id).voters

    def get_results(self, ballot_id: int) -> list[int]:
        """Vote counts in candidate order."""
        return list(self._get(ballot_id).votes)

    def get_winners(self, ballot_id: int) -> tuple[list[str], int]:
        """
        Candidates with the highest count, and that count.

        Ties return every top candidate.
        """
        ballot = self._get(ballot_id)
        max_votes = max(ballot.votes) if ballot.votes else 0
        winners = [
            name for name, count in zip(ballot.candidates, ballot.votes)
            if count == max_votes
        ]
        return winners, max_votes

    def is_eligible(self, ballot_id: int, voter: str, proof: Sequence[bytes]) -> bool:
        """
        Whitelist membership check for a voter.

        Zero root: always True, the proof is ignored.
        Otherwise the voter's leaf is verified against the stored root.
        """
        root = self.get_root(ballot_id)
        if is_zero_digest(root):
            return True
        leaf = hash_leaf(voter)
        return verify_merkle_proof(leaf, proof, root)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def create_ballot(
        self,
        title: str,
        start: int,
        end: int,
        merkle_root: bytes = ZERO_DIGEST,
        candidates: Sequence[str] = (),
        creator: str | None = None,
    ) -> int:
        """
        Create a ballot and return its id.

        Raises:
            ContractPausedException: If the registry is paused
            InvalidBallotException: On bad title, times, candidates or root
        """
        with self._lock:
            self._require_not_paused()

            if not title or not title.strip():
                raise InvalidBallotException("Title required")
            if end <= start:
                raise InvalidBallotException("End must be after start")
            if len(merkle_root) != DIGEST_SIZE:
                raise InvalidBallotException(
                    f"Merkle root must be {DIGEST_SIZE} bytes, got {len(merkle_root)}"
                )
            names = [c.strip() for c in candidates]
            if not names:
                raise InvalidBallotException("At least one candidate required")
            if any(not n for n in names):
                raise InvalidBallotException("Candidate names must be non-empty")
            if len(set(names)) != len(names):
                raise InvalidBallotException("Candidate names must be unique")

            ballot = Ballot(
                ballot_id=len(self._ballots),
                title=title.strip(),
                start=int(start),
                end=int(end),
                merkle_root=bytes(merkle_root),
                candidates=names,
                creator=normalize_address(creator) if creator else None,
            )
            self._ballots.append(ballot)
            logger.info(
                f"Created ballot {ballot.ballot_id} '{ballot.title}' "
                f"({len(names)} candidates, whitelisted={ballot.whitelisted})"
            )
            return ballot.ballot_id

    def vote(
        self,
        ballot_id: int,
        voter: str,
        candidate: str,
        proof: Sequence[bytes] = (),
    ) -> None:
        """
        Record one vote.

        Raises:
            See the module docstring for the ordered list of failures.
            InvalidIdentifierException: If voter is not a valid address
        """
        with self._lock:
            self._require_not_paused()
            ballot = self._get(ballot_id)

            if ballot.finalized:
                raise BallotFinalizedException(ballot_id)

            now = self._clock()
            if now < ballot.start:
                raise VotingClosedException("Voting has not started")
            if now > ballot.end:
                raise VotingClosedException("Voting has ended")

            try:
                candidate_index = ballot.candidates.index(candidate)
            except ValueError:
                raise InvalidCandidateException(candidate) from None

            normalized = normalize_address(voter)
            if normalized in ballot.voters:
                raise AlreadyVotedException(normalized)

            if not self.is_eligible(ballot_id, normalized, proof):
                logger.info(f"Rejected vote on ballot {ballot_id}: {normalized} not eligible")
                raise NotEligibleException(normalized)

            ballot.voters.add(normalized)
            ballot.votes[candidate_index] += 1
            logger.debug(f"Vote recorded on ballot {ballot_id} for '{candidate}'")

    def finalize_ballot(self, ballot_id: int) -> None:
        """
        Close a ballot. Anyone may call once its end time has passed.

        Raises:
            BallotNotEndedException: If called at or before end
            BallotFinalizedException: If already finalized
        """
        with self._lock:
            self._require_not_paused()
            ballot = self._get(ballot_id)
            if ballot.finalized:
                raise BallotFinalizedException(ballot_id)
            if self._clock() <= ballot.end:
                raise BallotNotEndedException(ballot_id)
            ballot.finalized = True
            logger.info(f"Finalized ballot {ballot_id}: results={ballot.votes}")


__all__ = ["Ballot", "BallotRegistry"]
