"""
Module 08 - Ballot Routes

Create ballots, vote with a whitelist proof, finalize, and read results.
All routes share one BallotRegistry provided by api.deps.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from api.deps import get_registry
from api.errors import APIError
from api.models.requests import CreateBallotRequest, RegistryAdminRequest, VoteRequest
from api.models.responses import (
    BallotInfo,
    BallotListResponse,
    CandidateResult,
    RegistryStatusResponse,
    ResultsResponse,
    VoteResponse,
)
from core.ballots import Ballot, BallotRegistry
from core.crypto.hashing import ZERO_DIGEST, parse_digest
from core.schemas.errors import WhitelistException
from core.whitelist.leaves import normalize_address


logger = logging.getLogger(__name__)

router = APIRouter(tags=["ballots"])


def _ballot_info(ballot: Ballot) -> BallotInfo:
    return BallotInfo(**ballot.to_dict())


@router.post("/ballots", response_model=BallotInfo, status_code=201)
async def create_ballot(
    request: CreateBallotRequest,
    registry: BallotRegistry = Depends(get_registry),
) -> BallotInfo:
    """Create a ballot. Omitting merkle_root makes it open to every address."""
    try:
        root = parse_digest(request.merkle_root) if request.merkle_root else ZERO_DIGEST
        ballot_id = registry.create_ballot(
            title=request.title,
            start=request.start,
            end=request.end,
            merkle_root=root,
            candidates=request.candidates,
            creator=request.creator,
        )
        return _ballot_info(registry.get_ballot(ballot_id))
    except WhitelistException as e:
        raise APIError.from_domain(e)


@router.get("/ballots", response_model=BallotListResponse)
async def list_ballots(
    registry: BallotRegistry = Depends(get_registry),
) -> BallotListResponse:
    ballots = registry.list_ballots()
    return BallotListResponse(
        count=len(ballots),
        ballots=[_ballot_info(b) for b in ballots],
    )


@router.get("/ballots/{ballot_id}", response_model=BallotInfo)
async def get_ballot(
    ballot_id: int,
    registry: BallotRegistry = Depends(get_registry),
) -> BallotInfo:
    try:
        return _ballot_info(registry.get_ballot(ballot_id))
    except WhitelistException as e:
        raise APIError.from_domain(e)


@router.post("/ballots/{ballot_id}/vote", response_model=VoteResponse)
async def vote(
    ballot_id: int,
    request: VoteRequest,
    registry: BallotRegistry = Depends(get_registry),
) -> VoteResponse:
    """
    Cast one vote.

    Errors map to HTTP statuses: 404 unknown ballot, 403 not eligible or
    paused, 409 already voted or finalized, 400 for everything else.
    """
    try:
        proof = [parse_digest(p) for p in request.proof]
        registry.vote(ballot_id, request.voter, request.candidate, proof)
        voter = normalize_address(request.voter)
    except WhitelistException as e:
        raise APIError.from_domain(e)

    return VoteResponse(
        ok=True,
        ballot_id=ballot_id,
        voter=voter,
        candidate=request.candidate,
    )


@router.post("/ballots/{ballot_id}/finalize", response_model=BallotInfo)
async def finalize_ballot(
    ballot_id: int,
    registry: BallotRegistry = Depends(get_registry),
) -> BallotInfo:
    try:
        registry.finalize_ballot(ballot_id)
        return _ballot_info(registry.get_ballot(ballot_id))
    except WhitelistException as e:
        raise APIError.from_domain(e)


@router.get("/ballots/{ballot_id}/results", response_model=ResultsResponse)
async def get_results(
    ballot_id: int,
    registry: BallotRegistry = Depends(get_registry),
) -> ResultsResponse:
    try:
        ballot = registry.get_ballot(ballot_id)
        counts = registry.get_results(ballot_id)
        winners, max_votes = registry.get_winners(ballot_id)
    except WhitelistException as e:
        raise APIError.from_domain(e)

    return ResultsResponse(
        ballot_id=ballot_id,
        finalized=ballot.finalized,
        results=[
            CandidateResult(candidate=name, votes=count)
            for name, count in zip(ballot.candidates, counts)
        ],
        winners=winners,
        max_votes=max_votes,
    )


@router.post("/registry/pause", response_model=RegistryStatusResponse)
async def pause(
    request: RegistryAdminRequest,
    registry: BallotRegistry = Depends(get_registry),
) -> RegistryStatusResponse:
    try:
        registry.pause(request.caller)
    except WhitelistException as e:
        raise APIError.from_domain(e)
    return RegistryStatusResponse(paused=registry.paused, ballot_count=registry.ballot_count())


@router.post("/registry/unpause", response_model=RegistryStatusResponse)
async def unpause(
    request: RegistryAdminRequest,
    registry: BallotRegistry = Depends(get_registry),
) -> RegistryStatusResponse:
    try:
        registry.unpause(request.caller)
    except WhitelistException as e:
        raise APIError.from_domain(e)
    return RegistryStatusResponse(paused=registry.paused, ballot_count=registry.ballot_count())
