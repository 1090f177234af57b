"""
Module 08 - Whitelist Routes

Build a whitelist from an address list, and check a proof against a root.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter

from api.errors import APIError, SelfCheckFailedError
from api.models.requests import GenerateRequest, VerifyProofRequest
from api.models.responses import GenerateResponse, SelfCheckInfo, VerifyProofResponse
from core.crypto.hashing import is_zero_digest, parse_digest, to_hex
from core.merkle.merkle_tree import verify_merkle_proof
from core.schemas.errors import WhitelistException
from core.schemas.verification import VerificationResult
from core.whitelist.generator import generate_whitelist
from core.whitelist.leaves import hash_leaf


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/whitelist", tags=["whitelist"])


def _self_check_info(result: VerificationResult) -> SelfCheckInfo:
    return SelfCheckInfo(
        ok=result.ok,
        total_checks=len(result.checks),
        passed_checks=result.passed_count,
        failed_checks=result.error_count,
        errors=result.error_messages,
        warnings=result.warnings,
        challenge=result.challenge.model_dump() if result.challenge else None,
    )


@router.post("/generate", response_model=GenerateResponse)
async def generate(request: GenerateRequest) -> GenerateResponse:
    """
    Build the root and per-address proofs for a list of addresses.

    Invalid values are reported in invalid_rows (numbered from 1) and left
    out of the tree. Fails with EMPTY_INPUT if nothing valid remains.
    """
    try:
        artifact = generate_whitelist(
            request.addresses,
            enforce_checksum=request.enforce_checksum,
            self_check=request.self_check,
        )
    except WhitelistException as e:
        raise APIError.from_domain(e)

    check_info = _self_check_info(artifact.self_check) if artifact.self_check else None
    if check_info is not None and not check_info.ok:
        raise SelfCheckFailedError(
            "Generated proofs do not reconstruct the root",
            details=check_info.model_dump(),
        )

    return GenerateResponse(
        ok=True,
        root=artifact.root,
        leaf_count=len(artifact.addresses),
        height=artifact.height,
        proofs=artifact.proofs,
        entries=artifact.entries if request.include_entries else None,
        invalid_rows=artifact.invalid_rows,
        duplicates=artifact.duplicates,
        self_check=check_info,
    )


@router.post("/verify", response_model=VerifyProofResponse)
async def verify(request: VerifyProofRequest) -> VerifyProofResponse:
    """
    Check a leaf (or an address's leaf) and proof against a root.

    A rejected proof is a normal 200 response with accepted=false; only
    malformed input is an error.
    """
    try:
        root = parse_digest(request.root)
        if request.leaf is not None:
            leaf = parse_digest(request.leaf)
        else:
            leaf = hash_leaf(request.address.strip())
        proof = [parse_digest(p) for p in request.proof]
    except WhitelistException as e:
        raise APIError.from_domain(e)

    if is_zero_digest(root):
        return VerifyProofResponse(
            accepted=True,
            whitelist_enabled=False,
            root=to_hex(root),
            leaf=to_hex(leaf),
            proof_length=len(proof),
        )

    accepted = verify_merkle_proof(leaf, proof, root)
    if not accepted:
        logger.info(f"Proof rejected for leaf {to_hex(leaf)}")
    return VerifyProofResponse(
        accepted=accepted,
        root=to_hex(root),
        leaf=to_hex(leaf),
        proof_length=len(proof),
    )
