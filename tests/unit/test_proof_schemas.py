"""
Module 01 - Proof Schema Tests
Tests for core/schemas/proofs.py: transport models and file I/O.
"""
import json

import pytest
from pydantic import ValidationError

from core.crypto.hashing import keccak256, to_hex
from core.schemas.errors import InvalidDigestException
from core.schemas.proofs import (
    ProofEntry,
    ProofsFile,
    RootFile,
    format_proof_text,
    parse_proof_text,
    load_proofs_file,
    save_proofs_file,
    load_root_file,
    save_root_file,
)
from core.whitelist.generator import generate_whitelist

from fixtures import ADDR_1, make_addresses


DIGEST_A = keccak256(b"a")
DIGEST_B = keccak256(b"b")


class TestProofText:
    def test_blank_is_empty_proof(self):
        assert parse_proof_text("") == []
        assert parse_proof_text("   ") == []

    def test_comma_separated(self):
        text = f"{to_hex(DIGEST_A)}, {to_hex(DIGEST_B)}"
        assert parse_proof_text(text) == [DIGEST_A, DIGEST_B]

    def test_trailing_comma_ignored(self):
        assert parse_proof_text(to_hex(DIGEST_A) + ",") == [DIGEST_A]

    def test_malformed_entry(self):
        with pytest.raises(InvalidDigestException):
            parse_proof_text(to_hex(DIGEST_A) + ",0x1234")

    def test_format_inverse(self):
        proof = [DIGEST_A, DIGEST_B]
        assert parse_proof_text(format_proof_text(proof)) == proof


class TestProofEntry:
    def test_uppercase_normalized(self):
        entry = ProofEntry(
            leaf="0x" + DIGEST_A.hex().upper(),
            proof=["0x" + DIGEST_B.hex().upper()],
        )
        assert entry.leaf == to_hex(DIGEST_A)
        assert entry.proof == [to_hex(DIGEST_B)]

    def test_bytes_accessors(self):
        entry = ProofEntry.from_bytes(DIGEST_A, [DIGEST_B])
        assert entry.leaf_bytes() == DIGEST_A
        assert entry.proof_bytes() == [DIGEST_B]

    def test_bad_leaf_rejected(self):
        with pytest.raises(ValidationError):
            ProofEntry(leaf="0x1234", proof=[])

    def test_newline_suffixed_digests_rejected(self):
        with pytest.raises(ValidationError):
            ProofEntry(leaf=to_hex(DIGEST_A) + "\n", proof=[])
        with pytest.raises(ValidationError):
            ProofEntry(leaf=to_hex(DIGEST_A), proof=[to_hex(DIGEST_B) + "\n"])

    def test_proof_must_be_list(self):
        with pytest.raises(ValidationError):
            ProofEntry(leaf=to_hex(DIGEST_A), proof=to_hex(DIGEST_B))

    def test_extra_fields_forbidden(self):
        with pytest.raises(ValidationError):
            ProofEntry(leaf=to_hex(DIGEST_A), proof=[], index=0)


class TestRootFile:
    def test_round_trip(self, tmp_path):
        path = save_root_file(RootFile(root=to_hex(DIGEST_A)), tmp_path / "merkle_root.json")
        assert load_root_file(path).root == to_hex(DIGEST_A)

    def test_layout(self, tmp_path):
        path = save_root_file(RootFile(root=to_hex(DIGEST_A)), tmp_path / "merkle_root.json")
        assert json.loads(path.read_text()) == {"root": to_hex(DIGEST_A)}

    def test_bad_root(self):
        with pytest.raises(ValidationError):
            RootFile(root="0x00")


class TestProofsFile:
    def test_save_and_load(self, tmp_path):
        artifact = generate_whitelist(make_addresses(3))
        path = save_proofs_file(artifact.proofs_file(), tmp_path / "proofs.json")

        loaded = load_proofs_file(path)

        assert len(loaded) == 3
        assert loaded.root == artifact.proofs

    def test_written_layout(self, tmp_path):
        artifact = generate_whitelist([ADDR_1])
        path = save_proofs_file(artifact.proofs_file(), tmp_path / "proofs.json")

        text = path.read_text()
        data = json.loads(text)

        assert text.endswith("\n")
        assert text.startswith("{\n  ")
        assert data == {ADDR_1: {"leaf": artifact.root, "proof": []}}

    def test_get_missing(self):
        assert ProofsFile({}).get(ADDR_1) is None

    def test_invalid_document(self, tmp_path):
        path = tmp_path / "proofs.json"
        path.write_text(json.dumps({ADDR_1: {"leaf": "nope", "proof": []}}))
        with pytest.raises(ValidationError):
            load_proofs_file(path)
