"""
Module 04 - Proof Lookup Tests
Tests for core/whitelist/lookup.py
"""
import pytest

from core.schemas.errors import InvalidIdentifierException
from core.schemas.proofs import ProofEntry, ProofsFile
from core.whitelist.generator import generate_whitelist
from core.whitelist.lookup import find_proof

from fixtures import CHECKSUM_VECTORS, OUTSIDER


@pytest.fixture
def proofs():
    return generate_whitelist(CHECKSUM_VECTORS).proofs_file()


class TestFindProof:
    def test_exact_key(self, proofs):
        found = find_proof(proofs, CHECKSUM_VECTORS[0])
        assert found is not None
        assert found.address == CHECKSUM_VECTORS[0]
        assert found.entry == proofs.get(CHECKSUM_VECTORS[0])

    def test_lowercase_query(self, proofs):
        found = find_proof(proofs, CHECKSUM_VECTORS[2].lower())
        assert found is not None
        assert found.address == CHECKSUM_VECTORS[2]

    def test_query_trimmed(self, proofs):
        assert find_proof(proofs, "  " + CHECKSUM_VECTORS[1] + "\n") is not None

    def test_lowercase_keys_in_document(self, proofs):
        """Documents written with lowercase keys still resolve."""
        lowered = {k.lower(): v for k, v in proofs.root.items()}
        found = find_proof(lowered, CHECKSUM_VECTORS[3])
        assert found is not None
        assert found.address == CHECKSUM_VECTORS[3].lower()

    def test_absent_address(self, proofs):
        assert find_proof(proofs, OUTSIDER) is None

    def test_malformed_query(self, proofs):
        with pytest.raises(InvalidIdentifierException):
            find_proof(proofs, "0x1234")

    def test_plain_dict_accepted(self):
        entry = ProofEntry(leaf="0x" + "ab" * 32, proof=[])
        mapping = {OUTSIDER: entry}
        found = find_proof(mapping, OUTSIDER)
        assert found is not None
        assert found.entry is entry

    def test_empty_document(self):
        assert find_proof(ProofsFile({}), OUTSIDER) is None
