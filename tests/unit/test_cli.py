"""
Module 07 - CLI Tests
Tests for ballotproof_cli: generate, proof, verify and config commands.
"""
import json

import pytest

from ballotproof_cli.main import create_parser, main
from core.crypto.hashing import to_hex
from core.schemas.proofs import load_proofs_file, load_root_file
from core.whitelist.leaves import hash_leaf

from fixtures import ADDR_1, ADDR_2, ADDR_3, OUTSIDER, make_addresses, make_csv


@pytest.fixture
def workdir(tmp_path, clean_env):
    """Isolated cwd and HOME so no config file is picked up."""
    clean_env.chdir(tmp_path)
    clean_env.setenv("HOME", str(tmp_path))
    return tmp_path


@pytest.fixture
def generated(workdir, capsys):
    """Run generate over five addresses and return (addresses, out_dir)."""
    addresses = make_addresses(5)
    source = workdir / "voters.csv"
    source.write_text(make_csv(addresses))
    out_dir = workdir / "out"

    code = main(["generate", str(source), "--out-dir", str(out_dir)])
    capsys.readouterr()

    assert code == 0
    return addresses, out_dir


class TestParser:
    def test_no_command_prints_help(self, workdir, capsys):
        assert main([]) == 1
        assert "usage" in capsys.readouterr().out.lower()

    def test_verify_requires_root(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args(["verify", "--address", ADDR_1])

    def test_verify_address_and_leaf_exclusive(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args([
                "verify", "--root", "0x" + "0" * 64,
                "--address", ADDR_1, "--leaf", "0x" + "0" * 64,
            ])


class TestGenerate:
    def test_writes_files(self, generated):
        addresses, out_dir = generated

        proofs = load_proofs_file(out_dir / "proofs.json")
        root = load_root_file(out_dir / "merkle_root.json")
        written = json.loads((out_dir / "addresses.json").read_text())

        assert len(proofs) == 5
        assert written == addresses
        assert root.root.startswith("0x") and len(root.root) == 66

    def test_json_summary(self, workdir, capsys):
        source = workdir / "voters.csv"
        source.write_text(make_csv([ADDR_1, "0xbad", ADDR_2]))

        code = main(["generate", str(source), "--out-dir", "out", "--json"])
        summary = json.loads(capsys.readouterr().out)

        assert code == 0
        assert summary["valid_count"] == 2
        assert summary["invalid_count"] == 1
        assert summary["invalid_rows"][0]["row"] == 3
        assert summary["self_check_ok"] is True

    def test_plain_address_list(self, workdir, capsys):
        source = workdir / "voters.txt"
        source.write_text(make_csv([ADDR_1, ADDR_2, ADDR_3], header=None))

        code = main(["generate", str(source), "--json"])
        summary = json.loads(capsys.readouterr().out)

        assert code == 0
        assert summary["valid_count"] == 3
        assert (workdir / "proofs.json").exists()

    def test_named_column(self, workdir, capsys):
        source = workdir / "voters.csv"
        source.write_text(make_csv([ADDR_1, ADDR_2], extra_columns=True))

        code = main(["generate", str(source), "--column", "address", "--json"])
        summary = json.loads(capsys.readouterr().out)

        assert code == 0
        assert summary["valid_count"] == 2

    def test_unknown_column(self, workdir, capsys):
        source = workdir / "voters.csv"
        source.write_text(make_csv([ADDR_1]))

        assert main(["generate", str(source), "--column", "wallet"]) == 1
        assert "not found" in capsys.readouterr().err

    def test_missing_source(self, workdir, capsys):
        assert main(["generate", str(workdir / "nope.csv")]) == 1
        assert "not found" in capsys.readouterr().err

    def test_no_valid_addresses(self, workdir, capsys):
        source = workdir / "voters.csv"
        source.write_text("address\nnope\n")

        assert main(["generate", str(source)]) == 1
        assert "No valid addresses" in capsys.readouterr().err
        assert not (workdir / "proofs.json").exists()

    def test_human_output(self, workdir, capsys):
        source = workdir / "voters.csv"
        source.write_text(make_csv([ADDR_1, ADDR_2]))

        assert main(["generate", str(source)]) == 0
        out = capsys.readouterr().out
        assert "root: 0x" in out
        assert "2 valid, 0 invalid" in out


class TestProofCommand:
    def test_found(self, generated, capsys):
        addresses, out_dir = generated

        code = main(["proof", str(out_dir / "proofs.json"), addresses[2].lower(), "--json"])
        data = json.loads(capsys.readouterr().out)

        assert code == 0
        assert data["found"] is True
        assert data["address"] == addresses[2]
        assert data["leaf"] == to_hex(hash_leaf(addresses[2]))

    def test_not_found(self, generated, capsys):
        _, out_dir = generated
        assert main(["proof", str(out_dir / "proofs.json"), OUTSIDER]) == 2
        assert "No proof found" in capsys.readouterr().out

    def test_malformed_address(self, generated, capsys):
        _, out_dir = generated
        assert main(["proof", str(out_dir / "proofs.json"), "0x12"]) == 1

    def test_missing_file(self, workdir):
        assert main(["proof", str(workdir / "proofs.json"), ADDR_1]) == 1


class TestVerifyCommand:
    def test_accepts_with_proofs_file(self, generated, capsys):
        addresses, out_dir = generated
        root = load_root_file(out_dir / "merkle_root.json").root

        code = main([
            "verify", "--root", root,
            "--address", addresses[1],
            "--proofs", str(out_dir / "proofs.json"),
            "--json",
        ])
        data = json.loads(capsys.readouterr().out)

        assert code == 0
        assert data["accepted"] is True
        assert data["proof_length"] == 3

    def test_accepts_with_proof_text(self, generated, capsys):
        addresses, out_dir = generated
        root = load_root_file(out_dir / "merkle_root.json").root
        entry = load_proofs_file(out_dir / "proofs.json").get(addresses[4])

        code = main([
            "verify", "--root", root,
            "--leaf", entry.leaf,
            "--proof", ",".join(entry.proof),
        ])

        assert code == 0
        assert "accepted: true" in capsys.readouterr().out

    def test_rejects_outsider(self, generated, capsys):
        addresses, out_dir = generated
        root = load_root_file(out_dir / "merkle_root.json").root
        entry = load_proofs_file(out_dir / "proofs.json").get(addresses[0])

        code = main([
            "verify", "--root", root,
            "--address", OUTSIDER,
            "--proof", ",".join(entry.proof),
        ])

        assert code == 2
        assert "accepted: false" in capsys.readouterr().out

    def test_empty_proof_rejected(self, generated, capsys):
        addresses, out_dir = generated
        root = load_root_file(out_dir / "merkle_root.json").root
        assert main(["verify", "--root", root, "--address", addresses[0]]) == 2

    def test_zero_root_accepts(self, workdir, capsys):
        code = main(["verify", "--root", "0x" + "0" * 64, "--address", OUTSIDER, "--json"])
        data = json.loads(capsys.readouterr().out)

        assert code == 0
        assert data["accepted"] is True
        assert data["whitelist_enabled"] is False

    def test_bad_root(self, workdir, capsys):
        assert main(["verify", "--root", "0x1234", "--address", OUTSIDER]) == 1
        assert "Error" in capsys.readouterr().err

    def test_bad_proof_entry(self, workdir, capsys):
        code = main([
            "verify", "--root", "0x" + "1" * 64,
            "--address", OUTSIDER, "--proof", "0xnothex",
        ])
        assert code == 1


class TestConfigCommand:
    def test_init_and_show(self, workdir, capsys):
        assert main(["config", "--init"]) == 0
        assert (workdir / "ballotproof.json").exists()
        capsys.readouterr()

        assert main(["config", "--show"]) == 0
        shown = json.loads(capsys.readouterr().out)
        assert shown["whitelist"]["enforce_checksum"] is True

    def test_init_refuses_overwrite(self, workdir, capsys):
        (workdir / "ballotproof.json").write_text("{}")
        assert main(["config", "--init"]) == 1
