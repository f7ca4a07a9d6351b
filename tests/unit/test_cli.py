"""
CLI Unit Tests
Tests for hashtree_cli/main.py and its commands.
"""
import json

import pytest

from hashtree.crypto.hashing import get_hasher, hash_function_128 as H, to_hex
from hashtree.merkle import MerkleTree
from hashtree_cli.main import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    EXIT_VERIFICATION_FAILED,
    create_parser,
    main,
)


BLOCKS = ["data1", "data2", "data3", "data4", "data5"]


def expected_root(blocks, algorithm="sha3-128"):
    tree = MerkleTree([b.encode() for b in blocks], hasher=get_hasher(algorithm))
    return to_hex(tree.root_hash)


@pytest.fixture
def proof_file(isolated_cwd):
    path = isolated_cwd / "proof.json"
    assert main(["prove", "1", *BLOCKS, "--out", str(path)]) == EXIT_SUCCESS
    return path


class TestParser:
    """Tests for argument parsing."""

    def test_no_command_returns_error(self, isolated_cwd, capsys):
        assert main([]) == EXIT_RUNTIME_ERROR

    def test_unknown_algorithm_rejected(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args(["--algorithm", "md5", "root", "a"])


class TestRootCommand:
    """Tests for `hashtree root`."""

    def test_root(self, isolated_cwd, capsys):
        assert main(["root", *BLOCKS]) == EXIT_SUCCESS

        assert capsys.readouterr().out.strip() == expected_root(BLOCKS)

    def test_root_json(self, isolated_cwd, capsys):
        assert main(["root", "--json", *BLOCKS]) == EXIT_SUCCESS

        data = json.loads(capsys.readouterr().out)
        assert data["root"] == expected_root(BLOCKS)
        assert data["leaves"] == 5
        assert data["depth"] == 4

    def test_root_from_lines(self, isolated_cwd, capsys):
        lines = isolated_cwd / "blocks.txt"
        lines.write_text("data3\ndata4\ndata5\n")

        assert main(["root", "data1", "data2", "--lines", str(lines)]) == EXIT_SUCCESS

        assert capsys.readouterr().out.strip() == expected_root(BLOCKS)

    def test_root_algorithm_override(self, isolated_cwd, capsys):
        assert main(["--algorithm", "sha256", "root", *BLOCKS]) == EXIT_SUCCESS

        assert capsys.readouterr().out.strip() == expected_root(BLOCKS, "sha256")

    def test_root_from_config_file(self, isolated_cwd, capsys):
        (isolated_cwd / "hashtree.yaml").write_text("hash:\n  algorithm: sha3-256\n")

        assert main(["root", *BLOCKS]) == EXIT_SUCCESS

        assert capsys.readouterr().out.strip() == expected_root(BLOCKS, "sha3-256")

    def test_root_from_env(self, isolated_cwd, capsys, monkeypatch):
        monkeypatch.setenv("HASHTREE_HASH_ALGORITHM", "blake2b-128")

        assert main(["root", *BLOCKS]) == EXIT_SUCCESS

        assert capsys.readouterr().out.strip() == expected_root(BLOCKS, "blake2b-128")

    def test_bad_config_file(self, isolated_cwd, capsys):
        (isolated_cwd / "hashtree.yaml").write_text("proof:\n  format: compact\n")

        assert main(["root", *BLOCKS]) == EXIT_RUNTIME_ERROR
        assert "Error loading configuration" in capsys.readouterr().err

    def test_missing_explicit_config(self, isolated_cwd, capsys):
        assert main(["--config", "nope.yaml", "root", "a"]) == EXIT_RUNTIME_ERROR


class TestProveCommand:
    """Tests for `hashtree prove`."""

    def test_prove_stdout(self, isolated_cwd, capsys):
        assert main(["prove", "0", *BLOCKS]) == EXIT_SUCCESS

        data = json.loads(capsys.readouterr().out)
        assert data["index"] == 0
        assert data["leaf"] == to_hex(H(b"data1"))
        assert data["root"] == expected_root(BLOCKS)
        assert len(data["steps"]) == 3

    def test_prove_out_of_range(self, isolated_cwd, capsys):
        assert main(["prove", "5", *BLOCKS]) == EXIT_RUNTIME_ERROR

        assert "index out of bounds" in capsys.readouterr().err

    def test_prove_negative_index(self, isolated_cwd, capsys):
        assert main(["prove", "-1", *BLOCKS]) == EXIT_RUNTIME_ERROR

    def test_prove_legacy_format(self, isolated_cwd, capsys, monkeypatch):
        monkeypatch.setenv("HASHTREE_PROOF_FORMAT", "legacy")

        assert main(["prove", "0", *BLOCKS]) == EXIT_SUCCESS

        data = json.loads(capsys.readouterr().out)
        assert data["format"] == "legacy"
        assert all("side" not in step for step in data["steps"])

    def test_prove_legacy_right_child_warns(self, isolated_cwd, caplog, monkeypatch):
        monkeypatch.setenv("HASHTREE_PROOF_FORMAT", "legacy")
        path = isolated_cwd / "legacy.json"

        assert main(["prove", "1", *BLOCKS, "--out", str(path)]) == EXIT_SUCCESS

        assert "will not verify" in caplog.text
        assert main(["verify", str(path)]) == EXIT_VERIFICATION_FAILED

    def test_prove_legacy_first_leaf_does_not_warn(self, isolated_cwd, caplog, monkeypatch):
        monkeypatch.setenv("HASHTREE_PROOF_FORMAT", "legacy")

        assert main(["prove", "0", *BLOCKS]) == EXIT_SUCCESS

        assert "will not verify" not in caplog.text


class TestVerifyCommand:
    """Tests for `hashtree verify`."""

    def test_verify_valid(self, proof_file, capsys):
        assert main(["verify", str(proof_file)]) == EXIT_SUCCESS

        assert "Proof VALID" in capsys.readouterr().out

    def test_verify_with_block(self, proof_file):
        assert main(["verify", str(proof_file), "--block", "data2"]) == EXIT_SUCCESS

    def test_verify_wrong_block(self, proof_file, capsys):
        assert main(["verify", str(proof_file), "--block", "data3"]) == EXIT_VERIFICATION_FAILED

        assert "Proof INVALID" in capsys.readouterr().out

    def test_verify_trusted_root_mismatch(self, proof_file):
        wrong_root = to_hex(H(b"other root"))

        assert main(["verify", str(proof_file), "--root", wrong_root]) == EXIT_VERIFICATION_FAILED

    def test_verify_json(self, proof_file, capsys):
        capsys.readouterr()

        assert main(["verify", "--json", str(proof_file)]) == EXIT_SUCCESS

        data = json.loads(capsys.readouterr().out)
        assert data["valid"] is True
        assert data["index"] == 1
        assert data["steps"] == 3

    def test_verify_tampered_document(self, proof_file):
        data = json.loads(proof_file.read_text())
        sibling = bytes.fromhex(data["steps"][0]["sibling"])
        data["steps"][0]["sibling"] = to_hex(bytes([sibling[0] ^ 1]) + sibling[1:])
        proof_file.write_text(json.dumps(data))

        assert main(["verify", str(proof_file)]) == EXIT_VERIFICATION_FAILED

    def test_verify_malformed_document(self, isolated_cwd, capsys):
        path = isolated_cwd / "bad.json"
        path.write_text('{"index": 0}')

        assert main(["verify", str(path)]) == EXIT_RUNTIME_ERROR
        assert "Invalid proof document" in capsys.readouterr().err

    def test_verify_malformed_document_json_error(self, isolated_cwd, capsys):
        path = isolated_cwd / "bad.json"
        path.write_text('{"index": 0}')

        assert main(["verify", "--json", str(path)]) == EXIT_RUNTIME_ERROR

        error = json.loads(capsys.readouterr().err)
        assert error["code"] == "PROOF_FORMAT_ERROR"
        assert error["details"]["errors"]

    def test_verify_strict_width_error_json(self, proof_file, capsys, monkeypatch):
        data = json.loads(proof_file.read_text())
        data["steps"][0]["sibling"] = "01" * 7
        proof_file.write_text(json.dumps(data))
        monkeypatch.setenv("HASHTREE_STRICT_HASH", "true")
        capsys.readouterr()

        assert main(["verify", "--json", str(proof_file)]) == EXIT_RUNTIME_ERROR

        error = json.loads(capsys.readouterr().err)
        assert error["code"] == "INVALID_INPUT"

    def test_verify_missing_file(self, isolated_cwd, capsys):
        assert main(["verify", "missing.json"]) == EXIT_RUNTIME_ERROR
        assert "not found" in capsys.readouterr().err

    def test_verify_legacy_proof_for_first_leaf(self, isolated_cwd, monkeypatch):
        monkeypatch.setenv("HASHTREE_PROOF_FORMAT", "legacy")
        path = isolated_cwd / "legacy.json"

        assert main(["prove", "0", *BLOCKS, "--out", str(path)]) == EXIT_SUCCESS
        assert main(["verify", str(path)]) == EXIT_SUCCESS


class TestDemoCommand:
    """Tests for `hashtree demo`."""

    def test_demo(self, isolated_cwd, capsys):
        assert main(["demo"]) == EXIT_SUCCESS

        out = capsys.readouterr().out
        assert f"Merkle Root Hash: {expected_root(BLOCKS[:4])}" in out
        assert "Proof valid: True" in out
        assert f"after insertion: {expected_root(BLOCKS)}" in out

        updated = ["data1", "updated_data2", "data3", "data4", "data5"]
        assert f"after updating leaf 1: {expected_root(updated)}" in out


class TestConfigCommand:
    """Tests for `hashtree config`."""

    def test_init_creates_file(self, isolated_cwd, capsys):
        assert main(["config", "--init"]) == EXIT_SUCCESS

        assert (isolated_cwd / "hashtree.yaml").exists()

    def test_init_refuses_overwrite(self, isolated_cwd, capsys):
        assert main(["config", "--init"]) == EXIT_SUCCESS
        assert main(["config", "--init"]) == EXIT_RUNTIME_ERROR

    def test_show(self, isolated_cwd, capsys):
        assert main(["config", "--show"]) == EXIT_SUCCESS

        data = json.loads(capsys.readouterr().out)
        assert data["hash"]["algorithm"] == "sha3-128"
        assert data["proof"]["format"] == "positional"
