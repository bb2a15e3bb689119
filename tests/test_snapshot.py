"""
Tests for snapshot loading
"""

import json
import tempfile
import unittest
from pathlib import Path

from vaultalloc.allocator import MAX_UINT256, ZERO_ADDRESS
from vaultalloc.snapshot import (
    SnapshotError,
    VaultSnapshot,
    load_snapshot,
    parse_amount,
    parse_vault_id,
    snapshot_from_dict,
)
from vaultalloc.utils.config import AllocatorSettings

A = "0x" + "a" * 40
B = "0x" + "b" * 40
MIXED_B = "0x" + "B" * 20 + "b" * 20


class TestParsing(unittest.TestCase):
    """Test cases for id and amount parsing."""

    def test_vault_id_normalized(self):
        """Test mixed-case addresses are lower-cased and stripped."""
        self.assertEqual(parse_vault_id("  " + MIXED_B + " "), B)

    def test_vault_id_kept_when_not_normalizing(self):
        """Test normalization can be switched off."""
        settings = AllocatorSettings(normalize_addresses=False)
        self.assertEqual(parse_vault_id(MIXED_B, settings), MIXED_B)

    def test_vault_id_format(self):
        """Test non-address ids are rejected unless hex checks are off."""
        with self.assertRaises(SnapshotError):
            parse_vault_id("vault-1")
        with self.assertRaises(SnapshotError):
            parse_vault_id(42)
        settings = AllocatorSettings(require_hex_addresses=False)
        self.assertEqual(parse_vault_id("Vault-1", settings), "vault-1")

    def test_amounts(self):
        """Test int, decimal and hex amounts."""
        self.assertEqual(parse_amount(5), 5)
        self.assertEqual(parse_amount("1_000"), 1000)
        self.assertEqual(parse_amount("0xff"), 255)
        self.assertEqual(parse_amount(str(MAX_UINT256)), MAX_UINT256)

    def test_bad_amounts(self):
        """Test malformed and out-of-range amounts."""
        for bad in ("ten", "-1", str(MAX_UINT256 + 1), 1.5, None):
            with self.assertRaises(SnapshotError):
                parse_amount(bad)


class TestSnapshotFromDict(unittest.TestCase):
    """Test cases for snapshot_from_dict."""

    def test_list_layout(self):
        """Test ids with a parallel balances list."""
        snap = snapshot_from_dict({"sub_vaults": [A, B], "balances": [10, "20"], "ejecting_vault": B})
        self.assertEqual(snap.sub_vaults, [A, B])
        self.assertEqual(snap.balances, [10, 20])
        self.assertEqual(snap.ejecting_vault, B)

    def test_entry_layout(self):
        """Test per-entry vault/balance mappings."""
        snap = snapshot_from_dict({"sub_vaults": [{"vault": A, "balance": 7}, {"vault": MIXED_B}]})
        self.assertEqual(snap.sub_vaults, [A, B])
        self.assertEqual(snap.balances, [7, 0])
        self.assertIsNone(snap.ejecting_vault)

    def test_deposit_only_snapshot(self):
        """Test balances are optional."""
        snap = snapshot_from_dict({"sub_vaults": [A, B]})
        self.assertEqual(snap.balances, [])

    def test_zero_ejecting_means_none(self):
        """Test a zero-address ejecting vault is dropped."""
        snap = snapshot_from_dict({"sub_vaults": [A], "ejecting_vault": ZERO_ADDRESS})
        self.assertIsNone(snap.ejecting_vault)

    def test_zero_address_sub_vault_passes_through(self):
        """Test the sentinel is left for the allocator to reject."""
        snap = snapshot_from_dict({"sub_vaults": [A, ZERO_ADDRESS]})
        self.assertEqual(snap.sub_vaults, [A, ZERO_ADDRESS])

    def test_invalid_layouts(self):
        """Test malformed snapshots."""
        bad = [
            [A, B],
            {},
            {"sub_vaults": A},
            {"sub_vaults": [A, B], "balances": [1]},
            {"sub_vaults": [{"balance": 1}]},
            {"sub_vaults": [{"vault": A, "balance": 1}], "balances": [1]},
            {"sub_vaults": [A], "balances": 5},
        ]
        for raw in bad:
            with self.assertRaises(SnapshotError, msg=repr(raw)):
                snapshot_from_dict(raw)

    def test_length_mismatch_on_construction(self):
        """Test VaultSnapshot rejects misaligned balances."""
        with self.assertRaises(SnapshotError):
            VaultSnapshot(sub_vaults=[A], balances=[1, 2])


class TestLoadSnapshot(unittest.TestCase):
    """Test cases for load_snapshot."""

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        self.dir = Path(self.tmp.name)

    def test_json(self):
        """Test loading a JSON snapshot."""
        path = self.dir / "snap.json"
        path.write_text(json.dumps({"sub_vaults": [A, B], "balances": [1, 2]}), encoding="utf-8")
        snap = load_snapshot(path)
        self.assertEqual(snap.balances, [1, 2])

    def test_yaml(self):
        """Test loading a YAML snapshot."""
        path = self.dir / "snap.yaml"
        path.write_text(
            f"sub_vaults:\n  - vault: '{A}'\n    balance: 3\n  - vault: '{B}'\n    balance: '4'\n"
            f"ejecting_vault: '{A}'\n",
            encoding="utf-8",
        )
        snap = load_snapshot(path)
        self.assertEqual(snap.sub_vaults, [A, B])
        self.assertEqual(snap.balances, [3, 4])
        self.assertEqual(snap.ejecting_vault, A)

    def test_missing_file(self):
        """Test a missing file raises SnapshotError."""
        with self.assertRaises(SnapshotError):
            load_snapshot(self.dir / "absent.json")

    def test_unparseable(self):
        """Test broken JSON raises SnapshotError."""
        path = self.dir / "snap.json"
        path.write_text("{not json", encoding="utf-8")
        with self.assertRaises(SnapshotError):
            load_snapshot(path)


if __name__ == "__main__":
    unittest.main()
