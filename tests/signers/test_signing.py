"""
Single and multi signing tests.
"""

import pytest

from ripple_serialize.codec.binary import to_binary
from ripple_serialize.codec.hashes import HashPrefix, sha512_half
from ripple_serialize.runtime.errors import SigningError
from ripple_serialize.signers.signer import (
    SigningMode,
    check_signature,
    compute_signing_hash,
    multi_sign,
    multi_signing_data,
    signing_data,
    single_sign,
)
from ripple_serialize.tx.json_codec import parse_json
from ripple_serialize.tx.object import STObject
from ripple_serialize.tx.transaction import Transaction


@pytest.fixture
def payment(payment_json):
    return Transaction(parse_json(payment_json))


class TestSigningData:
    """Test the data that gets signed."""

    def test_single(self, payment):
        data = signing_data(payment)
        assert data[:4] == HashPrefix.TX_SIGN
        assert data[4:] == to_binary(payment.object, signing_only=True)

    def test_signature_fields_are_excluded(self, payment):
        before = signing_data(payment)
        payment.object["TxnSignature"] = b"\x01\x02"
        assert signing_data(payment) == before

    def test_multi(self, payment, alice):
        data = multi_signing_data(payment, alice.account_id)
        assert data[:4] == HashPrefix.TX_MULTI_SIGN
        assert data[-20:] == alice.account_id

    def test_multi_bad_account(self, payment):
        with pytest.raises(SigningError):
            multi_signing_data(payment, bytes(19))

    def test_compute_signing_hash(self, payment, alice):
        assert compute_signing_hash(payment) == sha512_half(signing_data(payment))
        assert compute_signing_hash(payment, SigningMode.MULTI, alice.account_id) == \
            sha512_half(multi_signing_data(payment, alice.account_id))
        assert compute_signing_hash(payment, "multi", alice.account_id) != compute_signing_hash(payment)

    def test_multi_hash_requires_account(self, payment):
        with pytest.raises(SigningError):
            compute_signing_hash(payment, SigningMode.MULTI)


class TestSingleSign:
    """Test single signing."""

    @pytest.mark.parametrize("fixture", ["master_key", "ed25519_key"])
    def test_sign_and_check(self, request, payment, fixture):
        key = request.getfixturevalue(fixture)
        single_sign(payment, key)
        assert payment.object["SigningPubKey"] == key.public_key
        assert "TxnSignature" in payment.object
        assert check_signature(payment) == (True, "")

    def test_resign_replaces_signers(self, payment, master_key, alice):
        multi_sign(payment, alice)
        single_sign(payment, master_key)
        assert "Signers" not in payment.object
        assert check_signature(payment) == (True, "")

    def test_txid_covers_signature(self, payment, master_key):
        unsigned = payment.txid
        single_sign(payment, master_key)
        assert payment.txid != unsigned

    def test_tampered_field(self, payment, master_key):
        single_sign(payment, master_key)
        payment.object["Sequence"] = 2
        assert check_signature(payment) == (False, "Invalid signature.")

    def test_tampered_signature(self, payment, ed25519_key):
        single_sign(payment, ed25519_key)
        sig = bytearray(payment.object["TxnSignature"])
        sig[10] ^= 0xFF
        payment.object["TxnSignature"] = bytes(sig)
        assert check_signature(payment) == (False, "Invalid signature.")

    def test_unsigned(self, payment):
        assert check_signature(payment) == (False, "Missing SigningPubKey.")
        payment.object["SigningPubKey"] = b""
        assert check_signature(payment) == (False, "Empty SigningPubKey.")

    def test_missing_signature(self, payment, master_key):
        payment.object["SigningPubKey"] = master_key.public_key
        assert check_signature(payment) == (False, "Missing TxnSignature.")

    def test_signs_plain_object(self, payment_json, master_key):
        obj = parse_json(payment_json)
        single_sign(obj, master_key)
        assert check_signature(obj) == (True, "")


class TestMultiSign:
    """Test multi signing."""

    def _signer_accounts(self, tx):
        return [entry["Account"] for entry in tx.object["Signers"]]

    def test_single_signer(self, payment, alice):
        multi_sign(payment, alice)
        assert payment.object["SigningPubKey"] == b""
        assert "TxnSignature" not in payment.object
        (entry,) = payment.object["Signers"]
        assert entry.field.name == "Signer"
        assert entry["Account"] == alice.account_id
        assert entry["SigningPubKey"] == alice.public_key
        assert check_signature(payment) == (True, "")

    @pytest.mark.parametrize("order", [("alice", "bob"), ("bob", "alice")])
    def test_signers_are_sorted(self, request, payment, order):
        keys = [request.getfixturevalue(name) for name in order]
        for key in keys:
            multi_sign(payment, key)
        accounts = self._signer_accounts(payment)
        assert accounts == sorted(k.account_id for k in keys)
        assert check_signature(payment) == (True, "")

    def test_same_result_either_order(self, payment_json, alice, bob):
        first = Transaction(parse_json(payment_json))
        second = Transaction(parse_json(payment_json))
        multi_sign(first, alice)
        multi_sign(first, bob)
        multi_sign(second, bob)
        multi_sign(second, alice)
        assert first.serialize() == second.serialize()

    def test_resign_replaces_entry(self, payment, alice):
        multi_sign(payment, alice)
        multi_sign(payment, alice)
        assert len(payment.object["Signers"]) == 1
        assert check_signature(payment) == (True, "")

    def test_replaces_single_signature(self, payment, master_key, alice):
        single_sign(payment, master_key)
        multi_sign(payment, alice)
        assert "TxnSignature" not in payment.object
        assert check_signature(payment) == (True, "")

    def test_own_account_is_rejected(self, payment, master_key):
        multi_sign(payment, master_key)
        assert check_signature(payment) == (False, "Invalid multisigner.")

    def test_unsorted(self, payment, alice, bob):
        multi_sign(payment, alice)
        multi_sign(payment, bob)
        payment.object["Signers"] = list(reversed(payment.object["Signers"]))
        assert check_signature(payment) == (False, "Unsorted Signers array.")

    def test_signature_is_account_specific(self, payment, alice, bob):
        multi_sign(payment, alice)
        (entry,) = payment.object["Signers"]
        entry["Account"] = bob.account_id
        reason = f"Invalid signature on account {bob.address}."
        assert check_signature(payment) == (False, reason)

    def test_empty_signers(self, payment):
        payment.object["SigningPubKey"] = b""
        payment.object["Signers"] = []
        assert check_signature(payment) == (False, "Invalid Signers array size.")

    def test_incomplete_entry(self, payment, alice):
        payment.object["SigningPubKey"] = b""
        payment.object["Signers"] = [STObject({"Account": alice.account_id}, field="Signer")]
        assert check_signature(payment) == (False, "Invalid signer entry.")

    def test_tampered_field(self, payment, alice, bob):
        multi_sign(payment, alice)
        multi_sign(payment, bob)
        payment.object["Fee"] = payment.object["Amount"]
        ok, reason = check_signature(payment)
        assert not ok
        assert reason.startswith("Invalid signature on account ")
