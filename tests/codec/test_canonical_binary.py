"""
Canonical serializer tests.

Covers field ordering, nesting with end markers, signing-only output and the
rejection of malformed blobs.
"""

import pytest

from ripple_serialize.codec.amount import Amount
from ripple_serialize.codec.binary import (
    MAX_DEPTH,
    deserialize,
    parse_binary,
    serialize,
    to_binary,
)
from ripple_serialize.runtime.errors import MalformedFieldError, ParseError
from ripple_serialize.tx.json_codec import parse_json, to_json
from ripple_serialize.tx.object import STObject


class TestSerialize:
    """Test object serialization."""

    def test_simple_object(self):
        obj = parse_json({"TransactionType": "Payment", "Flags": 2147483648, "Sequence": 1})
        assert serialize(obj) == "12000022800000002400000001"

    def test_insertion_order_does_not_matter(self):
        a = STObject()
        a["Sequence"] = 1
        a["Flags"] = 2147483648
        a["TransactionType"] = 0
        b = STObject({"TransactionType": 0, "Flags": 2147483648, "Sequence": 1})
        assert to_binary(a) == to_binary(b)
        assert serialize(a) == "12000022800000002400000001"

    def test_fee(self):
        obj = STObject({"Fee": Amount.from_drops(10)})
        assert serialize(obj) == "68400000000000000A"

    def test_nested_array(self):
        """Arrays wrap named objects; both get end markers."""
        obj = parse_json({"Memos": [{"Memo": {"MemoData": "ABCD"}}]})
        assert serialize(obj) == "F9EA7D02ABCDE1F1"

    def test_signing_only_skips_signature_fields(self):
        obj = STObject({
            "Sequence": 1,
            "SigningPubKey": b"",
            "TxnSignature": b"\x01\x02",
        })
        signer = STObject({"Account": bytes(20)}, field="Signer")
        obj["Signers"] = [signer]
        full = to_binary(obj)
        signing = to_binary(obj, signing_only=True)
        assert signing.hex().upper() == "24000000017300"
        assert len(full) > len(signing)

    def test_hash_is_not_serialized(self):
        obj = STObject({"Sequence": 1, "hash": bytes(32)})
        assert serialize(obj) == "2400000001"


class TestDeserialize:
    """Test blob parsing."""

    def test_roundtrip(self):
        obj = parse_json({"TransactionType": "Payment", "Flags": 2147483648, "Sequence": 1})
        assert deserialize("12000022800000002400000001") == obj

    def test_whitespace_is_ignored(self):
        assert deserialize("  12000022800000002400000001\n\n") == deserialize("12000022800000002400000001")

    def test_lowercase_hex(self):
        assert deserialize("f9ea7d02abcde1f1")["Memos"][0]["MemoData"] == b"\xAB\xCD"

    def test_nested_field_names(self):
        obj = deserialize("F9EA7D02ABCDE1F1")
        memo = obj["Memos"][0]
        assert memo.field.name == "Memo"

    @pytest.mark.parametrize("text", ["", "   ", "not valid", "Hello, world!", "123"])
    def test_not_hex(self, text):
        with pytest.raises(ParseError):
            deserialize(text)

    def test_empty_blob(self):
        with pytest.raises(ParseError):
            parse_binary(b"")

    @pytest.mark.parametrize("text", [
        "12",                          # truncated integer
        "D1",                          # unknown type code
        "2400000001120000",            # out of order
        "24000000012400000002",        # duplicate
        "F9EA7D02ABCD",                # missing end of object
        "F9EA7D02ABCDE1",              # missing end of array
        "E1",                          # end marker at top level
        "F1",                          # array end at top level
        "F924000000 01F1".replace(" ", ""),  # array member that is not an object
        "7D05ABCD",                    # blob longer than input
        "680000000000000000",          # negative zero fee
    ])
    def test_malformed(self, text):
        with pytest.raises(MalformedFieldError):
            deserialize(text)

    def test_depth_limit(self):
        """Deeply nested objects are rejected."""
        depth = MAX_DEPTH + 2
        blob = "EA" * depth + "E1" * depth
        with pytest.raises(MalformedFieldError):
            deserialize(blob)


class TestRoundTrip:
    """Binary and JSON round trips of a rich object."""

    @pytest.fixture
    def rich_json(self, alice, bob):
        usd_issuer = alice.address
        return {
            "TransactionType": "Payment",
            "Account": bob.address,
            "Destination": alice.address,
            "Amount": {"currency": "USD", "issuer": usd_issuer, "value": "12.5"},
            "SendMax": "1000000",
            "Fee": "12",
            "Sequence": 42,
            "Flags": 0,
            "LastLedgerSequence": 1000,
            "OwnerNode": "000000000000000A",
            "InvoiceID": "AB" * 32,
            "SigningPubKey": "",
            "Paths": [
                [{"currency": "USD", "issuer": usd_issuer}],
                [{"account": bob.address}, {"currency": "EUR"}],
            ],
            "Amendments": ["01" * 32, "02" * 32],
            "Memos": [
                {"Memo": {"MemoType": "6E6F7465", "MemoData": "ABCD"}},
                {"Memo": {"MemoData": ""}},
            ],
        }

    def test_binary_roundtrip(self, rich_json):
        obj = parse_json(rich_json)
        assert parse_binary(to_binary(obj)) == obj

    def test_reserialization_is_stable(self, rich_json):
        blob = serialize(parse_json(rich_json))
        assert serialize(deserialize(blob)) == blob

    def test_json_roundtrip(self, rich_json):
        obj = parse_json(rich_json)
        assert parse_json(to_json(obj)) == obj
        assert to_json(obj) == rich_json

    def test_json_roundtrip_through_binary(self, rich_json):
        obj = deserialize(serialize(parse_json(rich_json)))
        assert parse_json(to_json(obj)) == obj
