"""
Base58check token tests.
"""

import pytest

from ripple_serialize.codec.base58 import (
    ALPHABET,
    TokenType,
    b58decode,
    b58encode,
    decode_account_id,
    decode_seed,
    decode_token,
    encode_account_id,
    encode_seed,
    encode_token,
)
from ripple_serialize.codec.hashes import calc_account_id, sha512_half, transaction_id
from ripple_serialize.runtime.errors import ParseError


def test_well_known_accounts():
    """The zero and one accounts have fixed addresses."""
    assert encode_account_id(bytes(20)) == "rrrrrrrrrrrrrrrrrrrrrhoLvTp"
    assert encode_account_id(bytes(19) + b"\x01") == "rrrrrrrrrrrrrrrrrrrrBZbvji"


def test_account_roundtrip():
    account = bytes(range(20))
    assert decode_account_id(encode_account_id(account)) == account


def test_leading_zeros_preserved():
    data = b"\x00\x00\x01\x02"
    assert b58encode(data).startswith("rr")
    assert b58decode(b58encode(data)) == data


def test_bad_character():
    with pytest.raises(ParseError):
        b58decode("0OIl")


def test_checksum_detects_typo():
    address = encode_account_id(bytes(range(20)))
    typo = address[:-1] + ("r" if address[-1] != "r" else "p")
    assert decode_account_id(typo) is None


def test_token_type_is_checked():
    seed = bytes(range(16))
    text = encode_seed(seed)
    assert text.startswith("s")
    assert decode_seed(text) == seed
    assert decode_account_id(text) is None
    assert decode_token(TokenType.ACCOUNT_PUBLIC, text) is None


def test_invalid_text_returns_none():
    assert decode_token(TokenType.ACCOUNT_ID, "") is None
    assert decode_token(TokenType.ACCOUNT_ID, "Hello, world!") is None
    assert decode_seed("r") is None


def test_public_key_prefix():
    text = encode_token(TokenType.ACCOUNT_PUBLIC, b"\x02" + bytes(32))
    assert text.startswith("a")
    assert len(text) == 52


class TestHashes:
    """Test hashing helpers."""

    def test_sha512_half_concatenates(self):
        assert sha512_half(b"ab", b"c") == sha512_half(b"abc")
        assert len(sha512_half(b"")) == 32

    def test_account_id_length(self):
        assert len(calc_account_id(b"\x02" + bytes(32))) == 20

    def test_transaction_id_uses_prefix(self):
        assert transaction_id(b"\x12\x00\x00") == sha512_half(b"TXN\x00", b"\x12\x00\x00")


def test_alphabet_is_ledger_alphabet():
    assert ALPHABET == b"rpshnaf39wBUDNEGHJKLM4PQRST7VWXYZ2bcdeCg65jkm8oFqi1tuvAxyz"


def test_known_seed_token():
    seed = bytes.fromhex("DEDCE9CE67B451D852FD4E846FCDE31C")
    assert encode_seed(seed) == "snoPBrXtMeMyMHUVTgbuqAfg1SUTb"
    assert decode_seed("snoPBrXtMeMyMHUVTgbuqAfg1SUTb") == seed


def test_surrounding_whitespace_rejected():
    address = encode_account_id(bytes(range(20)))
    assert decode_account_id(address + " ") is None
    assert decode_account_id(" " + address) is None
