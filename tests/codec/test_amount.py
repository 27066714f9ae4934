"""
Amount encoding tests.
"""

import pytest

from ripple_serialize.codec.amount import (
    Amount,
    NATIVE_CURRENCY,
    currency_from_json,
    currency_to_json,
)
from ripple_serialize.codec.reader import BinaryReader
from ripple_serialize.codec.writer import BinaryWriter
from ripple_serialize.runtime.errors import FieldError, MalformedFieldError

USD = bytes(12) + b"USD" + bytes(5)
ISSUER = bytes(range(1, 21))


def _encode(amount: Amount) -> bytes:
    writer = BinaryWriter()
    amount.encode(writer)
    return writer.to_bytes()


class TestNativeAmounts:
    """Test XRP amounts in drops."""

    def test_encoding(self):
        assert _encode(Amount.from_drops(10)).hex().upper() == "400000000000000A"
        assert _encode(Amount.from_drops(1000000)).hex().upper() == "40000000000F4240"

    def test_negative(self):
        data = _encode(Amount.from_drops(-10))
        assert data.hex().upper() == "000000000000000A"
        assert Amount.decode(BinaryReader(data)) == Amount.from_drops(-10)

    def test_json(self):
        assert Amount.from_json("10") == Amount.from_drops(10)
        assert Amount.from_json(10) == Amount.from_drops(10)
        assert Amount.from_drops(10).to_json() == "10"

    def test_out_of_range(self):
        with pytest.raises(FieldError):
            Amount.from_drops(10 ** 17 + 1)

    @pytest.mark.parametrize("bad", ["1.5", "ten", "", True, 1.5, None])
    def test_invalid_json(self, bad):
        with pytest.raises(FieldError):
            Amount.from_json(bad)


class TestIssuedAmounts:
    """Test issued currency amounts."""

    def test_one_usd(self):
        """One unit has mantissa 10^15 and exponent -15."""
        amount = Amount.issued(1, 0, USD, ISSUER)
        assert amount.value == 10 ** 15
        assert amount.exponent == -15
        data = _encode(amount)
        assert len(data) == 48
        assert data[:8].hex().upper() == "D4838D7EA4C68000"
        assert data[8:28] == USD
        assert data[28:] == ISSUER
        assert Amount.decode(BinaryReader(data)) == amount

    def test_negative_clears_sign_bit(self):
        data = _encode(Amount.issued(-1, 0, USD, ISSUER))
        assert data[0] & 0x40 == 0
        assert data[0] & 0x80

    def test_zero(self):
        zero = Amount.issued(0, 0, USD, ISSUER)
        data = _encode(zero)
        assert data[:8].hex().upper() == "8000000000000000"
        assert Amount.decode(BinaryReader(data)) == zero
        assert zero.value_text() == "0"

    @pytest.mark.parametrize("mantissa,exponent,text", [
        (1, 0, "1"),
        (125, -2, "1.25"),
        (-5, -1, "-0.5"),
        (1234, 3, "1234000"),
        (1, -30, "1000000000000000e-45"),
        (1, 20, "1000000000000000e5"),
    ])
    def test_value_text(self, mantissa, exponent, text):
        assert Amount.issued(mantissa, exponent, USD, ISSUER).value_text() == text

    @pytest.mark.parametrize("text", ["1", "1.25", "-0.5", "1e-45", "12.5e3", "0"])
    def test_json_roundtrip(self, text):
        from ripple_serialize.codec.base58 import encode_account_id
        value = {"currency": "USD", "issuer": encode_account_id(ISSUER), "value": text}
        amount = Amount.from_json(value)
        assert not amount.is_native
        assert Amount.from_json(amount.to_json()) == amount

    def test_exponent_overflow(self):
        with pytest.raises(FieldError):
            Amount.issued(1, 200, USD, ISSUER)

    def test_tiny_value_becomes_zero(self):
        assert Amount.issued(1, -200, USD, ISSUER).value == 0

    def test_missing_member(self):
        with pytest.raises(FieldError):
            Amount.from_json({"currency": "USD", "value": "1"})

    def test_native_currency_rejected(self):
        with pytest.raises(FieldError):
            Amount.issued(1, 0, NATIVE_CURRENCY, ISSUER)


class TestCurrencyCodes:
    """Test currency code rendering."""

    def test_standard_code(self):
        assert currency_from_json("USD") == USD
        assert currency_to_json(USD) == "USD"

    def test_xrp(self):
        assert currency_from_json("XRP") == NATIVE_CURRENCY
        assert currency_to_json(NATIVE_CURRENCY) == "XRP"

    def test_hex_code(self):
        code = bytes([0x80]) + bytes(range(1, 20))
        assert currency_to_json(code) == code.hex().upper()
        assert currency_from_json(code.hex()) == code

    @pytest.mark.parametrize("bad", ["US", "USDX", 3, "G" * 40])
    def test_invalid(self, bad):
        with pytest.raises(FieldError):
            currency_from_json(bad)


class TestCanonicalDecoding:
    """Only canonical amount encodings are accepted."""

    def test_native_negative_zero(self):
        with pytest.raises(MalformedFieldError):
            Amount.decode(BinaryReader(bytes(8)))

    def test_native_positive_zero(self):
        assert Amount.decode(BinaryReader(bytes.fromhex("4000000000000000"))) == Amount.from_drops(0)

    @pytest.mark.parametrize("header", [
        "C000000000000000",  # sign bit set
        "8040000000000000",  # stray exponent bits
        "D4C0000000000000",  # exponent of a normal value
    ])
    def test_issued_zero_with_stray_bits(self, header):
        data = bytes.fromhex(header) + USD + ISSUER
        with pytest.raises(MalformedFieldError):
            Amount.decode(BinaryReader(data))
