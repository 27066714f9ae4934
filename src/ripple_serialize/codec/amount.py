"""
Amounts and currency codes.

An amount is either native XRP, counted in integer drops and serialized in
eight bytes, or an issued currency amount: a decimal floating point value with
a 16 digit mantissa and an exponent, followed by the 20-byte currency code and
the 20-byte issuer account.
"""

from __future__ import annotations
import re
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from .base58 import decode_account_id, encode_account_id
from .reader import BinaryReader
from .writer import BinaryWriter
from ..runtime.errors import FieldError, MalformedFieldError

MIN_MANTISSA = 10 ** 15
MAX_MANTISSA = 10 ** 16 - 1
MIN_EXPONENT = -96
MAX_EXPONENT = 80
MAX_NATIVE_DROPS = 10 ** 17

# Exponent stored for an issued amount of zero.
ZERO_EXPONENT = -100

_NOT_NATIVE_BIT = 1 << 63
_POSITIVE_BIT = 1 << 62
_MANTISSA_MASK = (1 << 54) - 1
_DROPS_MASK = (1 << 62) - 1

_VALUE_RE = re.compile(r"^([-+]?)(0|[1-9][0-9]*)(?:\.([0-9]+))?(?:[eE]([+-]?[0-9]+))?$")
_DROPS_RE = re.compile(r"^-?[0-9]+$")
_ISO_CHARS = frozenset(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789<>(){}[]|?!@#$%^&*"
)
_HEX_RE = re.compile(r"^[0-9A-Fa-f]{40}$")

NATIVE_CURRENCY = bytes(20)


def currency_to_json(currency: bytes) -> str:
    """
    Render a 20-byte currency code.

    Returns:
        "XRP" for the all-zero code, the three letter code for standard codes,
        upper-case hex otherwise
    """
    if currency == NATIVE_CURRENCY:
        return "XRP"
    iso = currency[12:15]
    if not any(currency[:12]) and not any(currency[15:]):
        text = iso.decode("ascii", errors="replace")
        if all(c in _ISO_CHARS for c in text) and text != "XRP":
            return text
    return currency.hex().upper()


def currency_from_json(value: Any) -> bytes:
    """
    Parse a currency code.

    Raises:
        FieldError: If the value is neither a three character code nor 40 hex digits
    """
    if not isinstance(value, str):
        raise FieldError(f"Invalid currency: {value!r}")
    if value == "XRP":
        return NATIVE_CURRENCY
    if len(value) == 3 and all(c in _ISO_CHARS for c in value):
        return bytes(12) + value.encode("ascii") + bytes(5)
    if _HEX_RE.match(value):
        return bytes.fromhex(value)
    raise FieldError(f"Invalid currency: {value!r}")


def _canonicalize(mantissa: int, exponent: int):
    if mantissa == 0:
        return 0, ZERO_EXPONENT
    negative = mantissa < 0
    m = abs(mantissa)
    while m < MIN_MANTISSA:
        m *= 10
        exponent -= 1
    while m > MAX_MANTISSA:
        m //= 10
        exponent += 1
    if exponent < MIN_EXPONENT:
        return 0, ZERO_EXPONENT
    if exponent > MAX_EXPONENT:
        raise FieldError("Issued amount is too large")
    return (-m if negative else m), exponent


@dataclass(frozen=True)
class Amount:
    """
    A native or issued currency amount.

    For native amounts ``value`` is the signed number of drops and ``exponent``
    is zero. For issued amounts ``value`` is the signed normalized mantissa.
    """

    value: int
    exponent: int = 0
    currency: Optional[bytes] = None
    issuer: Optional[bytes] = None

    @property
    def is_native(self) -> bool:
        return self.currency is None

    @classmethod
    def from_drops(cls, drops: int) -> Amount:
        """Create a native amount."""
        if abs(drops) > MAX_NATIVE_DROPS:
            raise FieldError(f"Native amount out of range: {drops}")
        return cls(value=drops)

    @classmethod
    def issued(cls, mantissa: int, exponent: int, currency: bytes, issuer: bytes) -> Amount:
        """Create an issued amount, normalizing mantissa and exponent."""
        if currency == NATIVE_CURRENCY:
            raise FieldError("Issued amount cannot use the native currency code")
        m, e = _canonicalize(mantissa, exponent)
        return cls(value=m, exponent=e, currency=currency, issuer=issuer)

    def value_text(self) -> str:
        """Render the numeric part the way the ledger prints it."""
        if self.is_native:
            return str(self.value)
        if self.value == 0:
            return "0"
        sign = "-" if self.value < 0 else ""
        digits = str(abs(self.value))
        e = self.exponent
        if e != 0 and (e < -25 or e > -5):
            return f"{sign}{digits}e{e}"
        if e >= 0:
            return sign + digits + "0" * e
        digits = digits.rjust(-e + 1, "0")
        whole = digits[:e].lstrip("0") or "0"
        frac = digits[e:].rstrip("0")
        return sign + whole + ("." + frac if frac else "")

    def to_json(self) -> Union[str, Dict[str, str]]:
        if self.is_native:
            return self.value_text()
        return {
            "currency": currency_to_json(self.currency),
            "issuer": encode_account_id(self.issuer),
            "value": self.value_text(),
        }

    @classmethod
    def from_json(cls, value: Any) -> Amount:
        """
        Parse a JSON amount: a drops string or integer for XRP, or an object
        with currency, issuer and value members for issued currency.

        Raises:
            FieldError: If the value is not a valid amount
        """
        if isinstance(value, bool):
            raise FieldError(f"Invalid amount: {value!r}")
        if isinstance(value, int):
            return cls.from_drops(value)
        if isinstance(value, str):
            if not _DROPS_RE.match(value):
                raise FieldError(f"Invalid native amount: {value!r}")
            return cls.from_drops(int(value))
        if not isinstance(value, dict):
            raise FieldError(f"Invalid amount: {value!r}")
        extra = set(value) - {"currency", "issuer", "value"}
        if extra:
            raise FieldError(f"Unexpected amount members: {sorted(extra)}")
        for member in ("currency", "issuer", "value"):
            if member not in value:
                raise FieldError(f"Issued amount is missing '{member}'")
        currency = currency_from_json(value["currency"])
        issuer = decode_account_id(value["issuer"]) if isinstance(value["issuer"], str) else None
        if issuer is None:
            raise FieldError(f"Invalid issuer: {value['issuer']!r}")
        mantissa, exponent = _parse_value(value["value"])
        return cls.issued(mantissa, exponent, currency, issuer)

    def encode(self, writer: BinaryWriter) -> None:
        if self.is_native:
            if self.value >= 0:
                writer.u64(_POSITIVE_BIT | self.value)
            else:
                writer.u64(-self.value)
            return
        if self.value == 0:
            writer.u64(_NOT_NATIVE_BIT)
        else:
            bits = _NOT_NATIVE_BIT | ((self.exponent + 97) << 54) | abs(self.value)
            if self.value > 0:
                bits |= _POSITIVE_BIT
            writer.u64(bits)
        writer.bytes(self.currency)
        writer.bytes(self.issuer)

    @classmethod
    def decode(cls, reader: BinaryReader) -> Amount:
        bits = reader.u64()
        positive = bool(bits & _POSITIVE_BIT)
        if not bits & _NOT_NATIVE_BIT:
            drops = bits & _DROPS_MASK
            if drops == 0 and not positive:
                raise MalformedFieldError("Negative zero native amount is not canonical")
            if drops > MAX_NATIVE_DROPS:
                raise MalformedFieldError(f"Native amount out of range: {drops}")
            return cls(value=drops if positive else -drops)
        currency = reader.bytes(20)
        issuer = reader.bytes(20)
        mantissa = bits & _MANTISSA_MASK
        if mantissa == 0:
            if bits != _NOT_NATIVE_BIT:
                raise MalformedFieldError("Issued zero amount is not canonical")
            return cls(value=0, exponent=ZERO_EXPONENT, currency=currency, issuer=issuer)
        exponent = ((bits >> 54) & 0xFF) - 97
        if not MIN_MANTISSA <= mantissa <= MAX_MANTISSA or not MIN_EXPONENT <= exponent <= MAX_EXPONENT:
            raise MalformedFieldError("Issued amount is not normalized")
        return cls(value=mantissa if positive else -mantissa, exponent=exponent,
                   currency=currency, issuer=issuer)


def _parse_value(text: Any):
    if isinstance(text, bool):
        raise FieldError(f"Invalid amount value: {text!r}")
    if isinstance(text, int):
        return text, 0
    if not isinstance(text, str):
        raise FieldError(f"Invalid amount value: {text!r}")
    match = _VALUE_RE.match(text)
    if not match:
        raise FieldError(f"Invalid amount value: {text!r}")
    sign, whole, frac, exp = match.groups()
    frac = frac or ""
    mantissa = int(whole + frac)
    exponent = int(exp or 0) - len(frac)
    return (-mantissa if sign == "-" else mantissa), exponent


__all__ = [
    "Amount",
    "NATIVE_CURRENCY",
    "currency_to_json",
    "currency_from_json",
]
