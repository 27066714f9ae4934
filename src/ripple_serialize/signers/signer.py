"""
Transaction signing.

Single signing stores one signature in ``TxnSignature`` with the signer's key
in ``SigningPubKey``. Multi signing leaves ``SigningPubKey`` empty and adds
one ``Signer`` entry per account to the ``Signers`` array, which is kept in
ascending order of raw account ID.

The data signed is a hash prefix followed by the serialization of the
signing fields only, so ``TxnSignature`` and ``Signers`` never cover
themselves. Multi-signing data ends with the signing account's ID, which
makes each signer's signature specific to its account.
"""

from __future__ import annotations
import logging
from bisect import bisect_left
from enum import Enum
from typing import List, Optional, Tuple, Union

from ..codec.base58 import encode_account_id
from ..codec.binary import to_binary
from ..codec.hashes import HashPrefix, sha512_half
from ..keys.ripple_key import RippleKey, verify_signature
from ..runtime.errors import SigningError
from ..tx.object import STObject
from ..tx.transaction import Transaction

logger = logging.getLogger(__name__)

TxLike = Union[Transaction, STObject]


class SigningMode(str, Enum):
    SINGLE = "single"
    MULTI = "multi"


def _object_of(tx: TxLike) -> STObject:
    return tx.object if isinstance(tx, Transaction) else tx


def signing_data(tx: TxLike) -> bytes:
    """Data covered by a single signature."""
    return HashPrefix.TX_SIGN + to_binary(_object_of(tx), signing_only=True)


def multi_signing_data(tx: TxLike, account_id: bytes) -> bytes:
    """
    Data covered by one multi-signature.

    Args:
        tx: Transaction
        account_id: 20-byte ID of the signing account

    Returns:
        Multi-sign prefix, signing fields, then the account ID
    """
    if len(account_id) != 20:
        raise SigningError(f"Account ID must be 20 bytes, got {len(account_id)}")
    return HashPrefix.TX_MULTI_SIGN + to_binary(_object_of(tx), signing_only=True) + account_id


def compute_signing_hash(tx: TxLike, mode: SigningMode = SigningMode.SINGLE,
                         account_id: Optional[bytes] = None) -> bytes:
    """
    Compute the signing hash of a transaction.

    Args:
        tx: Transaction
        mode: Single or multi signing
        account_id: Signing account, required for multi signing

    Returns:
        32-byte SHA-512-half of the signing data

    Raises:
        SigningError: If multi signing without an account ID
    """
    if SigningMode(mode) == SigningMode.MULTI:
        if account_id is None:
            raise SigningError("Multi-signing hash requires an account ID")
        return sha512_half(multi_signing_data(tx, account_id))
    return sha512_half(signing_data(tx))


def single_sign(tx: TxLike, key: RippleKey) -> None:
    """
    Sign a transaction for submission, replacing any earlier signatures.

    Args:
        tx: Transaction, modified in place
        key: Signing key
    """
    obj = _object_of(tx)
    obj.make_field_absent("Signers")
    obj["SigningPubKey"] = key.public_key
    obj["TxnSignature"] = key.sign(signing_data(obj))
    logger.debug(f"Single signed transaction with {key.address}")


def multi_sign(tx: TxLike, key: RippleKey) -> None:
    """
    Add the key's signature to the signer list.

    The entry is inserted in account order. An existing entry for the same
    account is replaced.

    Args:
        tx: Transaction, modified in place
        key: Signing key
    """
    obj = _object_of(tx)
    obj["SigningPubKey"] = b""
    obj.make_field_absent("TxnSignature")

    account = key.account_id
    entry = STObject({
        "Account": account,
        "SigningPubKey": key.public_key,
        "TxnSignature": key.sign(multi_signing_data(obj, account)),
    }, field="Signer")

    signers: List[STObject] = list(obj.get("Signers", []))
    accounts = [s["Account"] for s in signers]
    i = bisect_left(accounts, account)
    if i < len(signers) and accounts[i] == account:
        signers[i] = entry
        logger.debug(f"Replaced signer entry for {key.address}")
    else:
        signers.insert(i, entry)
        logger.debug(f"Added signer entry for {key.address} ({len(signers)} signers)")
    obj["Signers"] = signers


def check_signature(tx: TxLike) -> Tuple[bool, str]:
    """
    Verify the signatures of a transaction.

    A transaction with a non-empty ``SigningPubKey`` is checked as single
    signed. Otherwise it must carry a ``Signers`` array in strictly
    ascending account order that does not include the transaction's own
    account, and every entry must verify.

    Returns:
        Tuple of (valid, reason); reason is empty when valid
    """
    obj = _object_of(tx)
    if "SigningPubKey" not in obj:
        return False, "Missing SigningPubKey."
    public_key = obj["SigningPubKey"]

    if public_key:
        signature = obj.get("TxnSignature")
        if not signature:
            return False, "Missing TxnSignature."
        if not verify_signature(public_key, signing_data(obj), signature):
            return False, "Invalid signature."
        return True, ""

    signers = obj.get("Signers")
    if signers is None:
        return False, "Empty SigningPubKey."
    if not signers:
        return False, "Invalid Signers array size."

    tx_account = obj.get("Account")
    last: Optional[bytes] = None
    for entry in signers:
        account = entry.get("Account")
        signer_key = entry.get("SigningPubKey")
        signature = entry.get("TxnSignature")
        if account is None or signer_key is None or signature is None:
            return False, "Invalid signer entry."
        if account == tx_account:
            return False, "Invalid multisigner."
        if last is not None and last >= account:
            return False, "Unsorted Signers array."
        last = account
        if not verify_signature(signer_key, multi_signing_data(obj, account), signature):
            return False, f"Invalid signature on account {encode_account_id(account)}."
    return True, ""


__all__ = [
    "SigningMode",
    "signing_data",
    "multi_signing_data",
    "compute_signing_hash",
    "single_sign",
    "multi_sign",
    "check_signature",
]
