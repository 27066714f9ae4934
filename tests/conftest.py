"""
Shared fixtures: well-known keys, a sample payment and a scratch key file path.
"""

import pytest

from ripple_serialize.crypto.key_type import KeyType
from ripple_serialize.keys.ripple_key import RippleKey

PASSPHRASE = "masterpassphrase"
GENESIS_ADDRESS = "rHb9CJAWyB4rj91VRWn96DkukG4bwdtyTh"


@pytest.fixture
def master_key():
    """SECP256K1 key of the genesis account."""
    return RippleKey.from_seed_string(KeyType.SECP256K1, PASSPHRASE)


@pytest.fixture
def ed25519_key():
    """Ed25519 key derived from the genesis passphrase."""
    return RippleKey.from_seed_string(KeyType.ED25519, PASSPHRASE)


@pytest.fixture
def alice():
    return RippleKey.from_seed_string(KeyType.SECP256K1, "alice")


@pytest.fixture
def bob():
    return RippleKey.from_seed_string(KeyType.ED25519, "bob")


@pytest.fixture
def payment_json(alice):
    """An unsigned XRP payment from the genesis account to alice."""
    return {
        "TransactionType": "Payment",
        "Account": GENESIS_ADDRESS,
        "Destination": alice.address,
        "Amount": "1000000",
        "Fee": "10",
        "Sequence": 1,
        "Flags": 2147483648,
    }


@pytest.fixture
def keyfile(tmp_path):
    return tmp_path / ".ripple" / "secret-key.txt"
