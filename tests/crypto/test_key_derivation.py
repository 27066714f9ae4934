"""
Seed parsing, key derivation and signature tests.

Known values are those of the genesis account, whose seed is derived from the
passphrase "masterpassphrase".
"""

import pytest
from ecdsa.util import sigdecode_der

from ripple_serialize.codec.base58 import (
    TokenType,
    decode_token,
    encode_account_id,
    encode_token,
)
from ripple_serialize.codec.hashes import calc_account_id
from ripple_serialize.crypto import ed25519, secp256k1
from ripple_serialize.crypto.key_type import KeyType
from ripple_serialize.crypto.seed import (
    SEED_SIZE,
    generate_seed,
    parse_generic_seed,
    random_seed,
    seed_as_1751,
    seed_from_1751,
)
from ripple_serialize.runtime.errors import InvalidKeyTypeError

MASTER_SEED = "snoPBrXtMeMyMHUVTgbuqAfg1SUTb"
MASTER_SEED_HEX = "DEDCE9CE67B451D852FD4E846FCDE31C"
MASTER_KEY_WORDS = "I IRE BOND BOW TRIO LAID SEAT GOAL HEN IBIS IBIS DARE"
MASTER_PUBLIC = "aBQG8RQAzjs1eTKFEAQXr2gS4utcDiEC9wmi7pfUPTi27VCahwgw"
MASTER_PUBLIC_HEX = "0330E7FC9D56BB25D6893BA3F317AE5BCF33B3291BD63DB32654A313222F7FD020"
MASTER_ADDRESS = "rHb9CJAWyB4rj91VRWn96DkukG4bwdtyTh"
MASTER_ED25519_PUBLIC = "aKGheSBjmCsKJVuLNKRAKpZXT6wpk2FCuEZAXJupXgdAxX5THCqR"


class TestKeyType:
    """Test key type tokens."""

    def test_from_string(self):
        assert KeyType.from_string("secp256k1") is KeyType.SECP256K1
        assert KeyType.from_string("ed25519") is KeyType.ED25519
        assert str(KeyType.ED25519) == "ed25519"
        assert KeyType.default() is KeyType.SECP256K1

    @pytest.mark.parametrize("text", ["", "ED25519", "rsa", "sha1"])
    def test_invalid(self, text):
        with pytest.raises(InvalidKeyTypeError) as exc:
            KeyType.from_string(text)
        assert str(exc.value) == f'Invalid key type: "{text}"'


class TestSeeds:
    """Test seed generation and the seed text forms."""

    def test_passphrase(self):
        seed = generate_seed("masterpassphrase")
        assert seed.hex().upper() == MASTER_SEED_HEX

    def test_random(self):
        a, b = random_seed(), random_seed()
        assert len(a) == SEED_SIZE
        assert a != b

    def test_rfc1751(self):
        seed = bytes.fromhex(MASTER_SEED_HEX)
        assert seed_as_1751(seed) == MASTER_KEY_WORDS
        assert seed_from_1751(MASTER_KEY_WORDS) == seed
        assert seed_from_1751(MASTER_KEY_WORDS.lower()) == seed

    @pytest.mark.parametrize("text", [
        MASTER_SEED,
        MASTER_SEED_HEX,
        MASTER_SEED_HEX.lower(),
        MASTER_KEY_WORDS,
        "masterpassphrase",
    ])
    def test_generic_forms(self, text):
        assert parse_generic_seed(text).hex().upper() == MASTER_SEED_HEX

    def test_bad_words_fall_back_to_passphrase(self):
        text = "I IRE BOND BOW TRIO LAID SEAT GOAL HEN IBIS IBIS DRAGONFLY"
        assert parse_generic_seed(text) == generate_seed(text)

    def test_empty(self):
        assert parse_generic_seed("") is None

    def test_refuses_key_tokens(self):
        public = bytes.fromhex(MASTER_PUBLIC_HEX)
        secret = bytes(31) + b"\x01"
        for text in (
            MASTER_ADDRESS,
            MASTER_PUBLIC,
            encode_token(TokenType.NODE_PUBLIC, public),
            encode_token(TokenType.ACCOUNT_SECRET, secret),
            encode_token(TokenType.NODE_PRIVATE, secret),
        ):
            assert parse_generic_seed(text) is None, text


class TestSecp256k1:
    """Test SECP256K1 derivation and signing."""

    def test_master_keypair(self):
        public, secret = secp256k1.derive_keypair(bytes.fromhex(MASTER_SEED_HEX))
        assert public.hex().upper() == MASTER_PUBLIC_HEX
        assert encode_token(TokenType.ACCOUNT_PUBLIC, public) == MASTER_PUBLIC
        assert encode_account_id(calc_account_id(public)) == MASTER_ADDRESS
        assert len(secret) == 32
        assert secp256k1.public_key_from_secret(secret) == public

    def test_account_index(self):
        seed = bytes.fromhex(MASTER_SEED_HEX)
        assert secp256k1.derive_keypair(seed, 1) != secp256k1.derive_keypair(seed, 0)

    def test_secret_out_of_range(self):
        with pytest.raises(secp256k1.Secp256k1Error):
            secp256k1.public_key_from_secret(bytes(32))

    def test_sign_is_deterministic(self):
        public, secret = secp256k1.derive_keypair(bytes.fromhex(MASTER_SEED_HEX))
        sig = secp256k1.sign(secret, b"message")
        assert sig == secp256k1.sign(secret, b"message")
        assert sig[0] == 0x30
        assert secp256k1.verify(public, b"message", sig)

    def test_low_s(self):
        _, secret = secp256k1.derive_keypair(bytes.fromhex(MASTER_SEED_HEX))
        for i in range(16):
            sig = secp256k1.sign(secret, bytes([i]) * 10)
            r, s = sigdecode_der(sig, secp256k1.ORDER)
            assert s <= secp256k1.ORDER // 2

    def test_verify_rejects(self):
        public, secret = secp256k1.derive_keypair(bytes.fromhex(MASTER_SEED_HEX))
        sig = secp256k1.sign(secret, b"message")
        assert not secp256k1.verify(public, b"massage", sig)
        assert not secp256k1.verify(public, b"message", sig[:-1])
        assert not secp256k1.verify(public, b"message", b"")
        assert not secp256k1.verify(bytes(33), b"message", sig)


class TestEd25519:
    """Test Ed25519 derivation and signing."""

    def test_master_keypair(self):
        public, secret = ed25519.derive_keypair(bytes.fromhex(MASTER_SEED_HEX))
        assert public[0] == ed25519.PUBLIC_KEY_PREFIX
        assert len(public) == 33
        assert encode_token(TokenType.ACCOUNT_PUBLIC, public) == MASTER_ED25519_PUBLIC
        assert ed25519.public_key_from_secret(secret) == public

    def test_sign(self):
        public, secret = ed25519.derive_keypair(bytes.fromhex(MASTER_SEED_HEX))
        sig = ed25519.sign(secret, b"message")
        assert len(sig) == 64
        assert ed25519.verify(public, b"message", sig)
        assert not ed25519.verify(public, b"massage", sig)
        assert not ed25519.verify(public[1:], b"message", sig)
        assert not ed25519.verify(public, b"message", sig[:63])

    def test_bad_secret_length(self):
        with pytest.raises(ed25519.Ed25519Error):
            ed25519.public_key_from_secret(bytes(31))

    def test_token_decodes_to_prefixed_key(self):
        payload = decode_token(TokenType.ACCOUNT_PUBLIC, MASTER_ED25519_PUBLIC)
        assert ed25519.is_ed25519_public_key(payload)
