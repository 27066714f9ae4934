"""
RippleKey: a signing key derived from a seed.

The public and secret keys are always re-derived from (key type, seed). They
are never set independently, and the copies stored in a key file are not
trusted when it is loaded.
"""

from __future__ import annotations
import logging
from typing import Optional, Union

from ..codec.base58 import TokenType, encode_account_id, encode_seed, encode_token
from ..codec.hashes import calc_account_id
from ..crypto import ed25519, secp256k1
from ..crypto.key_type import KeyType
from ..crypto.seed import SEED_SIZE, parse_generic_seed, random_seed, seed_as_1751
from ..runtime.errors import InvalidKeyTypeError, MissingFieldError, SeedParseError
from .keyfile import KeyFileRecord, PathLike, read_key_file, write_key_file

logger = logging.getLogger(__name__)


class RippleKey:
    """
    Read-only signing key.

    Attributes:
        key_type: Signature algorithm
        seed: 16-byte seed
        public_key: 33-byte public key
        secret_key: 32-byte secret key
    """

    def __init__(self, key_type: Optional[Union[KeyType, str]] = None,
                 seed: Optional[bytes] = None):
        """
        Derive a key.

        Args:
            key_type: Key type; SECP256K1 when omitted
            seed: 16-byte seed; a random seed when omitted

        Raises:
            InvalidKeyTypeError: If key_type is not a known key type
            SeedParseError: If seed is not 16 bytes
        """
        self._key_type = KeyType.from_string(key_type) if key_type is not None else KeyType.default()
        if seed is None:
            seed = random_seed()
        if len(seed) != SEED_SIZE:
            raise SeedParseError(f"Seed must be {SEED_SIZE} bytes, got {len(seed)}")
        self._seed = bytes(seed)

        if self._key_type == KeyType.ED25519:
            self._public_key, self._secret_key = ed25519.derive_keypair(self._seed)
        else:
            self._public_key, self._secret_key = secp256k1.derive_keypair(self._seed)

    @property
    def key_type(self) -> KeyType:
        return self._key_type

    @property
    def seed(self) -> bytes:
        return self._seed

    @property
    def public_key(self) -> bytes:
        return self._public_key

    @property
    def secret_key(self) -> bytes:
        return self._secret_key

    @property
    def account_id(self) -> bytes:
        """20-byte account ID of the public key."""
        return calc_account_id(self._public_key)

    @property
    def address(self) -> str:
        """The account ID as an "r..." address."""
        return encode_account_id(self.account_id)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RippleKey):
            return NotImplemented
        return self._key_type == other._key_type and self._seed == other._seed

    def __hash__(self) -> int:
        return hash((self._key_type, self._seed))

    def __repr__(self) -> str:
        return f"RippleKey({self._key_type.value}, {self.address})"

    @classmethod
    def from_seed_string(cls, key_type: Optional[Union[KeyType, str]], text: str) -> RippleKey:
        """
        Build a key from seed text or a passphrase.

        Raises:
            SeedParseError: If the text is empty or is an account or key token
        """
        seed = parse_generic_seed(text)
        if seed is None:
            raise SeedParseError(f"Unable to parse seed: {text}")
        return cls(key_type, seed)

    @classmethod
    def from_options(cls, key_type: Optional[Union[KeyType, str]] = None,
                     seed_text: Optional[str] = None) -> RippleKey:
        """Build a key from an optional key type and optional seed text."""
        if seed_text is None:
            return cls(key_type)
        return cls.from_seed_string(key_type, seed_text)

    @classmethod
    def from_file(cls, path: PathLike) -> RippleKey:
        """
        Load a key from a key file.

        Only ``key_type`` and ``master_seed`` are used; the derived members
        are ignored.

        Raises:
            FileOpenError: If the file cannot be read
            JsonParseError: If the file is not a JSON object
            MissingFieldError: If key_type or master_seed is absent
            InvalidKeyTypeError: If key_type is not a known key type
            SeedParseError: If master_seed cannot be parsed
        """
        data = read_key_file(path)

        if "key_type" not in data:
            raise MissingFieldError(f"Field 'key_type' is missing from key file: {path}", "key_type")
        raw_type = data["key_type"]
        try:
            key_type = KeyType.from_string(raw_type) if isinstance(raw_type, str) else None
        except InvalidKeyTypeError:
            key_type = None
        if key_type is None:
            raise InvalidKeyTypeError(
                f'Invalid \'key_type\' field "{raw_type}" found in key file: {path}', key_type=str(raw_type))

        if "master_seed" not in data:
            raise MissingFieldError(f"Field 'master_seed' is missing from key file: {path}", "master_seed")
        raw_seed = data["master_seed"]
        seed = parse_generic_seed(raw_seed) if isinstance(raw_seed, str) else None
        if seed is None:
            raise SeedParseError(f"Invalid 'master_seed' field found in key file: {path}")

        key = cls(key_type, seed)
        logger.debug(f"Loaded {key_type.value} key for {key.address} from {path}")
        return key

    def to_record(self) -> KeyFileRecord:
        """Compute every key file member from the key type and seed."""
        return KeyFileRecord(
            key_type=self._key_type.value,
            master_seed=encode_seed(self._seed),
            master_seed_hex=self._seed.hex().upper(),
            master_key=seed_as_1751(self._seed),
            public_key=encode_token(TokenType.ACCOUNT_PUBLIC, self._public_key),
            public_key_hex=self._public_key.hex().upper(),
            secret_key=encode_token(TokenType.ACCOUNT_SECRET, self._secret_key),
            secret_key_hex=self._secret_key.hex().upper(),
            account_id=self.address,
        )

    def write_to_file(self, path: PathLike) -> KeyFileRecord:
        """
        Write the key to a key file, overwriting any existing file.

        Returns:
            The record that was written

        Raises:
            DirectoryCreateError: If the parent directory cannot be created
            FileOpenError: If the file cannot be written
        """
        record = self.to_record()
        write_key_file(record, path)
        return record

    def sign(self, message: bytes) -> bytes:
        """
        Sign a message with the algorithm of the key type.

        SECP256K1 signs SHA-512-half of the message; Ed25519 signs the
        message itself.
        """
        if self._key_type == KeyType.ED25519:
            return ed25519.sign(self._secret_key, message)
        return secp256k1.sign(self._secret_key, message)

    def verify(self, message: bytes, signature: bytes) -> bool:
        return verify_signature(self._public_key, message, signature)


def verify_signature(public_key: bytes, message: bytes, signature: bytes) -> bool:
    """
    Verify a signature, choosing the algorithm from the public key.

    Args:
        public_key: 0xED-prefixed Ed25519 key or compressed SECP256K1 key
        message: Message that was signed
        signature: Signature bytes

    Returns:
        True if signature is valid
    """
    if ed25519.is_ed25519_public_key(public_key):
        return ed25519.verify(public_key, message, signature)
    if len(public_key) == 33 and public_key[0] in (0x02, 0x03):
        return secp256k1.verify(public_key, message, signature)
    return False


__all__ = [
    "RippleKey",
    "verify_signature",
]
