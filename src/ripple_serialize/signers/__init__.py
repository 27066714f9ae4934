"""
Transaction signing for ripple-serialize.
"""

from .signer import (
    SigningMode,
    signing_data,
    multi_signing_data,
    compute_signing_hash,
    single_sign,
    multi_sign,
    check_signature,
)

__all__ = [
    "SigningMode",
    "signing_data",
    "multi_signing_data",
    "compute_signing_hash",
    "single_sign",
    "multi_sign",
    "check_signature",
]
