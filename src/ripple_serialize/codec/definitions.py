"""
Field definitions for the XRP Ledger canonical binary format.

Every serializable field is identified by a (type code, field code) pair. The
pair fixes both the wire header of the field and its position inside an
object: fields are always ordered by ascending type code, then field code.

The tables below are read-only module data; nothing mutates them at runtime.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Dict, Optional, Tuple


class TypeCode(IntEnum):
    """Serialized type codes."""

    NOT_PRESENT = 0
    UINT16 = 1
    UINT32 = 2
    UINT64 = 3
    HASH128 = 4
    HASH256 = 5
    AMOUNT = 6
    BLOB = 7
    ACCOUNT = 8
    OBJECT = 14
    ARRAY = 15
    UINT8 = 16
    HASH160 = 17
    PATHSET = 18
    VECTOR256 = 19


# Fixed payload widths of the hash types, in bytes.
HASH_WIDTHS = {
    TypeCode.HASH128: 16,
    TypeCode.HASH160: 20,
    TypeCode.HASH256: 32,
}

# Types whose payload carries a variable-length prefix.
VL_ENCODED_TYPES = frozenset({TypeCode.BLOB, TypeCode.ACCOUNT, TypeCode.VECTOR256})


@dataclass(frozen=True, order=True)
class FieldDef:
    """
    Definition of a single field.

    Instances compare by (type_code, nth), which is the canonical field order.
    """

    type_code: int
    nth: int
    name: str = field(compare=False)
    is_serialized: bool = field(default=True, compare=False)
    is_signing_field: bool = field(default=True, compare=False)

    @property
    def field_id(self) -> Tuple[int, int]:
        return (self.type_code, self.nth)

    @property
    def type(self) -> TypeCode:
        return TypeCode(self.type_code)

    @property
    def is_vl_encoded(self) -> bool:
        return self.type_code in VL_ENCODED_TYPES

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"FieldDef({self.name}, {TypeCode(self.type_code).name}, {self.nth})"


_FIELD_TABLE = {
    TypeCode.UINT8: [
        ("CloseResolution", 1),
        ("Method", 2),
        ("TransactionResult", 3),
        ("TickSize", 16),
        ("UNLModifyDisabling", 17),
    ],
    TypeCode.UINT16: [
        ("LedgerEntryType", 1),
        ("TransactionType", 2),
        ("SignerWeight", 3),
        ("TransferFee", 4),
        ("Version", 16),
    ],
    TypeCode.UINT32: [
        ("Flags", 2),
        ("SourceTag", 3),
        ("Sequence", 4),
        ("PreviousTxnLgrSeq", 5),
        ("LedgerSequence", 6),
        ("CloseTime", 7),
        ("ParentCloseTime", 8),
        ("SigningTime", 9),
        ("Expiration", 10),
        ("TransferRate", 11),
        ("WalletSize", 12),
        ("OwnerCount", 13),
        ("DestinationTag", 14),
        ("HighQualityIn", 16),
        ("HighQualityOut", 17),
        ("LowQualityIn", 18),
        ("LowQualityOut", 19),
        ("QualityIn", 20),
        ("QualityOut", 21),
        ("StampEscrow", 22),
        ("BondAmount", 23),
        ("LoadFee", 24),
        ("OfferSequence", 25),
        ("FirstLedgerSequence", 26),
        ("LastLedgerSequence", 27),
        ("TransactionIndex", 28),
        ("OperationLimit", 29),
        ("ReferenceFeeUnits", 30),
        ("ReserveBase", 31),
        ("ReserveIncrement", 32),
        ("SetFlag", 33),
        ("ClearFlag", 34),
        ("SignerQuorum", 35),
        ("CancelAfter", 36),
        ("FinishAfter", 37),
        ("SignerListID", 38),
        ("SettleDelay", 39),
        ("TicketCount", 40),
        ("TicketSequence", 41),
    ],
    TypeCode.UINT64: [
        ("IndexNext", 1),
        ("IndexPrevious", 2),
        ("BookNode", 3),
        ("OwnerNode", 4),
        ("BaseFee", 5),
        ("ExchangeRate", 6),
        ("LowNode", 7),
        ("HighNode", 8),
        ("DestinationNode", 9),
    ],
    TypeCode.HASH128: [
        ("EmailHash", 1),
    ],
    TypeCode.HASH160: [
        ("TakerPaysCurrency", 1),
        ("TakerPaysIssuer", 2),
        ("TakerGetsCurrency", 3),
        ("TakerGetsIssuer", 4),
    ],
    TypeCode.HASH256: [
        ("LedgerHash", 1),
        ("ParentHash", 2),
        ("TransactionHash", 3),
        ("AccountHash", 4),
        ("PreviousTxnID", 5),
        ("LedgerIndex", 6),
        ("WalletLocator", 7),
        ("RootIndex", 8),
        ("AccountTxnID", 9),
        ("BookDirectory", 16),
        ("InvoiceID", 17),
        ("Nickname", 18),
        ("Amendment", 19),
        ("Digest", 21),
        ("Channel", 22),
        ("ConsensusHash", 23),
        ("CheckID", 24),
        ("ValidatedHash", 25),
    ],
    TypeCode.AMOUNT: [
        ("Amount", 1),
        ("Balance", 2),
        ("LimitAmount", 3),
        ("TakerPays", 4),
        ("TakerGets", 5),
        ("LowLimit", 6),
        ("HighLimit", 7),
        ("Fee", 8),
        ("SendMax", 9),
        ("DeliverMin", 10),
        ("MinimumOffer", 16),
        ("RippleEscrow", 17),
        ("DeliveredAmount", 18),
    ],
    TypeCode.BLOB: [
        ("PublicKey", 1),
        ("MessageKey", 2),
        ("SigningPubKey", 3),
        ("TxnSignature", 4),
        ("Signature", 6),
        ("Domain", 7),
        ("FundCode", 8),
        ("RemoveCode", 9),
        ("ExpireCode", 10),
        ("CreateCode", 11),
        ("MemoType", 12),
        ("MemoData", 13),
        ("MemoFormat", 14),
        ("Fulfillment", 16),
        ("Condition", 17),
        ("MasterSignature", 18),
    ],
    TypeCode.ACCOUNT: [
        ("Account", 1),
        ("Owner", 2),
        ("Destination", 3),
        ("Issuer", 4),
        ("Authorize", 5),
        ("Unauthorize", 6),
        ("RegularKey", 8),
    ],
    TypeCode.OBJECT: [
        ("ObjectEndMarker", 1),
        ("TransactionMetaData", 2),
        ("CreatedNode", 3),
        ("DeletedNode", 4),
        ("ModifiedNode", 5),
        ("PreviousFields", 6),
        ("FinalFields", 7),
        ("NewFields", 8),
        ("TemplateEntry", 9),
        ("Memo", 10),
        ("SignerEntry", 11),
        ("Signer", 16),
        ("Majority", 18),
        ("DisabledValidator", 19),
    ],
    TypeCode.ARRAY: [
        ("ArrayEndMarker", 1),
        ("Signers", 3),
        ("SignerEntries", 4),
        ("Template", 5),
        ("Necessary", 6),
        ("Sufficient", 7),
        ("AffectedNodes", 8),
        ("Memos", 9),
        ("Majorities", 16),
        ("DisabledValidators", 17),
    ],
    TypeCode.PATHSET: [
        ("Paths", 1),
    ],
    TypeCode.VECTOR256: [
        ("Indexes", 1),
        ("Hashes", 2),
        ("Amendments", 3),
    ],
}

# Fields excluded from the data that gets signed.
_NON_SIGNING_FIELDS = frozenset({"TxnSignature", "Signers"})


def _build_fields() -> Dict[str, FieldDef]:
    fields_by_name: Dict[str, FieldDef] = {}
    for type_code, entries in _FIELD_TABLE.items():
        for name, nth in entries:
            fields_by_name[name] = FieldDef(
                type_code=int(type_code),
                nth=nth,
                name=name,
                is_serialized=True,
                is_signing_field=name not in _NON_SIGNING_FIELDS,
            )
    # Computed transaction hash: carried in JSON, never on the wire.
    fields_by_name["hash"] = FieldDef(
        type_code=int(TypeCode.HASH256),
        nth=257,
        name="hash",
        is_serialized=False,
        is_signing_field=False,
    )
    return fields_by_name


FIELDS_BY_NAME: Dict[str, FieldDef] = _build_fields()
FIELDS_BY_ID: Dict[Tuple[int, int], FieldDef] = {
    f.field_id: f for f in FIELDS_BY_NAME.values() if f.is_serialized
}

OBJECT_END_MARKER = FIELDS_BY_NAME["ObjectEndMarker"]
ARRAY_END_MARKER = FIELDS_BY_NAME["ArrayEndMarker"]


def get_field(name: str) -> FieldDef:
    """
    Look up a field by name.

    Raises:
        KeyError: If the name is not a known field
    """
    return FIELDS_BY_NAME[name]


def find_field(type_code: int, nth: int) -> Optional[FieldDef]:
    """Look up a serialized field by its header codes."""
    return FIELDS_BY_ID.get((type_code, nth))


TRANSACTION_TYPES: Dict[str, int] = {
    "Payment": 0,
    "EscrowCreate": 1,
    "EscrowFinish": 2,
    "AccountSet": 3,
    "EscrowCancel": 4,
    "SetRegularKey": 5,
    "NickNameSet": 6,
    "OfferCreate": 7,
    "OfferCancel": 8,
    "Contract": 9,
    "TicketCreate": 10,
    "TicketCancel": 11,
    "SignerListSet": 12,
    "PaymentChannelCreate": 13,
    "PaymentChannelFund": 14,
    "PaymentChannelClaim": 15,
    "CheckCreate": 16,
    "CheckCash": 17,
    "CheckCancel": 18,
    "DepositPreauth": 19,
    "TrustSet": 20,
    "AccountDelete": 21,
    "EnableAmendment": 100,
    "SetFee": 101,
    "UNLModify": 102,
}

LEDGER_ENTRY_TYPES: Dict[str, int] = {
    "AccountRoot": 0x61,
    "DirectoryNode": 0x64,
    "RippleState": 0x72,
    "Ticket": 0x54,
    "SignerList": 0x53,
    "Offer": 0x6F,
    "LedgerHashes": 0x68,
    "Amendments": 0x66,
    "FeeSettings": 0x73,
    "Escrow": 0x75,
    "PayChannel": 0x78,
    "Check": 0x43,
    "DepositPreauth": 0x70,
    "NegativeUNL": 0x4E,
}

TRANSACTION_RESULTS: Dict[str, int] = {
    "tesSUCCESS": 0,
    "tecCLAIM": 100,
    "tecPATH_PARTIAL": 101,
    "tecUNFUNDED_ADD": 102,
    "tecUNFUNDED_OFFER": 103,
    "tecUNFUNDED_PAYMENT": 104,
    "tecFAILED_PROCESSING": 105,
    "tecDIR_FULL": 121,
    "tecINSUF_RESERVE_LINE": 122,
    "tecINSUF_RESERVE_OFFER": 123,
    "tecNO_DST": 124,
    "tecNO_DST_INSUF_XRP": 125,
    "tecNO_LINE_INSUF_RESERVE": 126,
    "tecNO_LINE_REDUNDANT": 127,
    "tecPATH_DRY": 128,
    "tecUNFUNDED": 129,
    "tecNO_ALTERNATIVE_KEY": 130,
    "tecNO_REGULAR_KEY": 131,
    "tecOWNERS": 132,
    "tecNO_ISSUER": 133,
    "tecNO_AUTH": 134,
    "tecNO_LINE": 135,
    "tecINSUFF_FEE": 136,
    "tecFROZEN": 137,
    "tecNO_TARGET": 138,
    "tecNO_PERMISSION": 139,
    "tecNO_ENTRY": 140,
    "tecINSUFFICIENT_RESERVE": 141,
    "tecNEED_MASTER_KEY": 142,
    "tecDST_TAG_NEEDED": 143,
    "tecINTERNAL": 144,
    "tecOVERSIZE": 145,
    "tecCRYPTOCONDITION_ERROR": 146,
    "tecINVARIANT_FAILED": 147,
    "tecEXPIRED": 148,
    "tecDUPLICATE": 149,
    "tecKILLED": 150,
    "tecHAS_OBLIGATIONS": 151,
    "tecTOO_SOON": 152,
}

# Integer fields whose JSON form is a symbolic name.
NAMED_VALUES: Dict[str, Dict[str, int]] = {
    "TransactionType": TRANSACTION_TYPES,
    "LedgerEntryType": LEDGER_ENTRY_TYPES,
    "TransactionResult": TRANSACTION_RESULTS,
}

NAMES_BY_VALUE: Dict[str, Dict[int, str]] = {
    field_name: {v: k for k, v in table.items()}
    for field_name, table in NAMED_VALUES.items()
}


__all__ = [
    "TypeCode",
    "FieldDef",
    "HASH_WIDTHS",
    "FIELDS_BY_NAME",
    "FIELDS_BY_ID",
    "OBJECT_END_MARKER",
    "ARRAY_END_MARKER",
    "get_field",
    "find_field",
    "TRANSACTION_TYPES",
    "LEDGER_ENTRY_TYPES",
    "TRANSACTION_RESULTS",
    "NAMED_VALUES",
    "NAMES_BY_VALUE",
]
