"""
Accounts
^^^^^^^^

.. contents:: Table of Contents
    :backlinks: none
    :local:

Introduction
------------

The `Account` record and its codec.

An account has four fields, all kept as raw byte strings:

- `nonce` and `balance`, unsigned integers in minimal big endian form
  (zero is the empty string);
- `state_root`, the 32 byte root of the account's storage trie;
- `code_hash`, the 32 byte keccak256 hash of the account's code.

Accounts are built by `decode_account()` from one of three shapes: RLP
encoded bytes, an ordered sequence of fields, or a mapping of field names
to values. Whatever the shape, the result is fully defaulted and satisfies
the hash length invariants.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from ethereum_rlp import rlp
from ethereum_rlp.exceptions import DecodingError
from ethereum_types.bytes import Bytes
from ethereum_types.numeric import Uint, Unsigned

from .crypto.hash import Hash32, keccak256
from .exceptions import DecodeError, ValidationError
from .utils.ensure import ensure
from .utils.hexadecimal import bytes_to_hex, hex_to_bytes

Root = Hash32

HASH_LENGTH = 32

# keccak256(RLP(b"")), the root of a trie with no entries:
#
#   56e81f171bcc55a6ff8345e692c0f86e5b48e01b996cadc001622fb5e363b421 # noqa: E501,SC10
EMPTY_TRIE_ROOT = Root(keccak256(rlp.encode(b"")))

# keccak256(b""), the code hash of an account without code:
#
#   c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470 # noqa: E501,SC10
EMPTY_CODE_HASH = Hash32(keccak256(b""))

FIELD_NAMES = ("nonce", "balance", "stateRoot", "codeHash")

_FIELD_ALIASES = {
    "nonce": ("nonce",),
    "balance": ("balance",),
    "stateRoot": ("stateRoot", "state_root"),
    "codeHash": ("codeHash", "code_hash"),
}

AccountData = Union[
    None, str, Bytes, bytearray, memoryview, Sequence[Any], Mapping[str, Any]
]


@dataclass
class Account:
    """
    State associated with an address.

    Only `state_root` and `code_hash` change after construction, and only
    through `ethereum_account.state`. Every change replaces the field with
    a new byte string.
    """

    nonce: Bytes = b""
    balance: Bytes = b""
    state_root: Root = EMPTY_TRIE_ROOT
    code_hash: Hash32 = EMPTY_CODE_HASH

    def __post_init__(self) -> None:
        self.nonce = bytes(self.nonce)
        self.balance = bytes(self.balance)
        self.state_root = _hash_field("stateRoot", self.state_root)
        self.code_hash = _hash_field("codeHash", self.code_hash)

    @classmethod
    def decode(cls, data: AccountData = None) -> "Account":
        """
        Build an account from encoded bytes, an ordered sequence or a
        mapping. See `decode_account()`.
        """
        return decode_account(data)

    @property
    def raw(self) -> Tuple[Bytes, Bytes, Root, Hash32]:
        """
        The four fields in wire order.
        """
        return (self.nonce, self.balance, self.state_root, self.code_hash)

    @property
    def nonce_value(self) -> Uint:
        """
        The nonce as an integer.
        """
        return Uint.from_be_bytes(self.nonce)

    @property
    def balance_value(self) -> Uint:
        """
        The balance as an integer.
        """
        return Uint.from_be_bytes(self.balance)

    def serialize(self) -> Bytes:
        """
        RLP encode the account as `[nonce, balance, state_root, code_hash]`.

        Fields are encoded exactly as held, without padding or trimming.
        """
        return rlp.encode([bytes(field) for field in self.raw])

    def is_contract(self) -> bool:
        """
        Returns `True` if the account has code.
        """
        return self.code_hash != EMPTY_CODE_HASH

    def is_empty(self) -> bool:
        """
        Returns `True` if the account has no nonce, no balance, no code and
        no storage.
        """
        return (
            self.balance == b""
            and self.nonce == b""
            and self.code_hash == EMPTY_CODE_HASH
            and self.state_root == EMPTY_TRIE_ROOT
        )

    def to_display(
        self, labeled: bool = False
    ) -> Union[List[str], Dict[str, str]]:
        """
        Render the account for humans as `0x`-prefixed hex strings.

        Parameters
        ----------
        labeled :
            Return a mapping keyed by field name instead of a list in wire
            order.

        Returns
        -------
        display : `Union[List[str], Dict[str, str]]`
            The rendered fields.
        """
        rendered = [bytes_to_hex(field) for field in self.raw]
        if labeled:
            return dict(zip(FIELD_NAMES, rendered))
        return rendered


def to_bytes(value: Any) -> Bytes:
    """
    Coerce a single field value into a byte string.

    Accepts byte strings, hex strings (with or without `0x`), non-negative
    integers (encoded as minimal big endian), `ethereum_types` unsigned
    integers, objects implementing `__bytes__`, and `None`.

    A lone zero byte is normalized to the empty string, since no field
    stores a literal zero byte.
    """
    result: Bytes
    if value is None:
        result = b""
    elif isinstance(value, (bytes, bytearray, memoryview)):
        result = bytes(value)
    elif isinstance(value, str):
        result = hex_to_bytes(value)
    elif isinstance(value, (int, Unsigned)):
        try:
            result = Uint(value).to_be_bytes()
        except OverflowError as e:
            raise DecodeError(f"negative integer {value!r}") from e
    elif hasattr(value, "__bytes__"):
        result = bytes(value)
    else:
        raise DecodeError(
            f"cannot convert {type(value).__name__} to bytes"
        )

    if result == b"\x00":
        return b""
    return result


def decode_account(data: AccountData = None) -> Account:
    """
    Build an `Account` from any of the supported input shapes.

    Parameters
    ----------
    data :
        One of:

        - `None`, `b""` or `""`: every field takes its default;
        - RLP encoded bytes, or a hex string of them (optionally `0x`
          prefixed), holding a list of exactly four byte strings;
        - a sequence of up to four values, mapped positionally to
          `nonce`, `balance`, `stateRoot` and `codeHash`;
        - a mapping with optional `nonce`, `balance`, `stateRoot` and
          `codeHash` entries.

    Returns
    -------
    account : `Account`
        The decoded account.

    Raises
    ------
    DecodeError
        If the data is malformed or of an unsupported shape.
    ValidationError
        If `stateRoot` or `codeHash` is not 32 bytes long.
    """
    fields: List[Optional[Bytes]]
    if isinstance(data, str):
        data = hex_to_bytes(data)

    if data is None or (
        isinstance(data, (bytes, bytearray, memoryview)) and len(data) == 0
    ):
        fields = [None] * 4
    elif isinstance(data, (bytes, bytearray, memoryview)):
        fields = _fields_from_rlp(bytes(data))
    elif isinstance(data, Mapping):
        fields = _fields_from_mapping(data)
    elif isinstance(data, Sequence):
        fields = _fields_from_sequence(data)
    else:
        raise DecodeError("invalid data")

    nonce, balance, state_root, code_hash = fields
    return Account(
        nonce=b"" if nonce is None else nonce,
        balance=b"" if balance is None else balance,
        state_root=EMPTY_TRIE_ROOT if state_root is None else state_root,
        code_hash=EMPTY_CODE_HASH if code_hash is None else code_hash,
    )


def _fields_from_rlp(encoded: Bytes) -> List[Optional[Bytes]]:
    try:
        decoded = rlp.decode(encoded)
    except DecodingError as e:
        raise DecodeError("invalid account encoding") from e

    ensure(
        not isinstance(decoded, bytes),
        lambda: DecodeError("expected an RLP list, got a byte string"),
    )
    ensure(
        len(decoded) == 4,
        lambda: DecodeError(f"expected 4 fields, got {len(decoded)}"),
    )
    ensure(
        all(isinstance(item, bytes) for item in decoded),
        lambda: DecodeError("account fields must be byte strings"),
    )
    return [to_bytes(item) for item in decoded]


def _fields_from_sequence(values: Sequence[Any]) -> List[Optional[Bytes]]:
    ensure(
        len(values) <= 4,
        lambda: DecodeError(f"too many fields: {len(values)} > 4"),
    )
    fields: List[Optional[Bytes]] = [None] * 4
    for index, value in enumerate(values):
        if value is not None:
            fields[index] = to_bytes(value)
    return fields


def _fields_from_mapping(
    values: Mapping[str, Any]
) -> List[Optional[Bytes]]:
    fields: List[Optional[Bytes]] = []
    for name in FIELD_NAMES:
        value = None
        for alias in _FIELD_ALIASES[name]:
            if values.get(alias):
                value = values[alias]
                break
        fields.append(None if value is None else to_bytes(value))
    return fields


def _hash_field(name: str, value: Bytes) -> Hash32:
    ensure(
        len(value) == HASH_LENGTH,
        lambda: ValidationError(
            name, f"expected {HASH_LENGTH} bytes but got {len(value)}"
        ),
    )
    return Hash32(value)
