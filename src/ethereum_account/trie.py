"""
Storage Trie
^^^^^^^^^^^^

.. contents:: Table of Contents
    :backlinks: none
    :local:

Introduction
------------

`MemoryStore`, an in-memory `Store` whose versions are identified by the
Merkle Patricia Trie root of their contents.

Each `put()` copies the current version, applies the write and files the
result under its new root. Old versions are never modified, so a root
obtained earlier keeps resolving to the same contents.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import (
    Dict,
    List,
    Mapping,
    MutableMapping,
    Optional,
    Sequence,
    Union,
)

from ethereum_rlp import Extended, rlp
from ethereum_types.bytes import Bytes
from ethereum_types.frozen import slotted_freezable

from .account import EMPTY_TRIE_ROOT, Root
from .crypto.hash import keccak256
from .exceptions import StoreError

logger = logging.getLogger(__name__)


@slotted_freezable
@dataclass
class LeafNode:
    """Leaf node in the Merkle Trie"""

    rest_of_key: Bytes
    value: Extended


@slotted_freezable
@dataclass
class ExtensionNode:
    """Extension node in the Merkle Trie"""

    key_segment: Bytes
    subnode: Extended


@slotted_freezable
@dataclass
class BranchNode:
    """Branch node in the Merkle Trie"""

    subnodes: List[Extended]
    value: Extended


InternalNode = Union[LeafNode, ExtensionNode, BranchNode]


def encode_internal_node(node: Optional[InternalNode]) -> Extended:
    """
    Encodes a Merkle Trie node into its RLP form. The RLP will then be
    serialized into a `Bytes` and hashed unless it is less that 32 bytes
    when serialized.

    This function also accepts `None`, representing the absence of a node,
    which is encoded to `b""`.
    """
    unencoded: Extended
    if node is None:
        unencoded = b""
    elif isinstance(node, LeafNode):
        unencoded = (
            nibble_list_to_compact(node.rest_of_key, True),
            node.value,
        )
    elif isinstance(node, ExtensionNode):
        unencoded = (
            nibble_list_to_compact(node.key_segment, False),
            node.subnode,
        )
    elif isinstance(node, BranchNode):
        unencoded = list(node.subnodes) + [node.value]
    else:
        raise AssertionError(f"Invalid internal node type {type(node)}!")

    encoded = rlp.encode(unencoded)
    if len(encoded) < 32:
        return unencoded
    else:
        return keccak256(encoded)


def common_prefix_length(a: Sequence, b: Sequence) -> int:
    """
    Find the longest common prefix of two sequences.
    """
    for i in range(len(a)):
        if i >= len(b) or a[i] != b[i]:
            return i
    return len(a)


def nibble_list_to_compact(x: Bytes, is_leaf: bool) -> Bytes:
    """
    Compresses nibble-list into a standard byte array with a flag.

    The flag lives in the high nibble of the first byte: bit 1 is set for
    leaf nodes, bit 0 holds the parity of the number of nibbles.
    """
    compact = bytearray()

    if len(x) % 2 == 0:  # ie even length
        compact.append(16 * (2 * is_leaf))
        for i in range(0, len(x), 2):
            compact.append(16 * x[i] + x[i + 1])
    else:
        compact.append(16 * ((2 * is_leaf) + 1) + x[0])
        for i in range(1, len(x), 2):
            compact.append(16 * x[i] + x[i + 1])

    return Bytes(compact)


def bytes_to_nibble_list(bytes_: Bytes) -> Bytes:
    """
    Converts a `Bytes` into to a sequence of nibbles (bytes with value < 16).
    """
    nibble_list = bytearray(2 * len(bytes_))
    for byte_index, byte in enumerate(bytes_):
        nibble_list[byte_index * 2] = (byte & 0xF0) >> 4
        nibble_list[byte_index * 2 + 1] = byte & 0x0F
    return Bytes(nibble_list)


def _prepare_trie(
    data: Mapping[Bytes, Bytes], secured: bool
) -> Mapping[Bytes, Bytes]:
    """
    Prepares the data for root calculation. Hashes the keys (if
    `secured == True`) and converts them to nibble-lists.
    """
    mapped: MutableMapping[Bytes, Bytes] = {}

    for preimage, value in data.items():
        # Empty values are represented by their absence
        assert value != b""
        key: Bytes
        if secured:
            # "secure" tries hash keys once before construction
            key = keccak256(preimage)
        else:
            key = preimage
        mapped[bytes_to_nibble_list(key)] = value

    return mapped


def root(data: Mapping[Bytes, Bytes], secured: bool = True) -> Root:
    """
    Computes the root of a modified merkle patricia trie (MPT) holding
    `data`.

    Parameters
    ----------
    data :
        Key-value pairs stored in the trie. Empty values must be omitted.
    secured :
        Hash the keys before insertion, as storage tries do.

    Returns
    -------
    root : `Root`
        MPT root of the underlying key-value pairs.
    """
    obj = _prepare_trie(data, secured)

    root_node = encode_internal_node(patricialize(obj, 0))
    if len(rlp.encode(root_node)) < 32:
        return keccak256(rlp.encode(root_node))
    else:
        assert isinstance(root_node, Bytes)
        return Root(root_node)


def patricialize(
    obj: Mapping[Bytes, Bytes], level: int
) -> Optional[InternalNode]:
    """
    Structural composition function.

    Used to recursively patricialize and merkleize a dictionary.

    Parameters
    ----------
    obj :
        Underlying trie key-value pairs, with keys in nibble-list format.
    level :
        Current trie level.

    Returns
    -------
    node : `Optional[InternalNode]`
        Root node of `obj`.
    """
    if len(obj) == 0:
        return None

    arbitrary_key = next(iter(obj))

    # if leaf node
    if len(obj) == 1:
        leaf = LeafNode(arbitrary_key[level:], obj[arbitrary_key])
        return leaf

    # prepare for extension node check by finding max j such that all keys in
    # obj have the same key[i:j]
    substring = arbitrary_key[level:]
    prefix_length = len(substring)
    for key in obj:
        prefix_length = min(
            prefix_length, common_prefix_length(substring, key[level:])
        )

        # finished searching, found another key at the current level
        if prefix_length == 0:
            break

    # if extension node
    if prefix_length > 0:
        prefix = arbitrary_key[level : level + prefix_length]
        return ExtensionNode(
            prefix,
            encode_internal_node(patricialize(obj, level + prefix_length)),
        )

    branches: List[MutableMapping[Bytes, Bytes]] = []
    for _ in range(16):
        branches.append({})
    value = b""
    for key in obj:
        if len(key) == level:
            value = obj[key]
        else:
            branches[key[level]][key] = obj[key]

    return BranchNode(
        [
            encode_internal_node(patricialize(branches[k], level + 1))
            for k in range(16)
        ],
        value,
    )


@dataclass
class MemoryStore:
    """
    In-memory `ethereum_account.store.Store`.

    Handles returned by `branch()` share `_code` and `_versions` with the
    handle they came from.
    """

    root: Root = EMPTY_TRIE_ROOT
    _code: Dict[Bytes, Bytes] = field(default_factory=dict)
    _versions: Dict[Root, Dict[Bytes, Bytes]] = field(
        default_factory=lambda: {EMPTY_TRIE_ROOT: {}}
    )

    def branch(self) -> "MemoryStore":
        """
        Return a handle with its own `root`, sharing all stored content.
        """
        return replace(self)

    def get_raw(self, key: Bytes) -> Optional[Bytes]:
        """
        Read from the content-addressed keyspace.
        """
        return self._code.get(Bytes(key))

    def put_raw(self, key: Bytes, value: Bytes) -> None:
        """
        Write to the content-addressed keyspace.
        """
        self._code[Bytes(key)] = Bytes(value)

    def get(self, key: Bytes) -> Optional[Bytes]:
        """
        Read `key` from the version at `root`.
        """
        return self._snapshot().get(Bytes(key))

    def put(self, key: Bytes, value: Bytes) -> None:
        """
        Write `key` on top of the version at `root` and advance `root`.

        An empty `value` removes `key`, since the trie represents empty
        values by their absence.
        """
        data = dict(self._snapshot())
        if value:
            data[Bytes(key)] = Bytes(value)
        else:
            data.pop(Bytes(key), None)

        new_root = root(data)
        self._versions.setdefault(new_root, data)
        logger.debug("committed root %s", new_root.hex())
        self.root = new_root

    def _snapshot(self) -> Mapping[Bytes, Bytes]:
        try:
            return self._versions[self.root]
        except KeyError as e:
            raise StoreError(f"unknown root {self.root.hex()}") from e
