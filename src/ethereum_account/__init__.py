"""
Ethereum Account
^^^^^^^^^^^^^^^^

A single account of Ethereum's world state: its four fields, their
canonical RLP encoding, and the functions that read and write the
account's contract code and storage through an external versioned store.

An account is stored in the state trie as::

    rlp([nonce, balance, storage_root, code_hash])

The code itself is kept in a flat, content-addressed keyspace under its
`code_hash`, and the account's storage lives in a separate trie whose root
is `storage_root`.
"""

__version__ = "0.1.0"
