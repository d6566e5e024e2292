"""
Store Interface
^^^^^^^^^^^^^^^

.. contents:: Table of Contents
    :backlinks: none
    :local:

Introduction
------------

The interface an account expects from the database holding its code and
storage.

A store exposes two keyspaces:

- a flat, content-addressed keyspace for contract code, read and written
  with `get_raw()` and `put_raw()`;
- a versioned key-value mapping identified by `root`, read and written with
  `get()` and `put()`. A successful `put()` moves `root` to the new version.

`branch()` returns a handle that shares everything already persisted but
has its own `root`, so several accounts can work on their storage at once.

Failures are reported by raising `ethereum_account.exceptions.StoreError`;
returning normally means the operation succeeded.
"""

from typing import Optional, Protocol, runtime_checkable

from ethereum_types.bytes import Bytes

from .account import Root


@runtime_checkable
class Store(Protocol):
    """
    [`Protocol`] describing the store used by `ethereum_account.state`.

    [`Protocol`]: https://docs.python.org/3/library/typing.html#typing.Protocol
    """

    root: Root

    def branch(self) -> "Store":
        """
        Return an independent handle sharing persisted content, whose `root`
        can be set without affecting this one.
        """
        ...

    def get_raw(self, key: Bytes) -> Optional[Bytes]:
        """
        Read `key` from the content-addressed keyspace.
        """
        ...

    def put_raw(self, key: Bytes, value: Bytes) -> None:
        """
        Write `value` under `key` in the content-addressed keyspace.
        """
        ...

    def get(self, key: Bytes) -> Optional[Bytes]:
        """
        Read `key` from the version identified by `root`.
        """
        ...

    def put(self, key: Bytes, value: Bytes) -> None:
        """
        Write `key` into the version identified by `root`, then advance
        `root` to the resulting version.
        """
        ...
