"""
Account State
^^^^^^^^^^^^^

.. contents:: Table of Contents
    :backlinks: none
    :local:

Introduction
------------

Reading and writing an account's code and storage through a `Store`.

Code lives in the store's content-addressed keyspace under the account's
`code_hash`. Storage lives in a versioned trie whose root is the account's
`state_root`; every access works on a branch of the store positioned at
that root, so other accounts sharing the store are never disturbed.

An account's fields are only updated once the store has confirmed the
write. Callers must not run two mutating calls against the same account
at the same time.
"""
import logging
from typing import Optional

from ethereum_types.bytes import Bytes

from .account import EMPTY_CODE_HASH, Account
from .crypto.hash import Hash32, keccak256
from .exceptions import StoreError
from .store import Store

logger = logging.getLogger(__name__)


def get_code(store: Store, account: Account) -> Bytes:
    """
    Get the code of `account`.

    Accounts that are not contracts have no code, and the store is not
    consulted for them.

    Parameters
    ----------
    store :
        Store holding the code.
    account :
        Account whose code is requested.

    Returns
    -------
    code : `Bytes`
        The account's code.

    Raises
    ------
    StoreError
        If the store fails, or does not hold code for `account.code_hash`.
    """
    if not account.is_contract():
        return b""

    code = store.get_raw(account.code_hash)
    if code is None:
        raise StoreError(f"no code stored for {account.code_hash.hex()}")
    return code


def set_code(store: Store, account: Account, code: Bytes) -> Bytes:
    """
    Store `code` and point `account` at it.

    Empty code needs no store entry: nothing is written, `account.code_hash`
    becomes the empty code hash and `b""` is returned.

    Parameters
    ----------
    store :
        Store receiving the code.
    account :
        Account to update.
    code :
        The new code.

    Returns
    -------
    code_hash : `Bytes`
        The hash the code was stored under, or `b""` for empty code.

    Raises
    ------
    StoreError
        If the write fails. `account` is left unchanged.
    """
    code_hash = keccak256(code)

    if code_hash == EMPTY_CODE_HASH:
        logger.debug("empty code, nothing written")
        account.code_hash = EMPTY_CODE_HASH
        return b""

    store.put_raw(code_hash, bytes(code))
    account.code_hash = code_hash
    logger.debug("stored %d bytes of code at %s", len(code), code_hash.hex())
    return code_hash


def get_storage(
    store: Store, account: Account, key: Bytes
) -> Optional[Bytes]:
    """
    Get a value from the storage of `account`.

    Parameters
    ----------
    store :
        Store holding the storage trie.
    account :
        Account whose storage is read.
    key :
        Key to lookup.

    Returns
    -------
    value : `Optional[Bytes]`
        The value at `key`, or `None` if there is none.

    Raises
    ------
    StoreError
        If the store fails.
    """
    trie = store.branch()
    trie.root = account.state_root
    return trie.get(key)


def set_storage(
    store: Store, account: Account, key: Bytes, value: Bytes
) -> bool:
    """
    Set a value in the storage of `account`.

    The write goes into a branch of `store` positioned at
    `account.state_root`. On success the account moves to the branch's new
    root; the previous root stays valid in the store.

    Parameters
    ----------
    store :
        Store holding the storage trie.
    account :
        Account whose storage is written.
    key :
        Key to set.
    value :
        Value to set.

    Returns
    -------
    success : `bool`
        `True` if the write succeeded. On `False`, `account.state_root` is
        unchanged.
    """
    trie = store.branch()
    trie.root = account.state_root
    try:
        trie.put(key, value)
    except StoreError:
        logger.warning(
            "storage write failed at root %s",
            account.state_root.hex(),
            exc_info=True,
        )
        return False

    previous_root = account.state_root
    account.state_root = Hash32(trie.root)
    logger.debug(
        "storage root %s -> %s", previous_root.hex(), account.state_root.hex()
    )
    return True
