"""
Utility Functions For Hexadecimal Strings
^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^

.. contents:: Table of Contents
    :backlinks: none
    :local:

Introduction
------------

Conversions between byte strings and their `0x`-prefixed hexadecimal form.
"""
from ethereum_types.bytes import Bytes

from ..exceptions import DecodeError


def has_hex_prefix(hex_string: str) -> bool:
    """
    Check if a hex string starts with hex prefix (0x).

    Parameters
    ----------
    hex_string :
        The hexadecimal string to be checked for presence of prefix.

    Returns
    -------
    has_prefix : `bool`
        Boolean indicating whether the hex string has 0x prefix.
    """
    return hex_string[:2] in ("0x", "0X")


def remove_hex_prefix(hex_string: str) -> str:
    """
    Remove 0x prefix from a hex string if present. This function returns the
    passed hex string if it isn't prefixed with 0x.

    Parameters
    ----------
    hex_string :
        The hexadecimal string whose prefix is to be removed.

    Returns
    -------
    modified_hex_string : `str`
        The hexadecimal string with the 0x prefix removed if present.
    """
    if has_hex_prefix(hex_string):
        return hex_string[len("0x") :]

    return hex_string


def hex_to_bytes(hex_string: str) -> Bytes:
    """
    Convert hex string to bytes. Strings of odd length are padded with a
    leading zero nibble, so `"0x1"` becomes `b"\\x01"`.

    Parameters
    ----------
    hex_string :
        The hexadecimal string to be converted to bytes.

    Returns
    -------
    byte_stream : `bytes`
        Byte stream corresponding to the given hexadecimal string.

    Raises
    ------
    DecodeError
        If `hex_string` contains non-hexadecimal characters.
    """
    digits = remove_hex_prefix(hex_string)
    if len(digits) % 2:
        digits = "0" + digits
    try:
        return bytes.fromhex(digits)
    except ValueError as e:
        raise DecodeError(f"invalid hex string {hex_string!r}") from e


def bytes_to_hex(value: Bytes) -> str:
    """
    Render `value` as a lowercase, `0x`-prefixed hex string. The empty byte
    string renders as `"0x"`.
    """
    return "0x" + bytes(value).hex()
