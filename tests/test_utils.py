import pytest

from ethereum_account.exceptions import DecodeError, StoreError
from ethereum_account.utils.ensure import ensure
from ethereum_account.utils.hexadecimal import (
    bytes_to_hex,
    has_hex_prefix,
    hex_to_bytes,
    remove_hex_prefix,
)


def test_hex_prefix() -> None:
    assert has_hex_prefix("0xab")
    assert has_hex_prefix("0Xab")
    assert not has_hex_prefix("ab")
    assert remove_hex_prefix("0xab") == "ab"
    assert remove_hex_prefix("ab") == "ab"


@pytest.mark.parametrize(
    "hex_string, expected",
    [
        ("0x", b""),
        ("", b""),
        ("0x0", b"\x00"),
        ("0xfff", b"\x0f\xff"),
        ("DEADbeef", b"\xde\xad\xbe\xef"),
    ],
)
def test_hex_to_bytes(hex_string: str, expected: bytes) -> None:
    assert hex_to_bytes(hex_string) == expected


def test_hex_to_bytes_invalid() -> None:
    with pytest.raises(DecodeError, match="invalid hex string"):
        hex_to_bytes("0xgg")


def test_bytes_to_hex() -> None:
    assert bytes_to_hex(b"") == "0x"
    assert bytes_to_hex(b"\x00\xab") == "0x00ab"


def test_ensure() -> None:
    ensure(True, StoreError("unused"))

    with pytest.raises(StoreError, match="instance"):
        ensure(False, StoreError("instance"))
    with pytest.raises(StoreError, match="factory"):
        ensure(False, lambda: StoreError("factory"))
