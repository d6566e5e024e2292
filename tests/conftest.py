from typing import Any, Callable, Dict, List, Tuple

import pytest

from ethereum_account.account import Account
from ethereum_account.exceptions import StoreError
from ethereum_account.trie import MemoryStore

Calls = List[Tuple[str, Tuple[Any, ...]]]


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def account() -> Account:
    return Account()


@pytest.fixture
def store_calls(monkeypatch: pytest.MonkeyPatch) -> Calls:
    """
    Record every `MemoryStore` call, on any handle, as `(name, args)`.
    """
    calls: Calls = []

    def record(name: str) -> Callable[..., Any]:
        original = getattr(MemoryStore, name)

        def wrapper(self: MemoryStore, *args: Any) -> Any:
            calls.append((name, args))
            return original(self, *args)

        return wrapper

    for name in ("get_raw", "put_raw", "get", "put"):
        monkeypatch.setattr(MemoryStore, name, record(name))
    return calls


@pytest.fixture
def fail_store(monkeypatch: pytest.MonkeyPatch) -> Callable[[str], None]:
    """
    Make the named `MemoryStore` method raise `StoreError`.
    """

    def fail(name: str) -> None:
        def broken(self: MemoryStore, *args: Any) -> Any:
            raise StoreError(f"{name} failed")

        monkeypatch.setattr(MemoryStore, name, broken)

    return fail


@pytest.fixture
def contract_code() -> Dict[str, bytes]:
    return {
        "tiny": b"\x00",
        "return_one": bytes.fromhex("600160005260206000f3"),
        "long": bytes(range(256)) * 3,
    }
