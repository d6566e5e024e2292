"""
Error types raised while decoding accounts and talking to stores.
"""


class AccountException(Exception):
    """
    Base class for all exceptions _expected_ to be thrown during normal
    operation.
    """


class DecodeError(AccountException):
    """
    Thrown when account data is malformed or has an unsupported shape.
    """


class ValidationError(AccountException):
    """
    Thrown when a decoded account field violates its length invariant.
    """

    field: str

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field


class StoreError(AccountException):
    """
    Thrown by a store when reading or writing fails.
    """
