"""
Ensure (Assertion) Utilities
^^^^^^^^^^^^^^^^^^^^^^^^^^^^

.. contents:: Table of Contents
    :backlinks: none
    :local:

Introduction
------------

Functions that simplify checking invariants and raising exceptions.
"""

from typing import Callable, Union


def ensure(
    value: bool, exception: Union[Callable[[], BaseException], BaseException]
) -> None:
    """
    Does nothing if `value` is truthy, otherwise raises `exception`.

    Parameters
    ----------

    value :
        Value that should be true.

    exception :
        Exception instance, or a zero-argument callable producing one. The
        callable is only invoked on failure.
    """
    if value:
        return
    if isinstance(exception, BaseException):
        raise exception
    raise exception()
