"""
Cryptographic primitives used by accounts.
"""
