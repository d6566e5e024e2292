"""
Utility functions shared by the account modules.
"""
