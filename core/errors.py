"""Errors raised by the transaction store layer."""


class StoreError(Exception):
    """Base error for transaction store operations"""
    pass


class StoreLoadError(StoreError):
    """Reading or decoding stored transactions failed"""
    pass


class StoreSaveError(StoreError):
    """Writing transactions to the store failed"""
    pass
