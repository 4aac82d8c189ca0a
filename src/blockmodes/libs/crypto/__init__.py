"""
Low-level helpers for block-cipher modes of operation.
"""
