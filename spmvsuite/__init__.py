"""Sparse matrix storage formats, sequential SpMV reference products, suite settings and report helpers."""

__version__ = "0.1.0"