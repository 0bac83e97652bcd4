"""Batch computation of per-channel integral images."""

__version__ = '0.1.0'
