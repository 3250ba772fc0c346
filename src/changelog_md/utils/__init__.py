"""Utility helpers for changelog-md."""
