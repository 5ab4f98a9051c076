"""Textual applications."""
