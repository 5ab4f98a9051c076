"""Command-line interface for kft."""
