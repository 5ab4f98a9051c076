"""kft CLI commands."""
