"""Command line interface for cross-release."""
