"""Command line interface for cloudzone."""
