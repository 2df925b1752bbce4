"""Command line interface for did-jis."""
