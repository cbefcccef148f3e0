"""Command line interface for blogkit."""
