"""Command line interface for ugit."""
