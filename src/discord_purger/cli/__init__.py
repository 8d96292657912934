"""Command line interface for Discord Purger."""
