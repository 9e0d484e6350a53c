"""Subcommands for the gendiv CLI."""
