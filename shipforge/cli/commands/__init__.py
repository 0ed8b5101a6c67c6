"""Shipforge subcommands, one module per command."""
