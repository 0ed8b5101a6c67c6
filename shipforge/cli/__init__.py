"""Shipforge CLI — Typer-based command-line interface.

Provides the ``shipforge`` command with subcommands for cataloging release
artifacts, writing checksums, inspecting resolved assets and publishing.

All output uses Rich for formatted terminal display.
"""
