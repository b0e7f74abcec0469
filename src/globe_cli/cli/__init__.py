"""Command line interface and terminal viewer."""
