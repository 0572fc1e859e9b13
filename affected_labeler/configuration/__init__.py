"""Configuration handling for the CLI entry point."""
