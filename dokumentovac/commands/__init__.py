"""CLI command modules for dokumentovac."""
