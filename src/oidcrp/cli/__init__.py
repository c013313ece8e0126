"""Command line interface for oidcrp."""
