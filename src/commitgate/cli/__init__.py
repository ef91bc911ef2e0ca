"""Command line entry point for the commit gate."""
