"""Command-line entry points for the teaching assistant."""
