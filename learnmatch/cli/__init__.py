"""Command-line interface for learnmatch."""
