"""Roster: console record manager over flat delimited text files."""

__version__ = "0.1.0"
