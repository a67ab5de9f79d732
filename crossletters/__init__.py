"""Crossword-style word puzzles generated from the letters of a single target word."""

__version__ = "0.1.0"
