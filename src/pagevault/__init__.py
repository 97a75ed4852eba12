"""Summarize web pages and chat about them into an Obsidian vault."""

__version__ = "0.1.0"
