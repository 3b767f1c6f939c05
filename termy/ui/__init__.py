"""Textual interface for browsing the termy configuration."""
