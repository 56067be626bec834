"""Helpers for resolving video IDs and fetching transcripts."""
