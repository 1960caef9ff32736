"""Shared helpers for the Card Studio apps."""
