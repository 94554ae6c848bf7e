"""Prompt material for the AI task executor."""
