"""Command-line interface for llmview."""
