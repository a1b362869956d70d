"""Shared helpers for running external commands and loading configuration."""
