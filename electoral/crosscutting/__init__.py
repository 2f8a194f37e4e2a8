"""Crosscutting concerns: configuration, logging, errors, metrics and middleware."""
