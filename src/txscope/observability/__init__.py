"""Observability – structured logging for transaction scopes."""
