"""Adapters – driver bindings for the transactional resource ports."""
