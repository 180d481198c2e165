"""Application layer – transaction scope orchestration."""
