"""Application layer: service orchestrators consumed by the HTTP layer."""
