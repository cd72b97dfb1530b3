"""Adapters de infraestructura (PostgreSQL, in-memory)."""
