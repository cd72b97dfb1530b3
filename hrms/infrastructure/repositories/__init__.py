"""Implementaciones de los puertos de domain.repositories."""
