"""Infraestructura transversal: config, logging, métricas, middleware."""
