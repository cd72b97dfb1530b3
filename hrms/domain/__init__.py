"""Dominio: entidades, políticas puras, errores y puertos (Protocols)."""
