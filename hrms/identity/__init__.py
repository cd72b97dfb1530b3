"""Identidad: credenciales, tokens, Access Guard y Role Policy."""
