"""Capa de aplicación: casos de uso y tareas de arranque."""
