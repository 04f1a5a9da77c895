"""FAQ board: envío público de preguntas y moderación por un administrador."""

__version__ = "1.0.0"
