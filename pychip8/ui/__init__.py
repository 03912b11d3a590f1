"""Pygame user interface for the CHIP-8 interpreter."""

from .app import AppConfig, Chip8App, overlay_lines

__all__ = ["AppConfig", "Chip8App", "overlay_lines"]
