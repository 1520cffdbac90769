"""Command-line interface for Skill-Forge."""

from .main import create_parser, main

__all__ = ["create_parser", "main"]
