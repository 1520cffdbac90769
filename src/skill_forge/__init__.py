"""Skill-Forge - tooling for slash-command, agent and skill prompt documents."""

try:
    from importlib.metadata import version

    __version__ = version("skill-forge")
except Exception:
    __version__ = "0.0.0"  # Fallback for development/testing

__all__ = ["__version__"]
