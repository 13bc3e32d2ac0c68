"""Theme system: colors and stylesheet generation."""
from .colors import THEMES, DEFAULT_THEME
from .stylesheet import build_stylesheet

__all__ = ["THEMES", "DEFAULT_THEME", "build_stylesheet"]
