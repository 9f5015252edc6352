"""Refollow: who you follow, who follows you, and who doesn't follow back."""

__version__ = "0.1.0"
