"""vaultlevel - level, XP and streak tracking for Markdown note vaults."""

__version__ = "0.1.0"
