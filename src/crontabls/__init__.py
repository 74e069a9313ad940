"""crontab-ls: diagnostics, hover and semantic highlighting for crontab files."""

__version__ = "0.1.0"
