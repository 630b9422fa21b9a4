"""Version information for action-to-qiniu."""

__version__ = "1.0.0"
