"""podstakes: pod wager calculator backed by the Topdeck.gg tournament API."""

__version__ = "0.1.0"
__author__ = "podstakes Team"

__all__ = ["__version__", "__author__"]
