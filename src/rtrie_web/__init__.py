"""Flask app and command line front-ends for the rtrie prefix index."""
from .web import app, main

__all__ = ["app", "main"]
