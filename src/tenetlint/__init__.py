"""tenetlint: front-matter validation for tenet and binding documents."""

__version__ = "0.1.0"
