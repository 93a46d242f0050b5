"""Read cookies from the cookie files of ELinks, w3m, Konqueror, Epiphany, Opera and Safari, and export them in Netscape format."""

__version__ = "0.1.0"
__all__ = ["__version__"]