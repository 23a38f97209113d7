"""Build-time version of the rivet host."""

__version__ = "0.1.0"

HOST_VERSION = __version__
