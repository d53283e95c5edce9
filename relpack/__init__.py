"""Cross-compile a release binary and package it as a versioned archive."""

__version__ = "0.1.0"
