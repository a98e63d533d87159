"""Packaged default configuration and recoding rules."""
