"""Utility modules for depmirror."""
