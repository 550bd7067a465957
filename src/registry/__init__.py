"""Dependency extraction from package manager descriptor files."""
