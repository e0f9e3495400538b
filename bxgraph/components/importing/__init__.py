"""Importing components: payload parsing and validation."""
