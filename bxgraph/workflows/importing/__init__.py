"""Importing workflows."""
