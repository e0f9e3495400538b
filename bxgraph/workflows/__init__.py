"""
Workflows package.
"""
