"""Domain services: import, graph queries and call-path analysis."""
