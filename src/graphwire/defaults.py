DEFAULT_SHARED_MODE = True
"""Containers cache every object they build unless configured otherwise."""
