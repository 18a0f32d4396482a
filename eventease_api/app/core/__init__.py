"""
Core infrastructure: settings, logging and the catalog error types.
"""
