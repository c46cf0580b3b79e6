"""
Core infrastructure: settings, logging, the database pool and the
domain exception types.
"""
