"""
Shared helpers: JSON navigation, formatting and structured logging.
"""
