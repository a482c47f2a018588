"""
Configuration, logging, exceptions and the public helper functions.
"""
