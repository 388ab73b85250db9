"""
Logging and error handling utilities for the Pick-n-Pull inventory watch.
"""
