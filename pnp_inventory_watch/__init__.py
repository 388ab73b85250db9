"""
Pick-n-Pull Inventory Watch

Checks the Pick-n-Pull vehicle search for newly listed vehicles matching a
fixed filter, remembers the last inventory it acted upon, and sends a
Telegram message when new vehicles appear.
"""

__version__ = "0.1.0"
__author__ = "Pick-n-Pull Inventory Watch Team"
