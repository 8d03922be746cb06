# File: scripts/__init__.py

"""
Scripts Module
==============

Command-line scripts:
- Training script
"""

__all__ = []
