"""
LMS Cache

Feature-gated Redis cache layer for the learning-management backend.
"""

__version__ = "0.1.0"
