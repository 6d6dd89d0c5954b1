"""Core computational modules for sizefactor-centering.

This package contains:
- centering: Unblocked and blocked centering of size factors
- sanitize: Diagnostics and replacement of invalid size factors
"""
