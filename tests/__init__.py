"""Test suite for sizefactor-centering.

Test organization:
- unit/: Unit tests for individual modules
- fixtures/: Mock size factor generators
"""
