"""Validation test suite for transport files written by standard tools.

These tests decode files produced by pyreadstat and compare the result with
what pyreadstat itself reads back.
"""
