"""Ester Application Package - REST service for Library records.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
