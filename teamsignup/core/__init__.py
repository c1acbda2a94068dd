"""Core Layer - domain records, errors, and pure authorization/validation rules.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Functions in core are pure; IO is reached only through repository_protocols
"""
