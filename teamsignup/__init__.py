"""Team Signup Application Package - project signups with self-service removal.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
