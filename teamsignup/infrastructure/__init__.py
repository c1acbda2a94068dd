"""Infrastructure Layer - database, sessions, logging, and client-side identity.

Invariants:
    - Infrastructure never imports from services/
    - Database failures are mapped to DatabaseError before reaching routes
"""
