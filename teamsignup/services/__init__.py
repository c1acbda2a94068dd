"""Services Layer - registration, removal, and project administration workflows.

Invariants:
    - Workflows receive a MembershipStore and a CallerContext explicitly
    - Workflows return session mutations; they never touch the session store
"""
