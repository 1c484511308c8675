"""Services Layer — use cases between routes and the repository.

Invariants:
    - Every schedule-scoped use case runs an access check before touching data
    - Services receive the repository as an argument (no globals)

Design Decisions:
    - One module per resource for locality (accounts, schedules, shifts, templates)
"""
