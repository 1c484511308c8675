"""Infrastructure Layer — storage adapters, credentials/tokens, logging.

Invariants:
    - Adapters implement core/repository_protocols.ScheduleRepository
    - Every storage failure is mapped to a core/errors.py type before leaving this layer

Design Decisions:
    - Two adapters behind one Protocol: SQL for production, memory for tests and demos
"""
