"""Core Layer - pure game logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Randomness is injected (random.Random), never drawn from module state

Design Decisions:
    - Functional core separated from imperative shell: services load the
      aggregate, core validates and mutates it, services persist it
"""
