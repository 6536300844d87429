"""Services Layer - imperative shell around the pure core.

Invariants:
    - Every mutating operation runs through run_game_transaction
    - Services raise core.errors exceptions; HTTP mapping happens in api/
"""
