"""Punchlines Application Package - party card game round engine.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
