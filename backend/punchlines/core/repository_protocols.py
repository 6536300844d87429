"""Boundary Protocols - contracts between core and shell.

Invariants:
    - Core NEVER imports from shell; dependency arrows point inward only
    - Game persistence is read/write-whole-aggregate, keyed by game_code
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: implementations do IO, core functions that receive
      the loaded aggregate stay synchronous
"""

from typing import Protocol

from punchlines.core.domain_types import GameCode
from punchlines.core.game_state import Game


class GameRepository(Protocol):
    """Contract for Game aggregate persistence, implemented by shell."""
    async def exists(self, game_code: GameCode) -> bool: ...
    async def get(self, game_code: GameCode) -> Game: ...
    async def add(self, game: Game) -> None: ...
    async def save(self, game: Game) -> None: ...
