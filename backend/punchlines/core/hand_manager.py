"""Hand & Discard Manager - moves punchline cards between pool, hands, and discard pile.

Invariants:
    - discard_punchlines is all-or-nothing: it validates the whole submission
      against the hand before touching either the hand or the discard pile
    - Chosen cards leave the hand and land on discarded_punchlines in the order given
    - A card removed from a hand is never left in both places
    - When the draw pool runs dry, the discard pile is shuffled back into it,
      except cards on the table (submissions of a round still being played or
      judged); draws come up short only when nothing is left to recycle
    - Setups follow the same recycling rule with discarded_setups

Design Decisions:
    - Multiset (Counter) subset check: choosing the same card twice requires
      holding two copies of it
"""

import random
from collections import Counter

from punchlines.core.card_pool import shuffle
from punchlines.core.domain_types import RoundState
from punchlines.core.game_state import Game, Player, Setup

_TABLE_STATES = (RoundState.PLAYERS_CHOOSE, RoundState.HOST_CHOOSES)


def is_subset_of_hand(hand: list[str], chosen: list[str]) -> bool:
    """Whether every chosen card (counting duplicates) is held in `hand`."""
    held = Counter(hand)
    wanted = Counter(chosen)
    return all(held[card] >= count for card, count in wanted.items())


def cards_on_table(game: Game) -> Counter:
    """Submitted cards of a round that has not reached AFTER yet."""
    rnd = game.active_round
    if rnd is None or rnd.state not in _TABLE_STATES:
        return Counter()
    return Counter(
        card for cards in rnd.punchlines_by_player.values() for card in cards
    )


def _split_discards(game: Game) -> tuple[list[str], list[str]]:
    """(recyclable, held back) partition of the discard pile."""
    held = cards_on_table(game)
    recyclable: list[str] = []
    kept: list[str] = []
    for card in game.discarded_punchlines:
        if held[card] > 0:
            held[card] -= 1
            kept.append(card)
        else:
            recyclable.append(card)
    return recyclable, kept


def available_punchlines(game: Game) -> int:
    """Cards a draw could still hand out: the pool plus what recycling frees."""
    return len(game.punchlines) + len(_split_discards(game)[0])


def _recycle_discarded_punchlines(game: Game, rng: random.Random) -> None:
    recyclable, kept = _split_discards(game)
    game.punchlines.extend(shuffle(recyclable, rng))
    game.discarded_punchlines = kept


def draw_punchlines(game: Game, count: int, rng: random.Random) -> list[str]:
    """Take up to `count` cards off the top of the draw pool."""
    drawn: list[str] = []
    while len(drawn) < count:
        if not game.punchlines:
            _recycle_discarded_punchlines(game, rng)
            if not game.punchlines:
                break
        drawn.append(game.punchlines.pop(0))
    return drawn


def deal_hand(
    game: Game, player: Player, rng: random.Random, hand_size: int,
) -> list[str]:
    """Top the player's hand up to `hand_size`. Returns the cards dealt."""
    missing = hand_size - len(player.punchlines)
    if missing <= 0:
        return []
    dealt = draw_punchlines(game, missing, rng)
    player.punchlines.extend(dealt)
    return dealt


def deal_extra(
    game: Game, player: Player, rng: random.Random, count: int,
) -> list[str]:
    """Deal `count` cards on top of the current hand (draw-two setups)."""
    dealt = draw_punchlines(game, count, rng)
    player.punchlines.extend(dealt)
    return dealt


def discard_punchlines(game: Game, player: Player, chosen: list[str]) -> None:
    """Move `chosen` from the player's hand onto the game's discard pile.

    Raises ValueError (and changes nothing) if the hand does not hold them.
    """
    if not is_subset_of_hand(player.punchlines, chosen):
        raise ValueError("chosen punchlines are not all in the player's hand")
    remaining = list(player.punchlines)
    for card in chosen:
        remaining.remove(card)
    player.punchlines = remaining
    game.discarded_punchlines.extend(chosen)


def draw_setup(game: Game, rng: random.Random) -> Setup:
    """Take the next setup, moving it onto discarded_setups."""
    if not game.setups:
        if not game.discarded_setups:
            raise ValueError("game has no setups left to draw")
        game.setups.extend(shuffle(game.discarded_setups, rng))
        game.discarded_setups.clear()
    setup = game.setups.pop(0)
    game.discarded_setups.append(setup)
    return setup
