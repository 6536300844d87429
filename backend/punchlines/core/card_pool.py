"""Card Pool - short-code generation, uniform shuffle, and the starter decks.

Invariants:
    - digit_short_code(n) always has exactly n digits (no leading zero)
    - shuffle never mutates its input and is uniform (Fisher-Yates)
    - Both helpers take an injected random.Random so seeded runs are reproducible
    - Starter decks are non-empty and cover every SetupType
"""

import random
from typing import Sequence, TypeVar

from punchlines.core.domain_types import SetupType

T = TypeVar("T")


def digit_short_code(length: int, rng: random.Random) -> str:
    """Random decimal code with exactly `length` digits."""
    if length < 1:
        raise ValueError("length must be >= 1")
    low = 10 ** (length - 1)
    high = 10 ** length
    return str(rng.randrange(low, high))


def shuffle(items: Sequence[T], rng: random.Random) -> list[T]:
    """Return a uniformly shuffled copy of `items` (Fisher-Yates)."""
    result = list(items)
    for i in range(len(result) - 1, 0, -1):
        j = rng.randint(0, i)
        result[i], result[j] = result[j], result[i]
    return result


# ─── Starter decks ───────────────────────────────────────────────

STARTER_SETUPS: tuple[tuple[str, SetupType], ...] = (
    ("Why did the chicken cross the road?", SetupType.PICK_ONE),
    ("What's that smell?", SetupType.PICK_ONE),
    ("What ended my last relationship?", SetupType.PICK_ONE),
    ("What's my secret talent?", SetupType.PICK_ONE),
    ("What did I bring back from Mexico?", SetupType.PICK_ONE),
    ("What's the next Happy Meal toy?", SetupType.PICK_ONE),
    ("What gets better with age?", SetupType.PICK_ONE),
    ("What's the most emo thing you can do?", SetupType.PICK_ONE),
    ("What will I bring back in time to convince people that I am a powerful wizard?", SetupType.PICK_ONE),
    ("Instead of coal, Santa now gives the bad children ____.", SetupType.PICK_ONE),
    ("During his midlife crisis, my dad got really into ____.", SetupType.PICK_ONE),
    ("Studies show that lab rats navigate mazes 50% faster after being exposed to ____.", SetupType.PICK_ONE),
    ("The class field trip was completely ruined by ____.", SetupType.PICK_ONE),
    ("What's the secret ingredient in grandma's stew?", SetupType.PICK_ONE),
    ("____ + ____ = a very long weekend.", SetupType.PICK_TWO),
    ("I never truly understood ____ until I encountered ____.", SetupType.PICK_TWO),
    ("In a world ravaged by ____, our only solace is ____.", SetupType.PICK_TWO),
    ("Step 1: ____. Step 2: ____. Step 3: Profit.", SetupType.PICK_TWO),
    ("That's right, I killed ____. How, you ask? ____.", SetupType.PICK_TWO),
    ("For my next trick, I will pull ____ out of ____.", SetupType.PICK_TWO),
    ("Make a haiku.", SetupType.DRAW_TWO_PICK_THREE),
    ("____ + ____ + ____ = my idea of a perfect Sunday.", SetupType.DRAW_TWO_PICK_THREE),
    ("My three wishes: ____, ____, and ____.", SetupType.DRAW_TWO_PICK_THREE),
)

STARTER_PUNCHLINES: tuple[str, ...] = (
    "To get to the other side",
    "To avoid bad jokes",
    "To go to KFC",
    "To go to Cheeky Nando's with the lads",
    "It was feeling cocky",
    "To prove it wasn't chicken!",
    "A disappointing birthday party",
    "Puppies!",
    "Emotions",
    "Being on fire",
    "An honest cop with nothing left to lose",
    "A bag of magic beans",
    "Grandma's secret recipe",
    "A really cool hat",
    "The Hamburglar",
    "Interpretive dance",
    "Spontaneous human combustion",
    "Wearing underwear inside-out to avoid doing laundry",
    "Passive-aggressive Post-it notes",
    "Unfathomable stupidity",
    "A tiny horse",
    "Vigorous jazz hands",
    "Poor life choices",
    "Pretending to care",
    "Dying of dysentery",
    "An Oompa-Loompa",
    "Riding off into the sunset",
    "A mopey zoo lion",
    "A falcon with a cap on its head",
    "The Big Bang",
    "Overcompensation",
    "Keanu Reeves",
    "Oversized lollipops",
    "Morgan Freeman's voice",
    "Free samples",
    "The inevitable heat death of the universe",
    "A lifetime of sadness",
    "Leaving an awkward voicemail",
    "A disappointing salad",
    "The true meaning of Christmas",
    "Friends who eat all the snacks",
    "Crippling debt",
    "Being fabulous",
    "A moment of silence",
    "Bees?",
    "A good sniff",
    "The Kool-Aid Man",
    "Doing the right thing",
    "Soup that is too hot",
    "Chainsaws for hands",
    "Ghosts",
    "My inner demons",
    "Clams",
    "Actually taking candy from a baby",
    "A balanced breakfast",
    "A cooler full of organs",
    "Quiche",
    "Hot Pockets",
    "Nicolas Cage",
    "A salty surprise",
    "Yeast",
    "Finger painting",
    "Breaking out into song and dance",
    "Waiting 'til marriage",
    "A Bop It",
    "Pterodactyl eggs",
    "A tribe of warrior women",
    "My relationship status",
    "Fancy Feast",
    "Sexual tension",
    "A sentient roomba with a grudge",
    "Forgetting the name of someone you just met",
    "The fourth slice of cake",
    "A stern talking-to",
    "Accidentally replying all",
    "A haunted IKEA wardrobe",
    "Three raccoons in a trench coat",
    "Aggressively loud chewing",
    "An unreasonable number of cats",
    "The last remaining Blockbuster",
    "Karaoke with no sense of shame",
    "A very confident pigeon",
    "Tax fraud",
    "The sound of dial-up internet",
    "Losing a staring contest to a goldfish",
    "A suspiciously moist sandwich",
    "Licking the spoon",
    "Being picked last in gym class",
    "My ex's new partner",
    "A medieval peasant's life savings",
    "Lukewarm coffee",
    "Socks with sandals",
    "The world's saddest clown",
    "Crying in the club",
    "A single, perfect potato",
    "Existential dread",
    "Getting lost in IKEA",
    "A motivational speech from a toddler",
    "A lifetime supply of glitter",
    "Winning an argument with the GPS",
    "Bad decisions at 3am",
    "Hugging a cactus",
)
