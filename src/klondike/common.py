
# common.py - shared settings, cards and deck for Klondike Slots
import os
import json
import logging
import random
from typing import List, Optional

log = logging.getLogger(__name__)

# Defaults (may be overridden by persisted settings)
_DEFAULT_SETTINGS = {
    "card_size": "Medium",   # Small | Medium | Large
    "back_color": "Blue",    # Blue | Grey | Red
    "seed": None,            # int for reproducible deals
}

_CURRENT_SETTINGS = dict(_DEFAULT_SETTINGS)

def _settings_dir() -> str:
    # Prefer %APPDATA% on Windows, else ~/.klondike_slots
    base = os.environ.get("APPDATA")
    if base:
        return os.path.join(base, "KlondikeSlots")
    return os.path.join(os.path.expanduser("~"), ".klondike_slots")

def _settings_path() -> str:
    return os.path.join(_settings_dir(), "settings.json")

def get_current_settings():
    return dict(_CURRENT_SETTINGS)

_CARD_SIZES = ("Small", "Medium", "Large")

def _coerce_card_size(value):
    if not isinstance(value, str):
        return None
    value = value.strip().capitalize()
    return value if value in _CARD_SIZES else None

def _coerce_seed(value):
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None

def load_settings():
    global _CURRENT_SETTINGS
    try:
        with open(_settings_path(), "r", encoding="utf-8") as f:
            data = json.load(f)
            if isinstance(data, dict):
                _CURRENT_SETTINGS.update({
                    "card_size": _coerce_card_size(data.get("card_size")) or _CURRENT_SETTINGS["card_size"],
                    "back_color": data.get("back_color", _CURRENT_SETTINGS["back_color"]),
                    "seed": _coerce_seed(data.get("seed", _CURRENT_SETTINGS["seed"])),
                })
    except (OSError, ValueError):
        log.debug("no usable settings at %s, using defaults", _settings_path())
    # Environment switches win over the file
    env_seed = _coerce_seed(os.environ.get("KLONDIKE_SEED"))
    if env_seed is not None:
        _CURRENT_SETTINGS["seed"] = env_seed
    env_size = _coerce_card_size(os.environ.get("KLONDIKE_CARD_SIZE"))
    if env_size is not None:
        _CURRENT_SETTINGS["card_size"] = env_size
    return get_current_settings()

def save_settings(new_values: dict):
    # Merge and write to disk
    global _CURRENT_SETTINGS
    _CURRENT_SETTINGS.update({
        k: new_values[k] for k in ("card_size", "back_color", "seed") if k in new_values
    })
    try:
        os.makedirs(_settings_dir(), exist_ok=True)
        with open(_settings_path(), "w", encoding="utf-8") as f:
            json.dump(_CURRENT_SETTINGS, f, indent=2)
    except OSError:
        log.warning("could not write settings to %s", _settings_path())

def make_rng(seed: Optional[int] = None) -> random.Random:
    """Return the random source used for dealing and recycling the waste."""
    if seed is None:
        seed = _CURRENT_SETTINGS.get("seed")
    return random.Random(seed)


# ---------- Cards ----------
SUITS = ["hearts", "diamonds", "clubs", "spades"]
RANKS = ["A", "2", "3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K"]
RED_SUITS = ("hearts", "diamonds")

def rank_index(rank: str) -> int:
    return RANKS.index(rank)

def suit_color(suit: str) -> str:
    return "red" if suit in RED_SUITS else "black"

class Card:
    __slots__ = ("rank", "suit", "face_up")
    def __init__(self, rank, suit, face_up=False):
        self.rank = rank   # "A".."K"
        self.suit = suit   # "hearts" | "diamonds" | "clubs" | "spades"
        self.face_up = face_up
    @property
    def key(self) -> str:
        return f"{self.rank}-{self.suit}"
    @property
    def rank_index(self) -> int:
        return rank_index(self.rank)
    def color(self):
        return suit_color(self.suit)
    def copy(self, face_up=None):
        return Card(self.rank, self.suit, self.face_up if face_up is None else face_up)
    def __eq__(self, other):
        if not isinstance(other, Card):
            return NotImplemented
        return (self.rank, self.suit, self.face_up) == (other.rank, other.suit, other.face_up)
    def __hash__(self):
        return hash(self.key)
    def __repr__(self):
        return f"{self.rank}{self.suit[0].upper()}{'↑' if self.face_up else '↓'}"

def card_universe() -> List[str]:
    """Identity keys of the full 52-card deck."""
    return [f"{rank}-{suit}" for suit in SUITS for rank in RANKS]

def shuffle_cards(cards: List[Card], rng: Optional[random.Random] = None) -> List[Card]:
    # random.shuffle is Fisher-Yates: swap i with a uniform pick from [0, i]
    (rng or random).shuffle(cards)
    return cards

def make_deck(rng: Optional[random.Random] = None, *, shuffle=True) -> List[Card]:
    d = [Card(rank, suit, False) for suit in SUITS for rank in RANKS]
    if shuffle:
        shuffle_cards(d, rng)
    return d

# Load any persisted settings now
load_settings()
