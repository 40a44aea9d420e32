import random

import pytest

from klondike import common as C
from klondike import layout as L


def test_make_deck_has_52_unique_face_down_cards():
    deck = C.make_deck(rng=random.Random(1))
    assert len(deck) == 52
    assert sorted(c.key for c in deck) == sorted(C.card_universe())
    assert not any(c.face_up for c in deck)


def test_make_deck_is_reproducible_for_a_seed():
    a = [c.key for c in C.make_deck(rng=random.Random(42))]
    b = [c.key for c in C.make_deck(rng=random.Random(42))]
    c = [c.key for c in C.make_deck(rng=random.Random(43))]
    assert a == b
    assert a != c


def test_unshuffled_deck_is_in_suit_then_rank_order():
    deck = C.make_deck(shuffle=False)
    assert deck[0].key == "A-hearts"
    assert deck[12].key == "K-hearts"
    assert deck[-1].key == "K-spades"


def test_shuffle_keeps_every_card():
    cards = C.make_deck(shuffle=False)
    before = sorted(c.key for c in cards)
    C.shuffle_cards(cards, random.Random(3))
    assert sorted(c.key for c in cards) == before


@pytest.mark.parametrize(
    "rank, suit, color, index",
    [
        ("A", "hearts", "red", 0),
        ("10", "diamonds", "red", 9),
        ("J", "clubs", "black", 10),
        ("K", "spades", "black", 12),
    ],
)
def test_card_color_and_rank_index(rank, suit, color, index):
    card = C.Card(rank, suit)
    assert card.color() == color
    assert card.rank_index == index
    assert card.key == f"{rank}-{suit}"


def test_initial_deal_scenario():
    slots = L.new_game_slots(random.Random(9))
    assert len(slots) == 14
    assert len(slots[7].cards) == 1 and slots[7].cards[0].face_up
    col = slots[13].cards
    assert len(col) == 7
    assert col[-1].face_up
    assert not any(c.face_up for c in col[:-1])
    assert len(slots[0].cards) == 24
    assert not any(c.face_up for c in slots[0].cards)
    assert slots[1].cards == [] and slots[2].cards == []
    assert all(slots[i].cards == [] for i in L.FOUNDATION_IDS)


def test_deal_consumes_deck_front_to_back():
    deck = C.make_deck(shuffle=False)
    slots = L.deal_slots(deck)
    keys = [c.key for c in deck]
    assert [c.key for c in slots[7].cards] == keys[0:1]
    assert [c.key for c in slots[8].cards] == keys[1:3]
    assert [c.key for c in slots[13].cards] == keys[21:28]
    assert [c.key for c in slots[0].cards] == keys[28:]


@pytest.mark.parametrize("slot_id, tableau_size", [(7, 1), (8, 2), (9, 3), (10, 4), (11, 5), (12, 6), (13, 7)])
def test_tableau_counts(slot_id, tableau_size):
    slots = L.new_game_slots(random.Random(slot_id))
    assert len(slots[slot_id].cards) == tableau_size


def test_deal_rejects_incomplete_deck():
    deck = C.make_deck(shuffle=False)[:-1]
    with pytest.raises(ValueError):
        L.deal_slots(deck)


def test_deal_rejects_duplicates():
    deck = C.make_deck(shuffle=False)
    deck[0] = C.Card("K", "spades")
    with pytest.raises(ValueError):
        L.deal_slots(deck)


@pytest.mark.parametrize(
    "slot_id, kind, drop, drag",
    [
        (0, L.SlotKind.STOCK, False, False),
        (1, L.SlotKind.WASTE, False, True),
        (2, L.SlotKind.RESERVED, False, True),
        (3, L.SlotKind.FOUNDATION, True, True),
        (6, L.SlotKind.FOUNDATION, True, True),
        (7, L.SlotKind.TABLEAU, True, True),
        (13, L.SlotKind.TABLEAU, True, True),
    ],
)
def test_slot_flags(slot_id, kind, drop, drag):
    slot = L.Slot(slot_id)
    assert slot.kind is kind
    assert slot.is_drop_target is drop
    assert slot.is_draggable is drag


def test_slot_kind_rejects_unknown_id():
    with pytest.raises(ValueError):
        L.slot_kind(14)


def test_make_deck_takes_the_random_source_positionally():
    a = [c.key for c in C.make_deck(random.Random(4))]
    b = [c.key for c in C.make_deck(random.Random(4))]
    assert a == b


def test_make_deck_shuffle_is_keyword_only():
    with pytest.raises(TypeError):
        C.make_deck(None, False)
