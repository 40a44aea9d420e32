
# ui.py - pygame drawing helpers for the Klondike table
import os
import pygame
from typing import Optional

from klondike import common as C

# ---------- Configuration ----------
SCREEN_W, SCREEN_H = 1280, 800
TABLE_BG = (2, 100, 40)

CARD_RADIUS = 10
CARD_GAP_X = 18
FAN_Y = 25

BLACK = (20, 20, 20)
WHITE = (245, 245, 245)
RED = (200, 20, 20)
LIGHT = (220, 220, 220)
BACK_COLORS = {"Blue": (34, 96, 200), "Grey": (110, 110, 120), "Red": (170, 30, 40)}

SUIT_GLYPHS = {"hearts": "♥", "diamonds": "♦", "clubs": "♣", "spades": "♠"}

def size_to_dims(size_name: str):
    size_name = (size_name or "Medium").capitalize()
    if size_name == "Small":
        return 75, 105
    if size_name == "Large":
        return 150, 210
    return 100, 140

CARD_W, CARD_H = size_to_dims(C.get_current_settings().get("card_size"))
BACK_COLOR = C.get_current_settings().get("back_color", "Blue")

# Optional face images: assets/face/<suit letter>-<rank>.png and flip.png
IMAGE_DIR = os.path.join(os.path.dirname(__file__), "assets", "face")

# Fonts are initialized via setup_fonts() AFTER pygame.init()
FONT_UI = None
FONT_CORNER_RANK = None
FONT_CORNER_SUIT = None

def setup_fonts():
    global FONT_UI, FONT_CORNER_RANK, FONT_CORNER_SUIT
    name = pygame.font.get_default_font()
    FONT_UI = pygame.font.SysFont(name, 26, bold=True)
    FONT_CORNER_RANK = pygame.font.SysFont(name, 28, bold=True)
    try:
        FONT_CORNER_SUIT = pygame.font.SysFont("Segoe UI Symbol", 26, bold=True)
    except Exception:
        FONT_CORNER_SUIT = pygame.font.SysFont(name, 26, bold=True)

def apply_card_settings(size_name: Optional[str] = None, back_color: Optional[str] = None):
    global CARD_W, CARD_H, BACK_COLOR
    if size_name is not None:
        CARD_W, CARD_H = size_to_dims(size_name)
    if back_color is not None:
        BACK_COLOR = back_color
    invalidate_card_caches()

def card_asset_name(card: C.Card) -> str:
    """File stem of a card's image, e.g. ``h-a`` or ``flip`` when face down."""
    if not card.face_up:
        return "flip"
    return f"{card.suit[0]}-{card.rank.lower()}"

_face_cache = {}   # (asset stem, size) -> Surface
_back_cache = None

def invalidate_card_caches():
    global _face_cache, _back_cache
    _face_cache = {}
    _back_cache = None

def _load_image(stem) -> Optional[pygame.Surface]:
    path = os.path.join(IMAGE_DIR, stem + ".png")
    if not os.path.isfile(path):
        return None
    try:
        surf = pygame.image.load(path)
    except pygame.error:
        return None
    if surf.get_size() != (CARD_W, CARD_H):
        surf = pygame.transform.smoothscale(surf, (CARD_W, CARD_H))
    return surf

def get_back_surface():
    global _back_cache
    if _back_cache is not None:
        return _back_cache
    surf = _load_image("flip")
    if surf is None:
        surf = pygame.Surface((CARD_W, CARD_H), pygame.SRCALPHA)
        pygame.draw.rect(surf, WHITE, (0, 0, CARD_W, CARD_H), border_radius=CARD_RADIUS)
        pygame.draw.rect(surf, BLACK, (0, 0, CARD_W, CARD_H), width=3, border_radius=CARD_RADIUS)
        inset = 8
        inner = pygame.Rect(inset, inset, CARD_W - 2*inset, CARD_H - 2*inset)
        pygame.draw.rect(surf, BACK_COLORS.get(BACK_COLOR, BACK_COLORS["Blue"]), inner, border_radius=8)
        for i in range(-CARD_H, CARD_W, 12):
            pygame.draw.line(surf, LIGHT, (i, 8), (i + CARD_H, CARD_H - 8), 1)
    _back_cache = surf
    return surf

def get_card_surface(card: C.Card):
    if not card.face_up:
        return get_back_surface()
    stem = card_asset_name(card)
    key = (stem, CARD_W, CARD_H)
    if key in _face_cache:
        return _face_cache[key]
    surf = _load_image(stem)
    if surf is None:
        surf = pygame.Surface((CARD_W, CARD_H), pygame.SRCALPHA)
        pygame.draw.rect(surf, WHITE, (0, 0, CARD_W, CARD_H), border_radius=CARD_RADIUS)
        pygame.draw.rect(surf, BLACK, (0, 0, CARD_W, CARD_H), width=3, border_radius=CARD_RADIUS)
        color = RED if card.color() == "red" else BLACK
        margin = 10
        rtxt = FONT_CORNER_RANK.render(card.rank, True, color)
        stxt = FONT_CORNER_SUIT.render(SUIT_GLYPHS[card.suit], True, color)
        surf.blit(rtxt, (margin, margin))
        surf.blit(stxt, (margin, margin + rtxt.get_height() - 2))
    _face_cache[key] = surf
    return surf

def draw_empty_slot(screen, rect, dim=False):
    col = (0, 60, 20) if dim else (255, 255, 255, 40)
    pygame.draw.rect(screen, col, rect, border_radius=CARD_RADIUS, width=2)
