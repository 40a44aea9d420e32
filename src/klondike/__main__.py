
# __main__.py - entry point
import os
import logging
import pygame
from klondike import common as C
from klondike import ui as U
from klondike.table import KlondikeTableScene

def _initial_window_size():
    info = pygame.display.Info()
    # Keep a safety margin so the window never hides under taskbar
    margin_w, margin_h = 120, 140
    w = min(U.SCREEN_W, max(640, info.current_w - margin_w))
    h = min(U.SCREEN_H, max(480, info.current_h - margin_h))
    return w, h

def main():
    logging.basicConfig(
        level=os.environ.get("KLONDIKE_LOG_LEVEL", "WARNING").upper(),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    settings = C.load_settings()
    U.apply_card_settings(size_name=settings["card_size"], back_color=settings["back_color"])

    # Center window and init
    os.environ.setdefault("SDL_VIDEO_CENTERED", "1")
    pygame.init()

    w, h = _initial_window_size()
    U.SCREEN_W, U.SCREEN_H = w, h
    screen = pygame.display.set_mode((w, h), pygame.RESIZABLE)
    pygame.display.set_caption("Klondike")
    U.setup_fonts()
    clock = pygame.time.Clock()

    scene = KlondikeTableScene(app=None)

    running = True
    while running:
        clock.tick(60)
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                running = False
            elif e.type == pygame.VIDEORESIZE:
                U.SCREEN_W, U.SCREEN_H = e.size
                screen = pygame.display.set_mode((U.SCREEN_W, U.SCREEN_H), pygame.RESIZABLE)
                scene.compute_layout()
            else:
                scene.handle_event(e)
        if scene.quit_requested:
            running = False
        scene.draw(screen)
        pygame.display.flip()
    pygame.quit()

if __name__ == "__main__":
    main()
