"""
Pygame Input Source
===================

Translates pygame events and keyboard state into controls values.
"""

from __future__ import annotations

from typing import List, Union

import pygame

from bubble_dodge.dodge_core.controls import InputState, PointerPressed, WindowClosed

InputEvent = Union[WindowClosed, PointerPressed]

KEY_BINDINGS = {
    "left": pygame.K_LEFT,
    "right": pygame.K_RIGHT,
    "up": pygame.K_UP,
    "down": pygame.K_DOWN,
    "escape": pygame.K_ESCAPE,
}


class PygameInput:
    """
    Event polling and held-key queries.

    Window coordinates are mapped back to field coordinates with the
    renderer's scale factor so the play button hit-test works at any window
    size.
    """

    def __init__(self, scale: float = 1.0):
        self._scale = scale

    def poll_events(self) -> List[InputEvent]:
        """Drain the pygame event queue into discrete input events."""
        events: List[InputEvent] = []
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                events.append(WindowClosed())
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                x, y = event.pos
                events.append(PointerPressed(x / self._scale, y / self._scale))
        return events

    def is_key_held(self, key: str) -> bool:
        """
        True if the named key is currently down.

        Raises:
            KeyError: If the key name has no binding.
        """
        return bool(pygame.key.get_pressed()[KEY_BINDINGS[key]])

    def held_inputs(self) -> InputState:
        """Current directional keys as an InputState."""
        pressed = pygame.key.get_pressed()
        return InputState(
            left=bool(pressed[KEY_BINDINGS["left"]]),
            right=bool(pressed[KEY_BINDINGS["right"]]),
            up=bool(pressed[KEY_BINDINGS["up"]]),
            down=bool(pressed[KEY_BINDINGS["down"]])
        )
