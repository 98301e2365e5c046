from __future__ import annotations
import pygame

Rect = pygame.Rect

def in_resolution_band(y: float, playfield_height: float, band_px: float) -> bool:
    return y >= playfield_height - band_px

def is_caught(object_x: float, paddle_center: float, paddle_width: float) -> bool:
    # Strict: an egg exactly half a pan away falls past the rim
    return abs(object_x - paddle_center) < paddle_width / 2

def object_rect(x: float, y: float, size: float, origin: tuple[int, int] = (0, 0)) -> Rect:
    rect = Rect(0, 0, int(size), int(size))
    rect.center = (int(origin[0] + x), int(origin[1] + y))
    return rect

def paddle_rect(center_x: float, bottom: float, width: float, height: float,
                origin: tuple[int, int] = (0, 0)) -> Rect:
    rect = Rect(0, 0, int(width), int(height))
    rect.midbottom = (int(origin[0] + center_x), int(origin[1] + bottom))
    return rect
