from __future__ import annotations

import pygame
from typing import Collection, Optional

from brickfall.geometry import Brick
from brickfall.state import SettledStack


class Renderer:
    """Simple Pygame renderer: x-z and y-z side views of a settled stack + HUD."""

    def __init__(self, width: int = 1100, height: int = 700, cell_px: int = 24):
        pygame.init()
        self.w, self.h = int(width), int(height)
        self.cell_px = int(cell_px)
        self.screen = pygame.display.set_mode((self.w, self.h))
        pygame.display.set_caption("Brickfall")
        self.font = pygame.font.SysFont(None, 22)
        self.clock = pygame.time.Clock()

    def render(
        self,
        stack: SettledStack,
        falling: Optional[Collection[int]] = None,
        removed: Optional[int] = None,
        info: Optional[dict] = None,
    ):
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                raise SystemExit

        falling = set(falling or ())
        self.screen.fill((20, 20, 24))
        cell = self._fit_cell(stack)

        half = self.w // 2
        self._draw_view(stack, axis=0, x0=40, cell=cell, falling=falling, removed=removed)
        self._draw_view(stack, axis=1, x0=half + 20, cell=cell, falling=falling, removed=removed)
        self._draw_hud(stack, falling, removed, info or {})
        pygame.display.flip()
        self.clock.tick(60)

    def save(self, path: str) -> None:
        pygame.image.save(self.screen, path)

    def _fit_cell(self, stack: SettledStack) -> int:
        if not stack.bricks:
            return self.cell_px
        span_xy = 1 + max(max(b.hi.x, b.hi.y) for b in stack.bricks)
        span_z = 1 + max(b.hi.z for b in stack.bricks)
        fit_w = (self.w // 2 - 60) // max(1, span_xy)
        fit_h = (self.h - 120) // max(1, span_z)
        return max(1, min(self.cell_px, fit_w, fit_h))

    def _color(self, b: Brick, falling: set, removed: Optional[int]):
        if b.id == removed:
            return (220, 80, 70)
        if b.id in falling:
            return (220, 210, 140)
        shade = 90 + (b.id * 37) % 100
        return (shade // 2, shade, 150)

    def _draw_view(self, stack: SettledStack, axis: int, x0: int, cell: int, falling: set, removed: Optional[int]):
        y0 = self.h - 40  # screen row of the floor
        pygame.draw.line(self.screen, (120, 120, 130), (x0, y0), (x0 + self.w // 2 - 60, y0), 2)

        # Far bricks first so nearer ones paint over them.
        depth = 1 - axis
        for b in sorted(stack.bricks, key=lambda b: -b.lo[depth]):
            left = x0 + b.lo[axis] * cell
            width = (b.hi[axis] - b.lo[axis] + 1) * cell
            top = y0 - (b.hi.z + 1) * cell
            height = (b.hi.z - b.lo.z + 1) * cell
            pygame.draw.rect(self.screen, self._color(b, falling, removed), (left, top, width, height))
            pygame.draw.rect(self.screen, (30, 30, 36), (left, top, width, height), 1)

        label = self.font.render("x-z" if axis == 0 else "y-z", True, (200, 200, 200))
        self.screen.blit(label, (x0, y0 + 8))

    def _draw_hud(self, stack: SettledStack, falling: set, removed: Optional[int], info: dict):
        lines = [f"bricks={len(stack.bricks)}  cells={len(stack.occupancy)}"]
        if removed is not None:
            lines.append(f"removed={removed}  falls={max(0, len(falling) - 1)}")
        if "safe_count" in info:
            lines.append(f"safe={info['safe_count']}  total_cascade={info.get('total_cascade', 0)}")
        y = 20
        for ln in lines:
            surf = self.font.render(ln, True, (230, 230, 230))
            self.screen.blit(surf, (20, y))
            y += 22

    def close(self):
        pygame.quit()
