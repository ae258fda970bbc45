from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

import pygame


@dataclass
class CompassViewer:
    width: int = 480
    height: int = 480
    title: str = "Compass Debug"
    bg: Tuple[int, int, int] = (10, 10, 10)

    def __post_init__(self) -> None:
        pygame.init()
        self.screen = pygame.display.set_mode((self.width, self.height))
        pygame.display.set_caption(self.title)
        self.clock = pygame.time.Clock()
        self.font = pygame.font.Font(None, 48)
        self.is_running = True

    def handle_events(self) -> None:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.is_running = False
            if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                self.is_running = False

    def _point(self, angle_deg: float, r: float) -> Tuple[int, int]:
        # 0 deg = up, positive = clockwise on screen
        cx, cy = self.width * 0.5, self.height * 0.5
        a = math.radians(angle_deg)
        return int(cx + r * math.sin(a)), int(cy - r * math.cos(a))

    def draw(self, display_deg: float, text: str) -> None:
        self.handle_events()
        if not self.is_running:
            return

        self.screen.fill(self.bg)
        radius = 0.4 * min(self.width, self.height)
        center = (int(self.width * 0.5), int(self.height * 0.5))
        pygame.draw.circle(self.screen, (90, 90, 90), center, int(radius), 2)

        # rose rotated by the display heading; N tip in red
        for i, label in enumerate(("N", "E", "S", "W")):
            a = display_deg + 90.0 * i
            color = (220, 60, 60) if label == "N" else (200, 200, 200)
            pygame.draw.line(self.screen, color, center, self._point(a, radius * 0.85), 3)
            img = self.font.render(label, True, color)
            x, y = self._point(a, radius * 1.08)
            self.screen.blit(img, img.get_rect(center=(x, y)))

        # fixed lubber line
        pygame.draw.line(self.screen, (0, 220, 120), self._point(0.0, radius), self._point(0.0, radius * 1.2), 4)

        img = self.font.render(text, True, (240, 240, 240))
        self.screen.blit(img, img.get_rect(center=(center[0], self.height - 30)))

        pygame.display.flip()
        self.clock.tick(120)

    def close(self) -> None:
        pygame.quit()
