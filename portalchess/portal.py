"""Board positions and portals that link two squares."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Position:
    """A square on the board, addressed by column ``x`` and row ``y``."""

    x: int = 0
    y: int = 0


@dataclass
class Portal:
    """A one-way link from ``entry`` to ``exit`` with a cooldown."""

    id: str
    entry: Position
    exit: Position
    preserve_direction: bool = False
    allowed_colors: list[str] = field(default_factory=list)
    cooldown: int = 0
    current_cooldown: int = field(default=0, init=False)

    def is_available(self) -> bool:
        """Return True when the portal is not cooling down."""
        return self.current_cooldown == 0

    def start_cooldown(self) -> None:
        """Put the portal on its full cooldown."""
        self.current_cooldown = self.cooldown

    def decrement_cooldown(self) -> None:
        """Count one turn off the cooldown, never going below zero."""
        if self.current_cooldown > 0:
            self.current_cooldown -= 1

    def is_color_allowed(self, color: str) -> bool:
        """Return True if pieces of ``color`` may use this portal."""
        return color in self.allowed_colors