from __future__ import annotations
from dataclasses import dataclass

@dataclass
class PaddleState:
    """Horizontal pan position as an offset from the playfield centre."""
    center_offset: float = 0.0
    min: float = 0.0
    max: float = 0.0

    @classmethod
    def for_playfield(cls, playfield_width: float, paddle_width: float) -> "PaddleState":
        # The pan may slide until its edge touches the playfield edge
        reach = max(0.0, playfield_width / 2 - paddle_width / 2)
        return cls(center_offset=0.0, min=-reach, max=reach)

    def clamp(self) -> None:
        self.center_offset = min(max(self.center_offset, self.min), self.max)

    def center(self, playfield_width: float) -> float:
        return playfield_width / 2 + self.center_offset

def move_left(paddle: PaddleState, step: float) -> float:
    paddle.center_offset -= step
    paddle.clamp()
    return paddle.center_offset

def move_right(paddle: PaddleState, step: float) -> float:
    paddle.center_offset += step
    paddle.clamp()
    return paddle.center_offset
