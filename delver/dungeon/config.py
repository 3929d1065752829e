import os
from dataclasses import dataclass, fields
from typing import Optional


@dataclass
class GeneratorConfig:
    width: int = 50
    height: int = 30
    room_count: int = 5
    min_room_width: int = 8
    max_room_width: int = 19
    min_room_height: int = 4
    max_room_height: int = 9
    # Odds a corridor turns when it could keep going straight are 1 in path_dir_change.
    path_dir_change: int = 5
    seed: Optional[int] = None
    max_room_attempts: int = 1000
    max_corridor_steps: Optional[int] = None  # None => width * height
    max_connect_iterations: int = 10_000
    generation_attempts: int = 3

    def corridor_step_budget(self) -> int:
        if self.max_corridor_steps is None:
            return self.width * self.height
        return self.max_corridor_steps

    def validate(self) -> "GeneratorConfig":
        if self.width < 5 or self.height < 5:
            raise ValueError(f"grid {self.width}x{self.height} too small")
        if self.room_count < 1:
            raise ValueError("room_count must be at least 1")
        # A room needs at least one interior cell inside its wall ring.
        if self.min_room_width < 3 or self.min_room_height < 3:
            raise ValueError("rooms must be at least 3x3")
        if self.min_room_width > self.max_room_width:
            raise ValueError("min_room_width greater than max_room_width")
        if self.min_room_height > self.max_room_height:
            raise ValueError("min_room_height greater than max_room_height")
        if self.path_dir_change < 1:
            raise ValueError("path_dir_change must be positive")
        for name in ("max_room_attempts", "max_connect_iterations", "generation_attempts"):
            if getattr(self, name) < 1:
                raise ValueError(f"{name} must be positive")
        if self.max_corridor_steps is not None and self.max_corridor_steps < 1:
            raise ValueError("max_corridor_steps must be positive")
        return self

    @classmethod
    def from_env(cls, environ=None, **overrides) -> "GeneratorConfig":
        """Build a config from ``DELVER_<FIELD>`` variables, then apply overrides.

        Empty values are ignored; ``DELVER_SEED=none`` means a random seed.
        """
        environ = os.environ if environ is None else environ
        values = {}
        for f in fields(cls):
            raw = environ.get(f"DELVER_{f.name.upper()}")
            if raw is None or raw.strip() == "":
                continue
            if raw.strip().lower() == "none":
                values[f.name] = None
                continue
            try:
                values[f.name] = int(raw)
            except ValueError:
                raise ValueError(f"DELVER_{f.name.upper()} must be an integer, got {raw!r}") from None
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


__all__ = ["GeneratorConfig"]
