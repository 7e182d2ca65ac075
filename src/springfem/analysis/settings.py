from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence


@dataclass
class AnalysisSettings:
    max_iter: int = 30
    reactivate: bool = False
    reset_activation: bool = True
    combo_tags: Optional[Sequence[str]] = None
    verbose: bool = False

    def validate(self) -> None:
        if self.max_iter <= 0:
            raise ValueError("max_iter must be positive")
        if self.combo_tags is not None and isinstance(self.combo_tags, str):
            raise ValueError("combo_tags must be a sequence of tag names, not a single string")
