from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Optional

import numpy as np

from brickfall.geometry import BrickId


@dataclass
class CascadeReport:
    safe_count: int                        # bricks whose removal drops nothing else
    total_cascade: int                     # sum of cascade sizes over all bricks
    cascade_sizes: Dict[BrickId, int]      # other bricks that fall per removed brick

    def answers(self) -> tuple[int, int]:
        return self.safe_count, self.total_cascade

    def most_critical(self) -> Optional[BrickId]:
        """Brick whose removal drops the most others; lowest id on ties."""
        if not self.cascade_sizes:
            return None
        ids = sorted(self.cascade_sizes)
        sizes = np.asarray([self.cascade_sizes[i] for i in ids], dtype=np.int64)
        return int(ids[int(np.argmax(sizes))])

    def summary(self) -> Dict[str, object]:
        sizes = np.asarray(list(self.cascade_sizes.values()), dtype=np.int64)
        return {
            "n_bricks": int(sizes.shape[0]),
            "safe_count": int(self.safe_count),
            "total_cascade": int(self.total_cascade),
            "cascade_mean": float(np.mean(sizes)) if sizes.size else 0.0,
            "cascade_max": int(np.max(sizes)) if sizes.size else 0,
            "most_critical": self.most_critical(),
        }
