# batch.py
# -----------------------------------------------------------------------------
# Sequential batch driver: for each task, sample an accepted maze, append its
# record to <out_dir>/mazes.txt and save <out_dir>/renders/<i>.png.
# -----------------------------------------------------------------------------
import json
import logging
import os
from dataclasses import dataclass
from typing import List, Optional, Sequence

from mazegen.errors import ConfigurationError
from mazegen.lattice import DEF_CELL_PX, LatticeKind, LatticeSpec
from mazegen.records import MazeRecord, append_record
from mazegen.render import format_caption, render_maze, save_render
from mazegen.sampler import DEF_REPORT_EVERY, SamplingResult, check_target, sample_maze
from mazegen.topology import DEF_ALGORITHM

logger = logging.getLogger(__name__)

RECORDS_NAME = "mazes.txt"
RENDERS_DIR = "renders"


@dataclass(frozen=True)
class MazeTask:
    width: int
    height: int
    desired_ratio: float
    epsilon: float
    kind: LatticeKind = LatticeKind.RECTANGULAR

    def __post_init__(self):
        check_target(self.desired_ratio, self.epsilon)

    @classmethod
    def rectangular(cls, width: int, height: int, desired_ratio: float, epsilon: float) -> "MazeTask":
        return cls(width, height, desired_ratio, epsilon, LatticeKind.RECTANGULAR)

    def lattice(self, cell_width: float = DEF_CELL_PX, cell_height: float = DEF_CELL_PX) -> LatticeSpec:
        return LatticeSpec(self.width, self.height, cell_width, cell_height, self.kind)


def load_tasks(jsonl_path: str) -> List[MazeTask]:
    """
    One JSON object per line:
      {"width": 20, "height": 20, "desired_ratio": 0.21, "epsilon": 0.01, "kind": "rect"}
    "kind" is optional.
    """
    tasks = []
    with open(jsonl_path, "r", encoding="utf-8") as f:
        for n, line in enumerate(f, 1):
            if not line.strip():
                continue
            rec = json.loads(line)
            try:
                tasks.append(MazeTask(
                    width=int(rec["width"]),
                    height=int(rec["height"]),
                    desired_ratio=float(rec["desired_ratio"]),
                    epsilon=float(rec["epsilon"]),
                    kind=LatticeKind.from_tag(rec.get("kind", LatticeKind.RECTANGULAR.value)),
                ))
            except KeyError as exc:
                raise ConfigurationError(f"{jsonl_path}:{n}: missing field {exc}") from exc
    return tasks


def run_tasks(tasks: Sequence[MazeTask], out_dir: str, *,
              base_seed: Optional[int] = None,
              max_attempts: Optional[int] = None,
              algorithm: str = DEF_ALGORITHM,
              cell_px: float = DEF_CELL_PX,
              report_every: int = DEF_REPORT_EVERY,
              render: bool = True) -> List[SamplingResult]:
    """
    Tasks run one after another. With base_seed set, task i starts its seed
    sequence at base_seed + i * 1_000_000 so tasks never share seeds.
    """
    renders_dir = os.path.join(out_dir, RENDERS_DIR)
    os.makedirs(renders_dir if render else out_dir, exist_ok=True)
    records_path = os.path.join(out_dir, RECORDS_NAME)
    open(records_path, "w", encoding="utf-8").close()

    results = []
    total = len(tasks)
    for i, task in enumerate(tasks):
        task_seed = None if base_seed is None else base_seed + i * 1_000_000
        result = sample_maze(
            task.lattice(cell_px, cell_px), task.desired_ratio, task.epsilon,
            base_seed=task_seed, max_attempts=max_attempts,
            algorithm=algorithm, report_every=report_every,
        )
        logger.info("%d. pathRatio = %.4f, count = %d", i, result.ratio, result.attempts)
        append_record(records_path, MazeRecord.of(i, result.maze))

        if render:
            caption = format_caption(f"{i}/{total}", task.width, task.height,
                                     task.desired_ratio, task.epsilon)
            save_render(render_maze(result.maze, caption), os.path.join(renders_dir, f"{i}.png"))
        results.append(result)
    return results


__all__ = ["RECORDS_NAME", "RENDERS_DIR", "MazeTask", "load_tasks", "run_tasks"]
