# records.py
# -----------------------------------------------------------------------------
# Persisted maze records: one line per accepted maze,
#
#   <task_index> <kind tag> <width> <height> <seed>      e.g. "0 rect 40 40 1834"
#
# which is enough to rebuild the identical maze with the same algorithm.
# -----------------------------------------------------------------------------
import os
from dataclasses import dataclass
from typing import Iterable, List

from mazegen.errors import ConfigurationError
from mazegen.lattice import DEF_CELL_PX, LatticeKind, LatticeSpec
from mazegen.topology import DEF_ALGORITHM, Maze, generate_maze


@dataclass(frozen=True)
class MazeRecord:
    task_index: int
    kind: LatticeKind
    width: int
    height: int
    seed: int

    @classmethod
    def of(cls, task_index: int, maze: Maze) -> "MazeRecord":
        lat = maze.lattice
        return cls(task_index, lat.kind, lat.width, lat.height, maze.seed)

    def to_line(self) -> str:
        return f"{self.task_index} {self.kind.value} {self.width} {self.height} {self.seed}"

    @classmethod
    def from_line(cls, line: str) -> "MazeRecord":
        parts = line.split()
        if len(parts) != 5:
            raise ConfigurationError(f"Expected 5 fields in maze record, got {len(parts)}: {line!r}")
        idx, tag, w, h, seed = parts
        kind = LatticeKind.from_tag(tag)
        try:
            return cls(int(idx), kind, int(w), int(h), int(seed))
        except ValueError as exc:
            raise ConfigurationError(f"Malformed maze record {line!r}: {exc}") from exc

    def lattice(self, cell_width: float = DEF_CELL_PX, cell_height: float = DEF_CELL_PX) -> LatticeSpec:
        return LatticeSpec(self.width, self.height, cell_width, cell_height, self.kind)


def regenerate(record: MazeRecord, algorithm: str = DEF_ALGORITHM,
               cell_width: float = DEF_CELL_PX, cell_height: float = DEF_CELL_PX) -> Maze:
    return generate_maze(record.lattice(cell_width, cell_height), record.seed, algorithm)


def write_records(path: str, records: Iterable[MazeRecord]) -> int:
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    n = 0
    with open(path, "w", encoding="utf-8") as f:
        for rec in records:
            f.write(rec.to_line() + "\n")
            n += 1
    return n


def append_record(path: str, record: MazeRecord) -> None:
    with open(path, "a", encoding="utf-8") as f:
        f.write(record.to_line() + "\n")


def read_records(path: str) -> List[MazeRecord]:
    with open(path, "r", encoding="utf-8") as f:
        return [MazeRecord.from_line(line) for line in f if line.strip()]


__all__ = ["MazeRecord", "regenerate", "write_records", "append_record", "read_records"]
