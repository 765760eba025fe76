import json
import math
import os

import pytest

from mazegen.batch import RECORDS_NAME, RENDERS_DIR, MazeTask, load_tasks, run_tasks
from mazegen.errors import ConfigurationError
from mazegen.records import read_records, regenerate


def test_run_tasks_writes_records_and_renders(tmp_path):
    tasks = [MazeTask.rectangular(3, 3, 0.5, 0.2), MazeTask.rectangular(4, 3, 0.6, 0.3)]
    out = str(tmp_path / "batch")
    results = run_tasks(tasks, out, base_seed=1219)

    assert len(results) == 2
    records = read_records(os.path.join(out, RECORDS_NAME))
    assert [r.task_index for r in records] == [0, 1]
    assert [(r.width, r.height) for r in records] == [(3, 3), (4, 3)]
    for i, (rec, res) in enumerate(zip(records, results)):
        assert rec.seed == res.seed
        assert regenerate(rec).signature() == res.maze.signature()
        assert os.path.isfile(os.path.join(out, RENDERS_DIR, f"{i}.png"))


def test_tasks_get_separate_seed_ranges(tmp_path):
    tasks = [MazeTask.rectangular(2, 2, 0.75, 0.1)] * 2
    results = run_tasks(tasks, str(tmp_path), base_seed=0, render=False)
    assert [r.seed for r in results] == [0, 1_000_000]
    assert not os.path.exists(os.path.join(str(tmp_path), RENDERS_DIR))


def test_task_validates_target():
    with pytest.raises(ConfigurationError):
        MazeTask.rectangular(5, 5, 0.0, 0.1)


def test_load_tasks(tmp_path):
    path = tmp_path / "tasks.jsonl"
    lines = [
        {"width": 20, "height": 20, "desired_ratio": 0.21, "epsilon": 0.01},
        {"width": 21, "height": 22, "desired_ratio": 0.22, "epsilon": 0.01, "kind": "rect"},
    ]
    path.write_text("\n".join(json.dumps(x) for x in lines) + "\n\n", encoding="utf-8")
    tasks = load_tasks(str(path))
    assert tasks == [MazeTask.rectangular(20, 20, 0.21, 0.01), MazeTask.rectangular(21, 22, 0.22, 0.01)]


def test_load_tasks_missing_field(tmp_path):
    path = tmp_path / "tasks.jsonl"
    path.write_text(json.dumps({"width": 3, "height": 3, "epsilon": 0.1}) + "\n", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_tasks(str(path))


def test_task_rejects_nan_epsilon(tmp_path):
    with pytest.raises(ConfigurationError):
        MazeTask.rectangular(3, 3, 0.5, math.nan)
    path = tmp_path / "tasks.jsonl"
    path.write_text('{"width": 3, "height": 3, "desired_ratio": 0.5, "epsilon": NaN}\n', encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_tasks(str(path))
