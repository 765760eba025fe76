import os
import runpy
import sys

from PIL import Image

from mazegen.records import read_records, regenerate

SCRIPT = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "scripts", "maze_gen.py")


def _run(monkeypatch, *argv):
    monkeypatch.setattr(sys, "argv", [SCRIPT, *argv])
    runpy.run_path(SCRIPT, run_name="__main__")


def test_image_appends_record(monkeypatch, tmp_path, capsys):
    out = str(tmp_path / "maze.png")
    records = str(tmp_path / "mazes.txt")
    for _ in range(2):
        _run(monkeypatch, "image", "--width", "3", "--height", "3", "--ratio", "0.5",
             "--epsilon", "0.2", "--base-seed", "5", "--record", records, "--out", out)

    recs = read_records(records)
    assert len(recs) == 2
    assert recs[0] == recs[1]
    assert (recs[0].width, recs[0].height) == (3, 3)
    assert 2.7 < regenerate(recs[0]).path_cell_count < 6.3
    assert f"record: {recs[0].to_line()}" in capsys.readouterr().out
    with Image.open(out) as im:
        assert im.format == "PNG"
