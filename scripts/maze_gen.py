#!/usr/bin/env python3
"""
maze_gen.py

Image (sample until the solution covers ~ratio of the cells):
  python scripts/maze_gen.py image --width 20 --height 20 --ratio 0.21 --epsilon 0.01 --out maze.png

Batch (JSONL tasks -> mazes.txt + renders/<i>.png):
  python scripts/maze_gen.py batch --tasks tasks.jsonl --out-dir mazes_out --base-seed 20161219

Regenerate renders from a mazes.txt:
  python scripts/maze_gen.py regen --records mazes_out/mazes.txt --out-dir regen_out

Ratio survey (pick an epsilon the loop can reach):
  python scripts/maze_gen.py survey --width 20 --height 20 --samples 2000 --plot hist.png
"""

import argparse
import logging
import os

from mazegen.batch import load_tasks, run_tasks
from mazegen.lattice import DEF_CELL_PX, LatticeSpec
from mazegen.records import MazeRecord, append_record, read_records, regenerate
from mazegen.render import render_maze, format_caption, save_render
from mazegen.sampler import DEF_REPORT_EVERY, sample_maze
from mazegen.survey import plot_ratio_histogram, survey_ratios
from mazegen.topology import DEF_ALGORITHM, TREE_BUILDERS


def _add_common(p):
    p.add_argument("--algorithm", type=str, default=DEF_ALGORITHM, choices=sorted(TREE_BUILDERS))
    p.add_argument("--cell_px", type=int, default=DEF_CELL_PX)


def main():
    parser = argparse.ArgumentParser(description="Ratio-targeted maze generator.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log sampling progress.")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_img = sub.add_parser("image", help="Sample one maze and save its PNG.")
    p_img.add_argument("--width", type=int, default=20)
    p_img.add_argument("--height", type=int, default=20)
    p_img.add_argument("--ratio", type=float, required=True, help="Desired path cells / total cells.")
    p_img.add_argument("--epsilon", type=float, required=True, help="Tolerance half-width.")
    p_img.add_argument("--base-seed", type=int, default=None)
    p_img.add_argument("--max-attempts", type=int, default=None)
    p_img.add_argument("--report-every", type=int, default=DEF_REPORT_EVERY)
    p_img.add_argument("--title", type=str, default="0/1")
    p_img.add_argument("--record", type=str, default=None, help="Append the record line to this file")
    p_img.add_argument("--out", type=str, required=True)
    _add_common(p_img)

    p_b = sub.add_parser("batch", help="Run a JSONL task list.")
    p_b.add_argument("--tasks", type=str, required=True)
    p_b.add_argument("--out-dir", type=str, required=True)
    p_b.add_argument("--base-seed", type=int, default=None)
    p_b.add_argument("--max-attempts", type=int, default=None)
    p_b.add_argument("--report-every", type=int, default=DEF_REPORT_EVERY)
    p_b.add_argument("--no-render", action="store_true")
    _add_common(p_b)

    p_r = sub.add_parser("regen", help="Rebuild mazes from a records file.")
    p_r.add_argument("--records", type=str, required=True)
    p_r.add_argument("--out-dir", type=str, required=True)
    _add_common(p_r)

    p_s = sub.add_parser("survey", help="Sample ratios for a lattice.")
    p_s.add_argument("--width", type=int, default=20)
    p_s.add_argument("--height", type=int, default=20)
    p_s.add_argument("--samples", type=int, default=1000)
    p_s.add_argument("--base-seed", type=int, default=0)
    p_s.add_argument("--ratio", type=float, default=None, help="Report the hit rate for this target")
    p_s.add_argument("--epsilon", type=float, default=None)
    p_s.add_argument("--plot", type=str, default=None, help="Histogram PNG path")
    _add_common(p_s)

    args = parser.parse_args()
    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    if args.cmd == "image":
        lattice = LatticeSpec(args.width, args.height, args.cell_px, args.cell_px)
        result = sample_maze(lattice, args.ratio, args.epsilon,
                             base_seed=args.base_seed, max_attempts=args.max_attempts,
                             algorithm=args.algorithm, report_every=args.report_every)
        caption = format_caption(args.title, args.width, args.height, args.ratio, args.epsilon)
        save_render(render_maze(result.maze, caption), args.out)
        record = MazeRecord.of(0, result.maze)
        line = record.to_line()
        if args.record:
            append_record(args.record, record)
        print(f"pathRatio = {result.ratio:.4f}, count = {result.attempts}, "
              f"ratios seen {result.lowest_ratio:.4f}..{result.highest_ratio:.4f}")
        print(f"record: {line}")
        print(f"PNG saved to {args.out}")

    elif args.cmd == "batch":
        tasks = load_tasks(args.tasks)
        results = run_tasks(tasks, args.out_dir,
                            base_seed=args.base_seed, max_attempts=args.max_attempts,
                            algorithm=args.algorithm, cell_px=args.cell_px,
                            report_every=args.report_every, render=not args.no_render)
        for i, r in enumerate(results):
            print(f"{i}. pathRatio = {r.ratio:.4f}, count = {r.attempts}")
        print(f"Wrote {len(results)} records to {os.path.join(args.out_dir, 'mazes.txt')}")

    elif args.cmd == "regen":
        records = read_records(args.records)
        os.makedirs(args.out_dir, exist_ok=True)
        for rec in records:
            maze = regenerate(rec, args.algorithm, args.cell_px, args.cell_px)
            out_png = os.path.join(args.out_dir, f"{rec.task_index}.png")
            save_render(render_maze(maze), out_png)
            print(f"{rec.to_line()} -> ratio {maze.ratio:.4f}, signature {maze.signature()[:12]}")
        print(f"Regenerated {len(records)} mazes into {args.out_dir}")

    elif args.cmd == "survey":
        lattice = LatticeSpec(args.width, args.height, args.cell_px, args.cell_px)
        sv = survey_ratios(lattice, args.samples, args.base_seed, args.algorithm)
        pcts = ", ".join(f"p{q}={v:.4f}" for q, v in sv.percentiles().items())
        print(f"{sv.samples} mazes {args.width}x{args.height}: min={sv.lowest:.4f} max={sv.highest:.4f} "
              f"mean={sv.mean:.4f} std={sv.std:.4f}")
        print(pcts)
        if args.ratio is not None and args.epsilon is not None:
            print(f"hit rate for {args.ratio:.3f} ± {args.epsilon:.3f}: {sv.hit_rate(args.ratio, args.epsilon):.4f}")
        if args.plot:
            plot_ratio_histogram(sv, args.plot, desired_ratio=args.ratio, epsilon=args.epsilon)
            print(f"Histogram saved to {args.plot}")

if __name__ == "__main__":
    main()
