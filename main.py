#!/usr/bin/env python3
"""
main.py - Orchestrator for the potted-plant simulation

Usage examples:
    python main.py sim_run --seconds 120
    python main.py sim_run --seconds 90 --seed 7 --hold 10:3 --hold 40:2.5 --prune_every 5
    python main.py sim_run --seconds 60 --plot run.png --history_plot history.png
    python main.py show_config --config configs/defaults.yaml

This script expects to be run from the project root.
"""
import argparse
import json
import logging
import sys
from datetime import datetime
from pathlib import Path

import yaml

# Ensure project root is on PYTHONPATH
ROOT = Path(__file__).resolve().parent
sys.path.insert(0, str(ROOT))

from config import load_config
from plantsim.plant import PottedPlant
from viz.plot_utils import plot_growth_history, plot_time_series


def parse_hold(text):
    """'AT:DURATION' in seconds -> (at_ms, duration_ms)."""
    try:
        at, dur = text.split(':')
        at_ms, dur_ms = float(at) * 1000.0, float(dur) * 1000.0
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected AT:DURATION in seconds, got {text!r}")
    if at_ms < 0 or dur_ms < 0:
        raise argparse.ArgumentTypeError(f"hold times must be non-negative, got {text!r}")
    return at_ms, dur_ms


def sim_run(args):
    cfg = load_config(args.config)
    if args.seed is not None:
        cfg['seed'] = args.seed

    # Setup logging
    log_dir = ROOT / "logs"
    log_dir.mkdir(exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = log_dir / f"plant_run_{timestamp}.log"

    # Configure logging
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.FileHandler(log_file, mode='w'),
            logging.StreamHandler()  # Also print to console
        ]
    )
    logger = logging.getLogger(__name__)

    seconds = args.seconds or 60
    plant = PottedPlant(cfg)
    loop = plant.loop

    logger.info("=" * 80)
    logger.info("SIMULATION RUN STARTED")
    logger.info(f"Seconds: {seconds}")
    logger.info(f"Seed: {cfg.get('seed')}")
    logger.info(f"Leaves: {plant.n_leaves} ({plant.n_side} side, {plant.n_top} top)")
    logger.info(f"Log file: {log_file}")
    logger.info("=" * 80)

    plant.on_leaf_health(lambda i, ok: logger.info(
        f"[{loop.now / 1000:6.1f}s] leaf {i} {'pruned' if ok else 'turned unhealthy'}"))
    plant.on_watering(lambda on: logger.info(
        f"[{loop.now / 1000:6.1f}s] watering {'started' if on else 'stopped'}"))

    # Scripted holds on the plant area
    for at_ms, dur_ms in args.hold or []:
        loop.call_later(at_ms, plant.pointer_down, name='script_down')
        loop.call_later(at_ms + dur_ms, plant.pointer_up, name='script_up')

    # Automatic pruner: clicks the first unhealthy leaf
    if args.prune_every:
        def prune_one():
            bad = [leaf.index for leaf in plant.leaves if not leaf.healthy]
            if bad:
                plant.pick_leaf(bad[0])
        loop.call_every(args.prune_every * 1000.0, prune_one, name='script_prune')

    log = {'time': [], 'water': [], 'growth': [], 'unhealthy': []}

    def record():
        snap = plant.snapshot()
        unhealthy = sum(1 for leaf in snap['leaves'] if not leaf['healthy'])
        log['time'].append(snap['time_ms'] / 1000.0)
        log['water'].append(snap['water_level'])
        log['growth'].append(snap['growth_level'])
        log['unhealthy'].append(unhealthy)
        logger.info(
            f"[{snap['time_ms'] / 1000:6.1f}s] water={snap['water_level']:.3f} "
            f"growth={snap['growth_level']:.3f} unhealthy={unhealthy} "
            f"day={snap['days'] + 1} progress={snap['day_progress']:.2f}"
            + (" WATERING" if snap['watering'] else "")
        )

    plant.start()
    loop.call_every(1000.0, record, name='script_record')
    plant.advance(seconds * 1000.0)

    final = plant.snapshot()
    plant.teardown()

    # Final summary
    logger.info("=" * 80)
    logger.info("SIMULATION RUN COMPLETED")
    logger.info("=" * 80)
    logger.info(f"  Water level: {final['water_level']:.4f}")
    logger.info(f"  Growth level: {final['growth_level']:.4f}")
    logger.info(f"  Leaves damaged: {plant.health.damaged_total}")
    logger.info(f"  Leaves pruned: {plant.health.pruned_total}")
    logger.info(f"  Watering sessions: {plant.watering_input.sessions}")
    logger.info(f"  Days completed: {final['days']}")

    if args.plot:
        plot_time_series(log, out_path=args.plot, title=f"Potted plant - {seconds}s run")
        logger.info(f"  Time-series plot saved to: {args.plot}")
    if args.history_plot:
        plot_growth_history(final['growth_history'], out_path=args.history_plot)
        logger.info(f"  Growth history plot saved to: {args.history_plot}")

    print(json.dumps(final, indent=2))
    print(f"[main] Detailed log saved to: {log_file}")
    return final


def show_config(args):
    cfg = load_config(args.config)
    print(yaml.safe_dump(cfg, sort_keys=False))


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Potted plant - main orchestrator")
    sub = p.add_subparsers(dest="cmd")

    s = sub.add_parser("sim_run", help="Run a headless scripted simulation")
    s.add_argument("--seconds", type=float, help="simulated seconds to run")
    s.add_argument("--config", type=str, default=None, help="path to YAML config (default: configs/defaults.yaml)")
    s.add_argument("--seed", type=int, default=None, help="override the config seed")
    s.add_argument("--hold", type=parse_hold, action='append', help="press-and-hold AT:DURATION in seconds (repeatable)")
    s.add_argument("--prune_every", type=float, default=None, help="prune one unhealthy leaf every N seconds")
    s.add_argument("--plot", type=str, default=None, help="write water/growth time-series plot")
    s.add_argument("--history_plot", type=str, default=None, help="write final growth-history chart")
    s.add_argument("--verbose", action='store_true', help="debug-level logging")

    c = sub.add_parser("show_config", help="Print the merged configuration")
    c.add_argument("--config", type=str, default=None, help="path to YAML config")

    return p.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    if not args.cmd:
        print("No command given. Use -h to see options.")
        return
    if args.cmd == "sim_run":
        sim_run(args)
    elif args.cmd == "show_config":
        show_config(args)
    else:
        print("Unknown command:", args.cmd)


if __name__ == "__main__":
    main()
