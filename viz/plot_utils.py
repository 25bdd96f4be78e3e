# viz/plot_utils.py
"""
Utility plotting functions for the potted-plant simulation.

Provides:
- time-series plotting of a headless run (water level, growth level)
- the sliding growth-history chart (last 30 samples, labelled in seconds ago)

Note: uses matplotlib and expects numeric data in sequences or dict-of-lists logs.
"""

import os

import matplotlib.pyplot as plt


def plot_time_series(log, out_path=None, title=None):
    """
    Plot water and growth traces from a log dictionary.

    log: dict of lists, e.g. {
        'time': [0, 1, 2, ...],      # seconds
        'water': [...],
        'growth': [...],
        'unhealthy': [...],          # optional, count of unhealthy leaves
    }
    """
    water = log.get('water', [])
    growth = log.get('growth', [])
    time = log.get('time', list(range(len(water or growth))))
    unhealthy = log.get('unhealthy', [])

    fig, ax1 = plt.subplots(figsize=(12, 6))
    if water:
        ax1.plot(time, [w * 100 for w in water], label='Water (%)', color='#4fc3f7', linewidth=2)
    if growth:
        ax1.plot(time, [g * 100 for g in growth], label='Growth (%)', color='#2d6a4f', linewidth=2)
    ax1.set_xlabel('Time (s)')
    ax1.set_ylabel('Level (%)')
    ax1.set_ylim(0, 100)
    ax1.legend(loc='upper left')

    if unhealthy:
        ax2 = ax1.twinx()
        ax2.step(time, unhealthy, label='Unhealthy leaves', color='#c0a16b', where='post')
        ax2.set_ylabel('Unhealthy leaves')
        ax2.legend(loc='upper right')

    if title:
        fig.suptitle(title)

    if out_path:
        fig.savefig(out_path, dpi=150)
        plt.close(fig)
    else:
        plt.show()
    return out_path


def plot_growth_history(history, out_path=None):
    """Growth history window as the in-game chart shows it: '-29s' ... '0s'."""
    n = len(history)
    labels = [f"{i - n + 1}s" for i in range(n)]
    values = [round(v * 100) for v in history]

    fig, ax = plt.subplots(figsize=(8, 3))
    ax.fill_between(range(n), values, color='#2cba89', alpha=0.15)
    ax.plot(range(n), values, color='#2d6a4f', linewidth=3)
    ax.set_xticks(range(n))
    ax.set_xticklabels(labels, rotation=90, fontsize=7)
    ax.set_ylim(0, 100)
    ax.set_ylabel('Growth (%)')

    if out_path:
        os.makedirs(os.path.dirname(os.path.abspath(out_path)), exist_ok=True)
        fig.savefig(out_path, dpi=150, bbox_inches='tight')
        plt.close(fig)
    else:
        plt.show()
    return out_path
