# config.py
"""
Config loader for the potted-plant simulation.

Provides a single entry `load_config(path=None)` that reads YAML config from
`configs/defaults.yaml` by default, merges it over the built-in defaults and
returns a nested dict. Also exposes `get_default_config()` for quick access.

This file also sets global random seeds for reproducibility when `seed` is present
in the config (it seeds Python and NumPy).
"""

import copy
import os
import random

import numpy as np
import yaml

DEFAULT_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), 'configs', 'defaults.yaml'))

DEFAULTS = {
    'seed': None,
    'loop': {'frame_interval_ms': 16.0},
    'clock': {'day_length_ms': 60000.0},
    'leaves': {'side': 6, 'top': 1},
    'moisture': {
        'tick_ms': 100.0,
        'initial_level': 1.0,
        'charge_rate': 0.02,
        'decay_rate': 0.002,
    },
    'watering': {'hold_ms': 1000.0, 'session_ms': 1200.0},
    'leaf_health': {'tick_ms': 1000.0, 'base_chance': 0.01, 'dry_chance': 0.24},
    'growth': {
        'tension': 180.0,
        'friction': 18.0,
        'prune_delay_ms': 600.0,
        'regrow_ms': 22000.0,
    },
    'history': {'tick_ms': 1000.0, 'capacity': 30},
}

# (section, key) pairs that must be strictly positive
_POSITIVE = [
    ('loop', 'frame_interval_ms'),
    ('clock', 'day_length_ms'),
    ('moisture', 'tick_ms'),
    ('watering', 'hold_ms'),
    ('watering', 'session_ms'),
    ('leaf_health', 'tick_ms'),
    ('growth', 'tension'),
    ('growth', 'regrow_ms'),
    ('history', 'tick_ms'),
    ('history', 'capacity'),
]

# (section, key) pairs that must lie in [0, 1]
_UNIT = [
    ('moisture', 'initial_level'),
    ('moisture', 'charge_rate'),
    ('moisture', 'decay_rate'),
    ('leaf_health', 'base_chance'),
    ('leaf_health', 'dry_chance'),
]


def load_config(path=None):
    """Load YAML config and return a dict. Also sets global seeds if `seed` key present."""
    p = path or DEFAULT_PATH
    if not os.path.exists(p):
        raise FileNotFoundError(f"Config file not found: {p}")
    with open(p, 'r') as f:
        user = yaml.safe_load(f) or {}
    if not isinstance(user, dict):
        raise ValueError(f"Config file {p} must contain a mapping at top level")

    cfg = merge(DEFAULTS, user)
    validate(cfg)

    # set reproducible seeds if provided
    seed = cfg.get('seed', None)
    if seed is not None:
        _set_seeds(seed)
    return cfg


def get_default_config():
    return load_config(DEFAULT_PATH)


def merge(base, override):
    """Recursively merge `override` into a copy of `base`."""
    out = copy.deepcopy(base)
    for k, v in (override or {}).items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = merge(out[k], v)
        else:
            out[k] = v
    return out


def validate(cfg):
    """Raise ValueError naming the first offending key."""
    for section, key in _POSITIVE:
        v = cfg[section][key]
        if not isinstance(v, (int, float)) or v <= 0:
            raise ValueError(f"{section}.{key} must be positive, got {v!r}")
    for section, key in _UNIT:
        v = cfg[section][key]
        if not isinstance(v, (int, float)) or not 0.0 <= v <= 1.0:
            raise ValueError(f"{section}.{key} must be within [0, 1], got {v!r}")
    if cfg['growth']['friction'] < 0:
        raise ValueError(f"growth.friction must be non-negative, got {cfg['growth']['friction']!r}")
    if cfg['growth']['prune_delay_ms'] < 0:
        raise ValueError(f"growth.prune_delay_ms must be non-negative, got {cfg['growth']['prune_delay_ms']!r}")
    leaves = cfg['leaves']
    if int(leaves['side']) < 0 or int(leaves['top']) < 0 or int(leaves['side']) + int(leaves['top']) < 1:
        raise ValueError(f"leaves must describe at least one leaf, got {leaves!r}")
    if cfg['leaf_health']['base_chance'] + cfg['leaf_health']['dry_chance'] > 1.0:
        raise ValueError("leaf_health.base_chance + leaf_health.dry_chance must not exceed 1")
    return cfg


def _set_seeds(seed):
    print(f"[config] Setting global random seed = {seed}")
    random.seed(seed)
    np.random.seed(seed)


if __name__ == '__main__':
    print(load_config())
