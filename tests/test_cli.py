import argparse
import json

import pytest

import main


def test_parse_hold():
    assert main.parse_hold('10:2.5') == (10_000.0, 2_500.0)
    with pytest.raises(argparse.ArgumentTypeError):
        main.parse_hold('ten')
    with pytest.raises(argparse.ArgumentTypeError):
        main.parse_hold('-1:2')


def test_parse_args_sim_run():
    args = main.parse_args(['sim_run', '--seconds', '12', '--hold', '1:2', '--hold', '5:1.5',
                            '--prune_every', '3', '--seed', '4'])
    assert args.cmd == 'sim_run'
    assert args.seconds == 12
    assert args.hold == [(1000.0, 2000.0), (5000.0, 1500.0)]
    assert args.prune_every == 3
    assert args.seed == 4


def test_sim_run_headless(tmp_path, monkeypatch, capsys):
    monkeypatch.setattr(main, 'ROOT', tmp_path)
    plot = tmp_path / 'run.png'
    hist = tmp_path / 'history.png'
    args = main.parse_args(['sim_run', '--seconds', '8', '--seed', '3', '--hold', '1:2',
                            '--prune_every', '2', '--plot', str(plot), '--history_plot', str(hist)])
    final = main.sim_run(args)

    assert 0.0 <= final['water_level'] <= 1.0
    assert 0.0 <= final['growth_level'] <= 1.0
    assert len(final['growth_history']) == 8
    assert plot.exists() and hist.exists()
    assert list((tmp_path / 'logs').glob('plant_run_*.log'))

    out = capsys.readouterr().out
    assert '"water_level"' in out


def test_show_config_prints_yaml(capsys):
    main.main(['show_config'])
    out = capsys.readouterr().out
    assert 'moisture:' in out
    assert 'charge_rate: 0.02' in out


def test_no_command(capsys):
    main.main([])
    assert 'No command given' in capsys.readouterr().out
