# optimize_path.py
# Reorders a point file to shorten the path through it (nearest neighbor + 2-opt).
# Usage: optimize-path input.csv output.csv [--metric 2d|3d] [--plot] ...

import os, json, argparse, logging
import pandas as pd

from logging_config import setup_logging
from path_heuristics import optimize, METRICS, InvalidInput, InsufficientPoints
from points import read_points, write_points

log = logging.getLogger('pathopt.cli')

DEFAULTS = {
    'metric': '3d',
    'start': 0,
    'refine': True,
    'max_passes': None,
    'plot': False,
    'show': False,
    'save_json': False,
    'out_dir': None,
    'log_level': 'WARNING',
    'log_file': None,
}

def summary_frame(res):
    rows = [
        {'path': 'Initial (input order)', 'length': res['length_before']},
        {'path': 'Nearest neighbor', 'length': res['length_nn']},
        {'path': 'Optimized', 'length': res['length_after']},
    ]
    return pd.DataFrame(rows)

def run(input_path, output_path, metric='3d', start=0, refine=True, max_passes=None,
        plot=False, show=False, save_json=False, out_dir=None):
    pts = read_points(input_path)
    labels, coords = pts['labels'], pts['coords']
    if not labels:
        raise SystemExit(f'Error: no points read from {input_path}')

    res = optimize(coords, metric=metric, start=start, refine=refine, max_passes=max_passes)
    write_points(output_path, labels, coords, res['order'])

    df = summary_frame(res)
    print(f"\n=== Path length ({metric} metric, {res['n']} points; lower is better) ===")
    print(df.to_string(index=False))
    print(f"Reduction: {res['reduction_pct']:.2f}%  (2-opt passes: {res['passes']})")
    print(f"Wrote reordered points to {output_path}")

    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
        csv_path = os.path.join(out_dir, 'results.csv')
        row = pd.DataFrame([{
            'input': input_path, 'metric': metric, 'n': res['n'], 'start': start, 'refine': refine,
            'length_before': res['length_before'], 'length_nn': res['length_nn'],
            'length_after': res['length_after'], 'reduction_pct': res['reduction_pct'],
            'passes': res['passes'],
        }])
        row.to_csv(csv_path, mode='a', header=not os.path.exists(csv_path), index=False)
        print(f"Saved: {csv_path}")

    stem = os.path.splitext(output_path)[0]
    if save_json:
        sol = {
            'input': input_path, 'metric': metric, 'start': int(start),
            'labels': labels, 'coords': coords.tolist(), 'order': [int(i) for i in res['order']],
            'length_before': res['length_before'], 'length_nn': res['length_nn'],
            'length_after': res['length_after'], 'reduction_pct': res['reduction_pct'],
            'passes': res['passes'],
        }
        json_dir = out_dir or os.path.dirname(stem)
        json_path = os.path.join(json_dir, os.path.basename(stem) + '_solution.json')
        with open(json_path, 'w', encoding='utf-8') as f:
            json.dump(sol, f)
        print(f"Saved: {json_path}")

    if plot or show:
        from visualize_paths import make_figures, save_figures
        figs = make_figures(coords, list(range(res['n'])), res['order'], labels)
        res['plots'] = save_figures(figs, stem, show=show)
    return res

def load_config(path='config.json'):
    with open(path, 'r', encoding='utf-8') as f:
        return json.load(f)

def resolve_options(cfg, args):
    """Config values over DEFAULTS, explicit command-line flags over both."""
    opts = dict(DEFAULTS)
    for k in DEFAULTS:
        if k in cfg:
            opts[k] = cfg[k]
    for k in DEFAULTS:
        v = getattr(args, k, None)
        if v is not None:
            opts[k] = v
    opts['start'] = int(opts['start'])
    opts['refine'] = bool(opts['refine'])
    opts['max_passes'] = None if opts['max_passes'] is None else int(opts['max_passes'])
    if opts['metric'] not in METRICS:
        raise SystemExit(f"Error: metric must be one of: {', '.join(METRICS)}")
    return opts

def build_parser():
    ap = argparse.ArgumentParser(description='Reorder labeled points to shorten the path through them.')
    ap.add_argument('input', help='point file: label,X,Y,Z per line (label optional)')
    ap.add_argument('output', help='reordered point file to write')
    ap.add_argument('--config', type=str, default=None, help='JSON file with default options (config.json if present)')
    ap.add_argument('--metric', choices=sorted(METRICS), default=None)
    ap.add_argument('--start', type=int, default=None)
    ap.add_argument('--refine', dest='refine', action='store_const', const=True, default=None,
                    help='run 2-opt after nearest neighbor (overrides a config with refine off)')
    ap.add_argument('--no_refine', dest='refine', action='store_const', const=False, default=None,
                    help='nearest neighbor only, skip 2-opt')
    ap.add_argument('--max_passes', type=int, default=None)
    ap.add_argument('--plot', action='store_const', const=True, default=None)
    ap.add_argument('--show', action='store_const', const=True, default=None)
    ap.add_argument('--save_json', action='store_const', const=True, default=None)
    ap.add_argument('--out_dir', type=str, default=None)
    ap.add_argument('--log_level', type=str, default=None)
    ap.add_argument('--log_file', type=str, default=None)
    return ap

def cli(argv=None):
    args = build_parser().parse_args(argv)
    cfg = {}
    cfg_path = args.config or ('config.json' if os.path.exists('config.json') else None)
    if cfg_path:
        try:
            cfg = load_config(cfg_path)
        except (OSError, ValueError) as e:
            raise SystemExit(f'Error: cannot read config {cfg_path}: {e}')
    opts = resolve_options(cfg, args)
    setup_logging(getattr(logging, str(opts.pop('log_level')).upper(), logging.WARNING), opts.pop('log_file'))
    log.debug('options: %s', opts)
    try:
        run(args.input, args.output, **opts)
    except FileNotFoundError as e:
        raise SystemExit(f'Error: cannot open {e.filename}')
    except (InvalidInput, InsufficientPoints) as e:
        raise SystemExit(f'Error: {e}')
    except OSError as e:
        raise SystemExit(f'Error: {e}')
    return 0

if __name__ == '__main__':
    cli()
