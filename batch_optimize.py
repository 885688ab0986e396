import os, argparse, logging
from optimize_path import run, load_config
from path_heuristics import InvalidInput, InsufficientPoints
from points import generate_instance, write_points
from logging_config import setup_logging

log = logging.getLogger('pathopt.batch')

def make_instances(sizes, seeds, out_dir, tag='exp', dim=3):
    inst_dir = os.path.join(out_dir, 'instances')
    os.makedirs(inst_dir, exist_ok=True)
    paths = []
    for n in sizes:
        for s in seeds:
            inst = generate_instance(n=int(n), seed=int(s), dim=dim)
            p = os.path.join(inst_dir, f'{tag}_seed{int(s)}_N{int(n)}.csv')
            write_points(p, inst['labels'], inst['coords'], list(range(int(n))))
            paths.append(p)
    return paths

def run_batch(inputs, metrics, out_dir='runs', max_passes=None, refine=True):
    """Runs every input under every metric; all rows land in out_dir/results.csv."""
    os.makedirs(out_dir, exist_ok=True)
    outputs = []
    for path in inputs:
        base = os.path.splitext(os.path.basename(path))[0]
        for m in metrics:
            out = os.path.join(out_dir, f'{base}_{m}_opt.csv')
            try:
                run(path, out, metric=m, refine=refine, max_passes=max_passes, out_dir=out_dir)
            except (SystemExit, InvalidInput, InsufficientPoints, OSError) as e:
                log.warning('skipping %s (%s): %s', path, m, e)
                continue
            outputs.append(out)
    return outputs

def batch_from_config(cfg):
    b = cfg.get('batch', {})
    out_dir = b.get('out_dir', 'runs')
    metrics = b.get('metrics', [cfg.get('metric', '3d')])
    inputs = list(b.get('inputs', []))
    if not inputs:
        inputs = make_instances(b.get('sizes', [50]), b.get('seeds', [1]), out_dir, tag=b.get('tag', 'exp'))
    max_passes = cfg.get('max_passes')
    return run_batch(inputs, metrics, out_dir=out_dir,
                     max_passes=None if max_passes is None else int(max_passes),
                     refine=bool(cfg.get('refine', True)))

if __name__ == '__main__':
    ap = argparse.ArgumentParser()
    ap.add_argument('--config', default='config.json')
    ap.add_argument('--inputs', nargs='+', default=None, help='point files; overrides generated instances')
    ap.add_argument('--out_dir', default=None)
    args = ap.parse_args()
    cfg = load_config(args.config)
    cfg.setdefault('batch', {})
    if args.inputs:
        cfg['batch']['inputs'] = args.inputs
    if args.out_dir:
        cfg['batch']['out_dir'] = args.out_dir
    setup_logging(getattr(logging, str(cfg.get('log_level', 'WARNING')).upper(), logging.WARNING))
    outs = batch_from_config(cfg)
    print("Outputs:", "\n".join(outs))
