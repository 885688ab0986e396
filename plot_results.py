import argparse, glob
import pandas as pd
import matplotlib.pyplot as plt

def load_results(pattern):
    files = sorted(glob.glob(pattern))
    if not files:
        raise SystemExit(f'No files match: {pattern}')
    df = pd.concat([pd.read_csv(p) for p in files], ignore_index=True)
    if 'metric' not in df or 'reduction_pct' not in df:
        raise ValueError('Results CSV must have columns: metric, reduction_pct')
    return df

def main(pattern, out_png=None):
    df = load_results(pattern)
    g = df.groupby('metric')['reduction_pct']
    mu = g.mean().sort_index()
    se = g.sem().reindex(mu.index).fillna(0.0)
    fig = plt.figure()
    plt.bar(range(len(mu)), mu.values, yerr=se.values, capsize=4)
    plt.xticks(range(len(mu)), mu.index)
    plt.ylabel('Path length reduction % (mean ± s.e.)')
    plt.title(f'Reduction across {len(df)} runs')
    out = out_png or 'aggregated_results.png'
    plt.savefig(out, bbox_inches='tight', dpi=150)
    plt.close(fig)
    print(f'Saved plot: {out}')
    return out

if __name__ == '__main__':
    ap = argparse.ArgumentParser()
    ap.add_argument('pattern', help='Glob for results CSVs, e.g. "runs/results.csv"')
    ap.add_argument('--out', default=None)
    args = ap.parse_args()
    main(args.pattern, args.out)
