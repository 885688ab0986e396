import argparse, json, os
import matplotlib.pyplot as plt

def plot_points(ax, coords, labels=None):
    xs = [c[0] for c in coords]
    ys = [c[1] for c in coords]
    ax.scatter(xs, ys, s=12, color='gray', zorder=1)
    if labels is not None and len(labels) <= 60:
        for (x, y), lab in zip(zip(xs, ys), labels):
            ax.annotate(str(lab), (x, y), fontsize=7, xytext=(3, 3), textcoords='offset points')

def plot_path(ax, coords, order, color, marker, label):
    xs = [coords[i][0] for i in order]
    ys = [coords[i][1] for i in order]
    ax.plot(xs, ys, color=color, marker=marker, linewidth=2, markersize=5, label=label)

def _finish(ax, title):
    ax.set_title(title)
    ax.set_xlabel('X')
    ax.set_ylabel('Y')
    ax.legend(loc='upper right')

def make_figures(coords, order_before, order_after, labels=None):
    """Original (red), optimized (blue) and both superimposed, XY projection."""
    figs = {}
    fig, ax = plt.subplots(figsize=(8, 6))
    plot_points(ax, coords, labels)
    plot_path(ax, coords, order_before, 'red', 'o', 'Original Path')
    _finish(ax, 'Original Path')
    figs['original'] = fig

    fig, ax = plt.subplots(figsize=(8, 6))
    plot_points(ax, coords, labels)
    plot_path(ax, coords, order_after, 'blue', 's', 'Optimized Path')
    _finish(ax, 'Optimized Path')
    figs['optimized'] = fig

    fig, ax = plt.subplots(figsize=(9, 7))
    plot_path(ax, coords, order_before, 'red', 'o', 'Original Path')
    plot_path(ax, coords, order_after, 'blue', 's', 'Optimized Path')
    _finish(ax, 'Original (Red) vs Optimized (Blue)')
    figs['comparison'] = fig
    return figs

def save_figures(figs, stem, show=False):
    outs = []
    for name, fig in figs.items():
        out = f'{stem}_{name}.png'
        fig.savefig(out, bbox_inches='tight', dpi=150)
        outs.append(out)
        print(f'Saved: {out}')
    if show:
        plt.show()
    for fig in figs.values():
        plt.close(fig)
    return outs

def main(solution_json, show=False):
    with open(solution_json, 'r', encoding='utf-8') as f:
        sol = json.load(f)
    coords = sol['coords']
    n = len(coords)
    if n == 0:
        raise SystemExit(f'No points in {solution_json}')
    figs = make_figures(coords, list(range(n)), sol['order'], sol.get('labels'))
    stem = os.path.splitext(solution_json)[0]
    return save_figures(figs, stem, show=show)

if __name__ == '__main__':
    ap = argparse.ArgumentParser()
    ap.add_argument('solution_json', help='JSON written by optimize_path.py --save_json')
    ap.add_argument('--show', action='store_true')
    args = ap.parse_args()
    main(args.solution_json, args.show)
