# path_heuristics.py
# Open-path ordering of measured points: nearest-neighbor construction + 2-opt clean-up.
# The path never closes back on its start; position 0 and the last position are anchors for 2-opt.

import math, logging
import numpy as np

log = logging.getLogger('pathopt.heuristics')

TOLERANCE = 1e-9

class InvalidInput(ValueError):
    """Malformed or non-finite point data, or a bad parameter."""

class InsufficientPoints(ValueError):
    """Fewer than two points where an optimization was requested."""

# ---------------- Distance metrics ----------------
def _checked(d):
    if not math.isfinite(d):
        raise InvalidInput('non-finite coordinates in distance computation')
    return d

def planar_distance(a, b):
    return _checked(float(np.hypot(a[0]-b[0], a[1]-b[1])))

def spatial_distance(a, b):
    return _checked(float(np.linalg.norm(np.asarray(a[:3], dtype=float) - np.asarray(b[:3], dtype=float))))

METRICS = {'2d': planar_distance, '3d': spatial_distance}

def get_metric(name):
    try:
        return METRICS[name]
    except KeyError:
        raise InvalidInput(f'unknown metric {name!r}, expected one of: {", ".join(METRICS)}') from None

# ---------------- Tour ----------------
class Tour:
    """Visiting order over point indices plus its cached open-path length.

    `length` is only ever assigned from `path_length` so it cannot drift from
    the order it describes. `passes` counts the 2-opt passes run on it.
    """

    def __init__(self, order, length, metric='3d'):
        if len(order) < 1:
            raise InvalidInput('a tour needs at least one point')
        self.order = list(order)
        self.length = float(length)
        self.metric = metric
        self.passes = 0

    def __len__(self):
        return len(self.order)

    def __repr__(self):
        return f'Tour(n={len(self.order)}, length={self.length:.6g}, metric={self.metric!r})'

def check_coords(coords):
    coords = np.asarray(coords, dtype=float)
    if coords.ndim != 2 or coords.shape[1] < 2:
        raise InvalidInput(f'expected an (n, 2) or (n, 3) coordinate array, got shape {coords.shape}')
    if not np.all(np.isfinite(coords)):
        bad = int(np.argmin(np.all(np.isfinite(coords), axis=1)))
        raise InvalidInput(f'point {bad} has non-finite coordinates')
    return coords

def is_permutation(order, n):
    return len(order) == n and sorted(order) == list(range(n))

def path_length(coords, order, metric='3d'):
    """Sum of consecutive distances along `order`; no closing edge."""
    d = get_metric(metric)
    return sum((d(coords[order[i-1]], coords[order[i]]) for i in range(1, len(order))), 0.0)

# ---------------- Construction ----------------
def nearest_neighbor(coords, start=0, metric='3d'):
    """Greedy path from `start`: always step to the closest unvisited point.

    Distance ties go to the lowest point index: `remaining` is kept in
    ascending order and only a strictly shorter distance replaces the best.
    """
    coords = check_coords(coords)
    n = len(coords)
    if n < 2:
        raise InsufficientPoints(f'need at least 2 points to build a path, got {n}')
    if not 0 <= start < n:
        raise InvalidInput(f'start index {start} out of range for {n} points')
    d = get_metric(metric)
    remaining = [i for i in range(n) if i != start]
    order = [start]
    cur = start
    while remaining:
        best_pos, best = 0, math.inf
        for pos, j in enumerate(remaining):
            dd = d(coords[cur], coords[j])
            if dd < best:
                best, best_pos = dd, pos
        cur = remaining.pop(best_pos)
        order.append(cur)
    tour = Tour(order, path_length(coords, order, metric), metric)
    log.debug('nearest neighbor from %d: length %.6f', start, tour.length)
    return tour

# ---------------- Local search ----------------
def two_opt_delta(coords, order, i, j, d):
    # reversing order[i..j] swaps edges (i-1,i),(j,j+1) for (i-1,j),(i,j+1)
    a, b, c, e = coords[order[i-1]], coords[order[i]], coords[order[j]], coords[order[j+1]]
    return (d(a, c) + d(b, e)) - (d(a, b) + d(c, e))

def two_opt(coords, tour, metric=None, max_passes=None):
    """First-improvement 2-opt on an open path, reversing `tour.order` in place.

    Scans 1 <= i < j <= n-2 so both ends stay where they are. A reversal is
    taken as soon as it shortens the path by more than TOLERANCE; passes repeat
    until one accepts nothing, or `max_passes` passes have run.
    """
    metric = metric or tour.metric
    d = get_metric(metric)
    order = tour.order
    if metric != tour.metric:
        tour.metric = metric
        tour.length = path_length(coords, order, metric)
    n = len(order)
    if max_passes is not None and max_passes < 1:
        raise InvalidInput(f"max_passes must be at least 1, got {max_passes}")
    improved = True; passes = 0
    while improved and (max_passes is None or passes < max_passes):
        improved = False
        passes += 1; tour.passes += 1
        moves = 0
        for i in range(1, n-2):
            for j in range(i+1, n-1):
                if two_opt_delta(coords, order, i, j, d) < -TOLERANCE:
                    order[i:j+1] = order[i:j+1][::-1]
                    tour.length = path_length(coords, order, metric)
                    improved = True
                    moves += 1
        log.debug('2-opt pass %d: %d reversals, length %.6f', tour.passes, moves, tour.length)
    if improved:
        log.warning('2-opt stopped at the pass limit (%d) before converging', max_passes)
    return tour

# ---------------- Pipeline ----------------
def reduction_pct(before, after):
    if before == 0:
        return 0.0
    return (before - after) / before * 100.0

def optimize(coords, metric='3d', start=0, refine=True, max_passes=None):
    """
    Orders `coords` with nearest neighbor (+ 2-opt when `refine`).

    Returns a dict with keys: metric, n, order, length_before, length_nn,
    length_after, reduction_pct, passes. Fewer than two points give the
    identity order with zero lengths.
    """
    get_metric(metric)
    coords = check_coords(coords) if len(coords) else np.zeros((0, 3))
    n = len(coords)
    before = path_length(coords, list(range(n)), metric)
    if n < 2:
        log.info('%d point(s): nothing to optimize', n)
        return {'metric': metric, 'n': n, 'order': list(range(n)),
                'length_before': before, 'length_nn': before, 'length_after': before,
                'reduction_pct': 0.0, 'passes': 0}
    tour = nearest_neighbor(coords, start=start, metric=metric)
    length_nn = tour.length
    if refine:
        tour = two_opt(coords, tour, metric, max_passes=max_passes)
    if not is_permutation(tour.order, n):
        raise RuntimeError('optimized order is not a permutation of the input points')
    log.info('n=%d metric=%s: %.6f -> %.6f (nn %.6f, %d 2-opt passes)',
             n, metric, before, tour.length, length_nn, tour.passes)
    return {'metric': metric, 'n': n, 'order': list(tour.order),
            'length_before': before, 'length_nn': length_nn, 'length_after': tour.length,
            'reduction_pct': reduction_pct(before, tour.length), 'passes': tour.passes}
