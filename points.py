# points.py
# Reading / writing labeled point lists and generating random instances.
# Input lines: label,X,Y,Z | X,Y,Z | label,X,Y | X,Y  (comma separated, or whitespace when a line has no comma)

import re, math, logging
import numpy as np
import pandas as pd

from path_heuristics import InvalidInput

log = logging.getLogger('pathopt.points')

_WS = re.compile(r'\s+')

def split_fields(line):
    # commas win over whitespace so labels may contain spaces
    line = line.strip()
    if ',' in line:
        fields = [f.strip() for f in line.split(',')]
    else:
        fields = _WS.split(line)
    return [f for f in fields if f != '']

def _to_floats(fields):
    try:
        return [float(v) for v in fields]
    except ValueError:
        return None

def is_header(fields):
    """True when no field reads as a number, e.g. 'label,X,Y,Z'."""
    return bool(fields) and all(_to_floats([f]) is None for f in fields)

def parse_line(line):
    """Returns (label or None, [x, y, z]) or None if the fields are not numbers."""
    fields = split_fields(line)
    if len(fields) == 4:
        label, vals = fields[0], _to_floats(fields[1:])
    elif len(fields) == 3:
        vals = _to_floats(fields)
        label = None
        if vals is None:
            label, vals = fields[0], _to_floats(fields[1:])
            if vals is not None:
                vals.append(0.0)
    elif len(fields) == 2:
        label, vals = None, _to_floats(fields)
        if vals is not None:
            vals.append(0.0)
    else:
        return None
    if vals is None:
        return None
    return label, vals

def read_points(path):
    labels, rows = [], []
    first = True
    with open(path, 'r', encoding='utf-8') as f:
        for lineno, line in enumerate(f, start=1):
            s = line.strip()
            if not s or s.startswith('#'):
                continue
            parsed = parse_line(s)
            if parsed is None:
                if first and is_header(split_fields(s)):
                    log.debug('%s: skipping header line %r', path, s)
                    first = False
                    continue
                raise InvalidInput(f'{path}:{lineno}: cannot parse point from {s!r}')
            first = False
            label, vals = parsed
            if not all(math.isfinite(v) for v in vals):
                raise InvalidInput(f'{path}:{lineno}: non-finite coordinate in {s!r}')
            labels.append(label if label is not None else f'P{len(rows)+1}')
            rows.append(vals)
    coords = np.array(rows, dtype=float).reshape(-1, 3)
    log.info('read %d points from %s', len(labels), path)
    return {'labels': labels, 'coords': coords}

def write_points(path, labels, coords, order):
    coords = np.asarray(coords, dtype=float)
    df = pd.DataFrame({
        'label': [labels[i] for i in order],
        'x': coords[order, 0] if len(order) else [],
        'y': coords[order, 1] if len(order) else [],
        'z': coords[order, 2] if len(order) else [],
    })
    df.to_csv(path, header=False, index=False)
    log.info('wrote %d points to %s', len(df), path)
    return path

def generate_instance(n=50, seed=1, dim=3, scale=100.0):
    rng = np.random.default_rng(seed)
    coords = np.zeros((n, 3), dtype=float)
    coords[:, :dim] = rng.random((n, dim)) * scale
    return {
        'labels': [f'P{i+1}' for i in range(n)],
        'coords': coords,
    }
