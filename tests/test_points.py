import numpy as np
import pytest

from path_heuristics import InvalidInput
from points import parse_line, read_points, write_points, generate_instance


def write(tmp_path, text, name='pts.csv'):
    p = tmp_path / name
    p.write_text(text, encoding='utf-8')
    return str(p)


@pytest.mark.parametrize('line,expected', [
    ('A1,1,2,3', ('A1', [1.0, 2.0, 3.0])),
    ('1 2 3', (None, [1.0, 2.0, 3.0])),
    ('1, 2, 3', (None, [1.0, 2.0, 3.0])),
    ('B 4.5 -1', ('B', [4.5, -1.0, 0.0])),
    ('7,8', (None, [7.0, 8.0, 0.0])),
])
def test_parse_line_layouts(line, expected):
    assert parse_line(line) == expected

def test_parse_line_rejects_garbage():
    assert parse_line('a,b,c,d') is None
    assert parse_line('1,2,3,4,5') is None

def test_read_points_labeled(tmp_path):
    path = write(tmp_path, 'P1,10,10,0.5\nP2,20,5,0.6\nP3,15,25,0.4\n')
    pts = read_points(path)
    assert pts['labels'] == ['P1', 'P2', 'P3']
    assert pts['coords'].shape == (3, 3)
    assert pts['coords'][1].tolist() == [20.0, 5.0, 0.6]

def test_read_points_header_comments_and_synthetic_labels(tmp_path):
    path = write(tmp_path, 'X,Y,Z\n# scan 1\n\n1 2 3\n4 5 6\n')
    pts = read_points(path)
    assert pts['labels'] == ['P1', 'P2']
    assert pts['coords'].tolist() == [[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]]

def test_read_points_repeated_labels(tmp_path):
    pts = read_points(write(tmp_path, 'A,0,0,0\nA,1,1,1\n'))
    assert pts['labels'] == ['A', 'A']

def test_read_points_empty_file(tmp_path):
    pts = read_points(write(tmp_path, ''))
    assert pts['labels'] == []
    assert pts['coords'].shape == (0, 3)

def test_read_points_bad_line(tmp_path):
    path = write(tmp_path, 'A,0,0,0\nB,zero,1,1\n')
    with pytest.raises(InvalidInput, match=':2:'):
        read_points(path)

def test_read_points_non_finite(tmp_path):
    with pytest.raises(InvalidInput, match='non-finite'):
        read_points(write(tmp_path, 'A,0,0,0\nB,nan,1,1\n'))

def test_read_points_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_points(str(tmp_path / 'nope.csv'))

def test_write_points_in_order(tmp_path):
    out = str(tmp_path / 'out.csv')
    coords = np.array([[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]])
    write_points(out, ['a', 'b'], coords, [1, 0])
    lines = (tmp_path / 'out.csv').read_text().splitlines()
    assert lines == ['b,4.0,5.0,6.0', 'a,1.0,2.0,3.0']
    back = read_points(out)
    assert back['labels'] == ['b', 'a']

def test_generate_instance_reproducible():
    a = generate_instance(n=10, seed=3)
    b = generate_instance(n=10, seed=3)
    assert np.array_equal(a['coords'], b['coords'])
    assert len(a['labels']) == 10

def test_generate_instance_planar():
    inst = generate_instance(n=5, seed=1, dim=2)
    assert inst['coords'].shape == (5, 3)
    assert np.all(inst['coords'][:, 2] == 0.0)

def test_label_with_space_is_kept_on_first_line(tmp_path):
    pts = read_points(write(tmp_path, 'Start pt,0,0,0\nB,1,1,1\nC,2,2,2\n'))
    assert pts['labels'] == ['Start pt', 'B', 'C']
    assert pts['coords'][0].tolist() == [0.0, 0.0, 0.0]

def test_malformed_first_line_is_not_a_header(tmp_path):
    with pytest.raises(InvalidInput, match=':1:'):
        read_points(write(tmp_path, 'A,1,2,x\nB,1,1,1\nC,2,2,2\n'))

def test_whitespace_header_skipped(tmp_path):
    pts = read_points(write(tmp_path, 'label X Y Z\nA 1 2 3\n'))
    assert pts['labels'] == ['A']
