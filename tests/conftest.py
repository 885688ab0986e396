import matplotlib
matplotlib.use('Agg')

import pytest
from points import generate_instance

@pytest.fixture
def scenario_coords():
    # P1, P2, P3 from a small CMM scan
    return [[10.0, 10.0, 0.5], [20.0, 5.0, 0.6], [15.0, 25.0, 0.4]]

@pytest.fixture(params=[(8, 1), (15, 2), (30, 3), (40, 7)])
def random_coords(request):
    n, seed = request.param
    return generate_instance(n=n, seed=seed)['coords']
