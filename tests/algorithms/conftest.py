"""Sample graphs shared by the algorithm tests.

Each fixture returns ``(vertex_count, edges)`` in the raw boundary form so
tests exercise validation as well as the algorithm.
"""

import pytest


@pytest.fixture
def triangle_with_tail():
    #      0
    #     / \
    #    2---1---3---4
    #
    # Bridges: 1-3, 3-4. Articulation points: 1, 3.
    return 5, [[0, 1], [1, 2], [2, 0], [1, 3], [3, 4]]


@pytest.fixture
def path_5():
    # 0---1---2---3---4
    return 5, [[0, 1], [1, 2], [2, 3], [3, 4]]


@pytest.fixture
def star_4():
    #     1
    #     |
    # 2---0---3
    #     |
    #     4
    return 5, [[0, 1], [0, 2], [0, 3], [0, 4]]


@pytest.fixture
def cycle_6():
    # 0---1---2
    # |       |
    # 5---4---3
    return 6, [[0, 1], [1, 2], [2, 3], [3, 4], [4, 5], [5, 0]]


@pytest.fixture
def bowtie():
    # Two triangles sharing vertex 2:
    #  0       3
    #  | \   / |
    #  |  2    |
    #  | /   \ |
    #  1       4
    return 5, [[0, 1], [1, 2], [2, 0], [2, 3], [3, 4], [4, 2]]


@pytest.fixture
def clrs_network():
    # Classic six-vertex flow network (source 0, sink 5); max flow is 23.
    # The minimum cut separates {0, 1, 2, 4} from {3, 5}: 12 + 7 + 4 = 23.
    return 6, [
        [0, 1, 16],
        [0, 2, 13],
        [1, 2, 10],
        [2, 1, 4],
        [1, 3, 12],
        [3, 2, 9],
        [2, 4, 14],
        [4, 3, 7],
        [3, 5, 20],
        [4, 5, 4],
    ]


@pytest.fixture
def weighted_dag():
    # 0 -(4)-> 1 -(-2)-> 2
    # 0 -(5)-> 2        2 -(3)-> 3
    return 4, [[0, 1, 4], [1, 2, -2], [0, 2, 5], [2, 3, 3]]


@pytest.fixture
def negative_cycle():
    # 0 -> 1 -> 2 -> 0 with total weight -1
    return 3, [[0, 1, 1], [1, 2, -3], [2, 0, 1]]


@pytest.fixture
def conflict_chain_4():
    return 4, [[0, 1], [1, 2], [2, 3]]


@pytest.fixture
def conflict_complete_5():
    k = 5
    return k, [[i, j] for i in range(k) for j in range(i + 1, k)]
