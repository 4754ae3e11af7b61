from brickfall.snapshot import parse_snapshot

SAMPLE = """\
1,0,1~1,2,1
0,0,2~2,0,2
0,2,3~2,2,3
0,0,4~0,2,4
2,0,5~2,2,5
0,1,6~2,1,6
1,1,8~1,1,9
"""

# Settled layout of SAMPLE, by id (A..G in the usual walkthrough).
SAMPLE_SETTLED = {
    0: ((1, 0, 1), (1, 2, 1)),
    1: ((0, 0, 2), (2, 0, 2)),
    2: ((0, 2, 2), (2, 2, 2)),
    3: ((0, 0, 3), (0, 2, 3)),
    4: ((2, 0, 3), (2, 2, 3)),
    5: ((0, 1, 4), (2, 1, 4)),
    6: ((1, 1, 5), (1, 1, 6)),
}


def sample_pairs():
    return parse_snapshot(SAMPLE)
