# Copyright (c) Facebook, Inc. and its affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.
import random
from string import ascii_letters
from typing import List

#
# random label factories shared by the tests. Each returns a list of
# unique labels; pass sort=True for ascending order.
#


def sample_ints(n: int, lo: int = -64, hi: int = 64, sort: bool = False) -> List[int]:
    xs = random.sample(range(lo, hi), min(n, hi - lo))
    return sorted(xs) if sort else xs


def sample_chars(n: int, sort: bool = False) -> List[str]:
    xs = random.sample(ascii_letters, min(n, len(ascii_letters)))
    return sorted(xs) if sort else xs


def sample_strings(n: int, maxlen: int = 6, sort: bool = False) -> List[str]:
    seen = set()
    while len(seen) < n:
        k = random.randint(1, maxlen)
        seen.add("".join(random.choice(ascii_letters) for _ in range(k)))
    xs = list(seen)
    random.shuffle(xs)
    return sorted(xs) if sort else xs


# a random subsequence of xs, order kept
def subsequence(xs: List, p: float = 0.5) -> List:
    return [x for x in xs if random.random() < p]
