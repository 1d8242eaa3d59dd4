# Copyright (c) Facebook, Inc. and its affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.
from typing import Any, List, Sequence

from .labels import *

#
# Set algebra over label sequences.
#
# All functions here mutate `output` in place (slice assignment, so
# views borrowing the list see the result) and return True iff
# `output` already equaled the result, i.e. the call was a no-op.
# Inputs are folded into output left to right unless noted otherwise.
#
# The sorted versions require output and every input to be strictly
# ascending; that's the caller's responsibility (see is_nondecreasing()).
# The unsorted versions only require uniqueness.
#


# non-decreasing check, the scan Axis uses to set its sortedness flag
def is_nondecreasing(seq: Sequence[Any]) -> bool:
    return all(not (seq[i + 1] < seq[i]) for i in range(len(seq) - 1))


#
# sorted merge: classic merge-by-comparison of two ascending sequences
#
def merge_sorted(output: List[Any], input: Sequence[Any]) -> bool:
    if len(input) == 0:
        return True
    result: List[Any] = []
    i, j = 0, 0
    m, n = len(output), len(input)
    while i < m and j < n:
        x, y = output[i], input[j]
        if y < x:
            result.append(y)
            j += 1
        elif y == x:
            result.append(x)
            i += 1
            j += 1
        else:
            result.append(x)
            i += 1
    # at most one of these tails is nonempty
    result.extend(output[i:])
    result.extend(input[j:])
    if len(result) == m:
        return True
    output[:] = result
    return False


def merge_to(output: List[Any], *inputs: Sequence[Any]) -> bool:
    res = True
    for input in inputs:
        res = merge_sorted(output, input) and res
    return res


#
# sorted intersect: keep the elements of output also found in input
#
def intersect_sorted(output: List[Any], input: Sequence[Any]) -> bool:
    result: List[Any] = []
    i, j = 0, 0
    m, n = len(output), len(input)
    while i < m and j < n:
        x, y = output[i], input[j]
        if x < y:
            i += 1
        elif x == y:
            result.append(x)
            i += 1
            j += 1
        else:
            j += 1
    if len(result) == m:
        return True
    output[:] = result
    return False


def intersect_to(output: List[Any], *inputs: Sequence[Any]) -> bool:
    res = True
    for input in inputs:
        res = intersect_sorted(output, input) and res
    return res


#
# unsorted merge.
#
# Labels of an unsorted axis carry positional meaning, so we can't merge
# by comparison. Instead we look for the longest common trailing run of
# output and input (the common case of axes broadcast along a shared
# tail). Only input labels before that run can be new. New labels keep
# their input order and are prepended when a common tail was found,
# appended otherwise.
#
# e.g. [a, b, d, e] + [h, b, c, e] -> [h, c, a, b, d, e]
#      [a, b] + [c, d] -> [a, b, c, d]
#
def merge_unsorted(output: List[Any], input: Sequence[Any]) -> bool:
    i, j = len(output), len(input)
    while i > 0 and j > 0 and output[i - 1] == input[j - 1]:
        i -= 1
        j -= 1
    if j == 0:
        return True
    present = set(output)
    missing = [x for x in input[:j] if x not in present]
    if len(missing) == 0:
        return True
    if i < len(output):
        output[:0] = missing
    else:
        output.extend(missing)
    return False


# inputs are processed last to first
def merge_unsorted_to(output: List[Any], *inputs: Sequence[Any]) -> bool:
    res = True
    for input in reversed(inputs):
        res = merge_unsorted(output, input) and res
    return res


#
# unsorted intersect: drop output labels absent from input, keeping
# output order. Also reports a change (returns False) when the
# survivors appear in a different relative order in input, since
# positions along the two axes then disagree.
#
def intersect_unsorted(output: List[Any], input: Sequence[Any]) -> bool:
    keep = set(input)
    kept = [x for x in output if x in keep]
    res = len(kept) == len(output)
    if not res:
        output[:] = kept
    survivors = set(kept)
    if [x for x in input if x in survivors] != kept:
        res = False
    return res


def intersect_unsorted_to(output: List[Any], *inputs: Sequence[Any]) -> bool:
    res = True
    for input in inputs:
        res = intersect_unsorted(output, input) and res
    return res
