# Copyright (c) Facebook, Inc. and its affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.
from enum import Enum

#
# Library-wide configuration. Everything here is closed and decided at
# import time: changing a value changes which alternatives exist (label
# types, index kinds, join policy), never how the algorithms work.
#

# longest label accepted by the FSTRING label type
FIXED_STRING_LENGTH = 55


#
# label -> position index representation used by Axis.
# HASH is a dict (O(1) lookup), SORTED keeps (label, position) pairs
# ordered by label and bisects (O(log n) lookup, no hashing needed
# for the lookup itself).
#
class IndexKind(Enum):
    HASH = "hash"
    SORTED = "sorted"


#
# how shared axes are combined when coordinate systems are broadcast:
# OUTER merges labels (set union), INNER intersects them.
#
class Join(Enum):
    OUTER = "outer"
    INNER = "inner"


DEFAULT_INDEX = IndexKind.HASH
DEFAULT_JOIN = Join.INNER
