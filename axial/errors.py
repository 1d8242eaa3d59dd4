# Copyright (c) Facebook, Inc. and its affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.
from .config import *

#
# Error taxonomy. Each class also derives from the builtin a caller
# would naturally catch, so `except KeyError` keeps working around
# position lookups etc.
#


class AxialError(Exception):
    """Base class for axial-specific exceptions."""


# KeyError.__str__ reprs its argument; we want the plain message
class KeyNotFoundError(AxialError, KeyError):
    def __init__(self, message: str, key=None):
        super().__init__(message)
        self.key = key

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


class UnsupportedOperationError(AxialError, RuntimeError):
    pass


class LabelTypeError(AxialError, TypeError):
    pass


class MissingAxisError(AxialError, LookupError):
    def __init__(self, name):
        super().__init__(f"missing label for axis {name!r}")
        self.name = name
