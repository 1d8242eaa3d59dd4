# Copyright (c) Facebook, Inc. and its affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.
from unittest import TestCase, main

from axial import *

#
# coordinate fixtures
#


# abscissa: a c d, ordinate: 1 2 4
def make_coordinates():
    return coordinates(abscissa=["a", "c", "d"], ordinate=[1, 2, 4])


# abscissa: a d e, ordinate: 1 4 5
def make_coordinates2():
    return coordinates(abscissa=["a", "d", "e"], ordinate=[1, 4, 5])


# abscissa: a d e, ordinate: 1 4 5, altitude: 1 2 4
def make_coordinates3():
    return coordinates(abscissa=["a", "d", "e"], ordinate=[1, 4, 5], altitude=[1, 2, 4])


def make_merge_coordinates():
    return coordinates(abscissa=["a", "c", "d", "e"], ordinate=[1, 2, 4, 5], altitude=[1, 2, 4])


def make_intersect_coordinates():
    return coordinates(abscissa=["a", "d"], ordinate=[1, 4], altitude=[1, 2, 4])


class TestCoordinates(TestCase):
    def test_construction_forms(self):
        c = make_coordinates()
        self.assertEqual(Coordinates({"abscissa": ["a", "c", "d"], "ordinate": [1, 2, 4]}), c)
        self.assertEqual(Coordinates([("abscissa", ["a", "c", "d"]), ("ordinate", [1, 2, 4])]), c)
        self.assertEqual(
            Coordinates([named_axis("abscissa", ["a", "c", "d"]), named_axis("ordinate", [1, 2, 4])]), c
        )
        self.assertIs(coordinates(c), c)
        with self.assertRaises(ValueError):
            Coordinates([("x", 2), ("x", 3)])
        with self.assertRaises(ValueError):
            coordinates({"x": 2}, x=3)

    def test_builder_dimension_names(self):
        c = coordinates(x=[1, 2, 3])
        self.assertEqual(c.dims, ("x",))
        self.assertEqual(c["x"].labels(), [1, 2, 3])
        c = coordinates({"y": 2}, x=["a"])
        self.assertEqual(c.dims, ("y", "x"))
        self.assertEqual(c.shape, (2, 1))

    def test_accessors(self):
        c = make_coordinates()
        self.assertEqual(c.dims, ("abscissa", "ordinate"))
        self.assertEqual(c.shape, (3, 3))
        self.assertEqual(c.ndim, 2)
        self.assertEqual(len(c), 2)
        self.assertIn("abscissa", c)
        self.assertNotIn("altitude", c)
        self.assertEqual(c["abscissa"].labels(), ["a", "c", "d"])
        with self.assertRaises(KeyNotFoundError):
            c["altitude"]
        self.assertEqual([a.name for a in c], ["abscissa", "ordinate"])
        self.assertTrue(all(isinstance(a, NamedAxis) for a in c))

    def test_positions(self):
        c = make_coordinates()
        self.assertEqual(c.position("abscissa", "d"), 2)
        self.assertEqual(c.position("ordinate", 2), 1)
        self.assertEqual(c.positions("c", 4), (1, 2))
        with self.assertRaises(KeyNotFoundError):
            c.position("abscissa", "z")
        with self.assertRaises(ValueError):
            c.positions("c")
        self.assertEqual(c.dim_index("ordinate"), 1)

    def test_drop(self):
        c = make_coordinates3()
        d = c.drop("ordinate")
        self.assertEqual(d.dims, ("abscissa", "altitude"))
        self.assertEqual(c.ndim, 3)
        with self.assertRaises(KeyNotFoundError):
            c.drop("longitude")

    def test_equality_and_copy(self):
        c = make_coordinates()
        self.assertEqual(c, make_coordinates())
        self.assertNotEqual(c, make_coordinates2())
        # dimension order matters
        self.assertNotEqual(c, coordinates(ordinate=[1, 2, 4], abscissa=["a", "c", "d"]))
        d = c.copy()
        d["abscissa"].merge(AxisVariant(Axis(["z"])))
        self.assertEqual(c, make_coordinates())
        self.assertNotEqual(c, d)


class TestBroadcast(TestCase):
    def test_merge(self):
        c = make_coordinates()
        res = c.broadcast(make_coordinates3(), join=Join.OUTER)
        self.assertEqual(res, (False, False))
        self.assertEqual(c, make_merge_coordinates())

    def test_intersect(self):
        c = make_coordinates()
        res = c.broadcast(make_coordinates3(), join=Join.INNER)
        self.assertEqual(res, (False, False))
        self.assertEqual(c, make_intersect_coordinates())

    def test_default_join_is_inner(self):
        c = make_coordinates()
        c.broadcast(make_coordinates3())
        self.assertEqual(c, make_intersect_coordinates())

    def test_same_coordinates(self):
        c = make_coordinates()
        self.assertEqual(c.broadcast(make_coordinates(), join=Join.OUTER), (True, True))
        self.assertEqual(c.broadcast(make_coordinates()), (True, True))
        self.assertEqual(c, make_coordinates())

    def test_same_dimensions_different_labels(self):
        c = make_coordinates()
        self.assertEqual(c.broadcast(make_coordinates2(), join="outer"), (True, False))
        self.assertEqual(c["abscissa"].labels(), ["a", "c", "d", "e"])

    def test_receiver_already_holds_result(self):
        # outer: operand labels a subset of ours
        c = coordinates(x=[1, 2, 3])
        self.assertEqual(c.broadcast(coordinates(x=[1, 2]), join=Join.OUTER), (True, True))
        self.assertEqual(c["x"].labels(), [1, 2, 3])
        # inner: operand labels a superset of ours
        c = coordinates(x=[1, 2])
        self.assertEqual(c.broadcast(coordinates(x=[1, 2, 3]), join=Join.INNER), (True, True))
        self.assertEqual(c["x"].labels(), [1, 2])

    def test_empty_receiver(self):
        c = Coordinates()
        self.assertEqual(c.broadcast(make_coordinates()), (True, True))
        self.assertEqual(c, make_coordinates())
        self.assertEqual(Coordinates().broadcast(), (True, True))

    def test_several(self):
        c = make_coordinates()
        res = c.broadcast(make_coordinates2(), make_coordinates3(), join=Join.OUTER)
        self.assertEqual(res, (False, False))
        self.assertEqual(c, make_merge_coordinates())

    def test_new_dimension_placement(self):
        # shared trailing dims: new ones go in front
        c = coordinates(y=[1, 2])
        self.assertEqual(c.broadcast(coordinates(x=["a"], y=[1, 2])), (False, True))
        self.assertEqual(c.dims, ("x", "y"))
        # no overlap: appended
        c = coordinates(x=["a"])
        c.broadcast(coordinates(y=[1]))
        self.assertEqual(c.dims, ("x", "y"))

    def test_broadcast_coordinates(self):
        c1 = make_coordinates()
        result, same_dimensions, trivial = broadcast_coordinates(c1, make_coordinates3(), join=Join.OUTER)
        self.assertEqual(result, make_merge_coordinates())
        self.assertFalse(same_dimensions)
        self.assertFalse(trivial)
        self.assertEqual(c1, make_coordinates())

    def test_default_axes(self):
        c = coordinates(x=3)
        self.assertEqual(c.broadcast(coordinates(x=3)), (True, True))
        self.assertTrue(c["x"].is_default())

        c = coordinates(x=3)
        self.assertEqual(c.broadcast(coordinates(x=[1, 5]), join=Join.OUTER), (True, False))
        self.assertFalse(c["x"].is_default())
        self.assertEqual(c["x"].labels(), [0, 1, 2, 5])

        c = coordinates(x=[1, 5])
        self.assertEqual(c.broadcast(coordinates(x=3), join=Join.INNER), (True, False))
        self.assertEqual(c["x"].labels(), [1])

    def test_mismatch_leaves_receiver(self):
        c = make_coordinates()
        with self.assertRaises(LabelTypeError):
            c.broadcast(make_coordinates3(), coordinates(abscissa=[1, 2]), join=Join.OUTER)
        self.assertEqual(c, make_coordinates())


if __name__ == "__main__":
    main()
