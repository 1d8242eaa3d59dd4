# Copyright (c) Facebook, Inc. and its affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.
import random
from unittest import TestCase, main

from axial import *
from util import sample_chars, sample_ints, sample_strings

random.seed(0)


# a concrete axis for each default label type, with labels to probe it
def typed_axes():
    return [
        (Axis(sample_ints(8), INT), -1000),
        (Axis(sample_ints(8, lo=0), SIZE), 1000),
        (Axis(sample_chars(8), CHAR), "!"),
        (Axis(sample_strings(8), FSTRING), "?" * 7),
    ]


class TestVariantRoundTrip(TestCase):
    def test_same_behavior_as_concrete_axis(self):
        for _ in range(20):
            for a, absent in typed_axes():
                v = AxisVariant(a)
                self.assertEqual(v.label_type, a.label_type)
                self.assertFalse(v.is_default())
                self.assertEqual(v.labels(), a.labels())
                self.assertEqual(v.labels(a.label_type), a.labels())
                self.assertEqual(len(v), len(a))
                self.assertEqual(v.is_sorted(), a.is_sorted())
                self.assertEqual(list(v), list(a))
                for x, i in a:
                    self.assertTrue(v.contains(x))
                    self.assertEqual(v.position(x), i)
                    self.assertEqual(v[x], i)
                    self.assertEqual(v.label(i), x)
                    self.assertEqual(v.find(x), (x, i))
                self.assertFalse(v.contains(absent))
                self.assertIsNone(v.find(absent))
                with self.assertRaises(KeyNotFoundError):
                    v.position(absent)

    def test_default_axis_alternative(self):
        v = AxisVariant(DefaultAxis(4))
        self.assertTrue(v.is_default())
        self.assertEqual(v.label_type, INT)
        self.assertEqual(v.labels(), [0, 1, 2, 3])
        self.assertTrue(v.contains(3))
        self.assertFalse(v.contains(4))
        self.assertEqual(v.alternative(), (0, True))
        self.assertEqual(AxisVariant(Axis(["a"])).alternative(), (2, False))

    def test_visit(self):
        v = AxisVariant(Axis(["a", "b"]))
        self.assertIsInstance(v.visit(lambda a: a), Axis)
        self.assertEqual(v.visit(len), 2)

    def test_construction(self):
        self.assertEqual(AxisVariant().labels(), [])
        with self.assertRaises(TypeError):
            AxisVariant(["a", "b"])
        # label type outside the configured set
        with self.assertRaises(LabelTypeError):
            AxisVariant(Axis(["a"]), LabelTypes(INT, SIZE))
        v = AxisVariant(Axis([1, 2]), LabelTypes(INT))
        self.assertEqual(v.label_types, LabelTypes(INT))
        self.assertEqual(axis_variant(["a", "b"]).labels(), ["a", "b"])
        self.assertTrue(axis_variant(3).is_default())

    def test_copy_from_variant(self):
        v = AxisVariant(Axis(["a", "b"]))
        w = AxisVariant(v)
        w.merge(AxisVariant(Axis(["c"])))
        self.assertEqual(v.labels(), ["a", "b"])
        self.assertEqual(w.labels(), ["a", "b", "c"])
        u = v.copy()
        self.assertEqual(u, v)
        self.assertIsNot(u.axis, v.axis)


class TestVariantErrors(TestCase):
    def test_wrong_key_type(self):
        v = AxisVariant(Axis(["a", "b"]))
        with self.assertRaises(LabelTypeError):
            v.contains(1)
        with self.assertRaises(LabelTypeError):
            v.position(1)
        with self.assertRaises(LabelTypeError):
            v[1]
        with self.assertRaises(LabelTypeError):
            v.find(1)
        with self.assertRaises(LabelTypeError):
            v.labels(INT)

    def test_merge_mismatch_leaves_receiver(self):
        v = AxisVariant(Axis(["a", "b"]))
        with self.assertRaises(LabelTypeError):
            v.merge(AxisVariant(Axis(["c"])), AxisVariant(Axis([1])))
        self.assertEqual(v.labels(), ["a", "b"])
        with self.assertRaises(LabelTypeError):
            v.intersect(AxisVariant(Axis([1])))
        self.assertEqual(v.labels(), ["a", "b"])
        # CHAR and FSTRING share a python type but not a label type
        with self.assertRaises(LabelTypeError):
            v.merge(AxisVariant(Axis(["cd"])))

    def test_merge_into_untyped_empty(self):
        v = AxisVariant()
        self.assertFalse(v.merge(AxisVariant(Axis(["a", "b"]))))
        self.assertEqual(v.label_type, CHAR)
        self.assertEqual(v.labels(), ["a", "b"])
        self.assertEqual(v.alternative(), (2, False))
        # the adopted label type must be one of ours
        w = AxisVariant(Axis(), LabelTypes(INT))
        with self.assertRaises(LabelTypeError):
            w.merge(AxisVariant(Axis(["a"])))
        self.assertEqual(w.label_type, INT)
        self.assertTrue(w.empty())

    def test_default_axis_unsupported(self):
        v = AxisVariant(DefaultAxis(3))
        with self.assertRaises(UnsupportedOperationError):
            v.merge(AxisVariant(Axis([5])))
        with self.assertRaises(UnsupportedOperationError):
            v.intersect(AxisVariant(Axis([1])))
        self.assertEqual(len(v), 3)
        self.assertTrue(v.is_default())


class TestVariantAlgebra(TestCase):
    def test_merge(self):
        v = AxisVariant(Axis(["a", "b", "d", "e"]))
        self.assertFalse(v.merge(AxisVariant(Axis(["b", "c", "d"])), AxisVariant(Axis(["c", "g"]))))
        self.assertEqual(v.labels(), list("abcdeg"))
        self.assertTrue(v.merge(AxisVariant(Axis(["a", "g"]))))

    def test_merge_default_argument(self):
        v = AxisVariant(Axis([1, 5]))
        self.assertFalse(v.merge(AxisVariant(DefaultAxis(3))))
        self.assertEqual(v.labels(), [0, 1, 2, 5])

    def test_intersect(self):
        v = AxisVariant(Axis(["a", "b", "d", "e"]))
        self.assertFalse(v.intersect(AxisVariant(Axis(["b", "c", "d"])), AxisVariant(Axis(["a", "b", "d", "f"]))))
        self.assertEqual(v.labels(), ["b", "d"])
        self.assertTrue(v.intersect(v.copy()))

    def test_filter(self):
        v = AxisVariant(Axis(["a", "b", "d", "e"]))
        f = v.filter(lambda x: x < "d")
        self.assertIsInstance(f, AxisVariant)
        self.assertEqual(f.labels(), ["a", "b"])
        d = AxisVariant(DefaultAxis(6)).filter(lambda x: x > 3)
        self.assertFalse(d.is_default())
        self.assertEqual(d.labels(), [4, 5])

    def test_as_xaxis(self):
        v = AxisVariant(DefaultAxis(3))
        x = v.as_xaxis()
        self.assertFalse(x.is_default())
        self.assertEqual(x.labels(), [0, 1, 2])
        self.assertTrue(v.is_default())
        self.assertFalse(x.merge(AxisVariant(Axis([7]))))
        self.assertEqual(x.labels(), [0, 1, 2, 7])
        self.assertEqual(len(v), 3)


class TestVariantEquality(TestCase):
    def test_same_alternative_required(self):
        self.assertEqual(AxisVariant(Axis(["a", "b"])), AxisVariant(Axis(["a", "b"])))
        self.assertNotEqual(AxisVariant(Axis(["a", "b"])), AxisVariant(Axis(["b", "a"])))
        self.assertNotEqual(AxisVariant(Axis([0, 1, 2])), AxisVariant(DefaultAxis(3)))
        self.assertNotEqual(AxisVariant(Axis([0, 1], INT)), AxisVariant(Axis([0, 1], SIZE)))
        self.assertEqual(AxisVariant(DefaultAxis(3)), AxisVariant(DefaultAxis(3)))


class TestLabelTypes(TestCase):
    def test_infer(self):
        self.assertEqual(DEFAULT_LABEL_TYPES.infer([]), INT)
        self.assertEqual(DEFAULT_LABEL_TYPES.infer([3, 4]), INT)
        self.assertEqual(LabelTypes(SIZE, INT).infer([3, 4]), SIZE)
        self.assertEqual(LabelTypes(SIZE, INT).infer([3, -4]), INT)
        self.assertEqual(DEFAULT_LABEL_TYPES.infer(["a", "bc"]), FSTRING)
        with self.assertRaises(LabelTypeError):
            DEFAULT_LABEL_TYPES.infer([1.5])

    def test_tags(self):
        self.assertEqual([DEFAULT_LABEL_TYPES.tag(t) for t in (INT, SIZE, CHAR, FSTRING)], [0, 1, 2, 3])
        self.assertEqual(DEFAULT_LABEL_TYPES.accepting("a"), (CHAR, FSTRING))
        self.assertEqual(DEFAULT_LABEL_TYPES.accepting(3), (INT, SIZE))

    def test_bad_lists(self):
        with self.assertRaises(ValueError):
            LabelTypes()
        with self.assertRaises(ValueError):
            LabelTypes(INT, INT)


if __name__ == "__main__":
    main()
