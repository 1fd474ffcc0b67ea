#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
test_llrb_primitives.py
-----------------------

Hand-built subtrees fed through the structural primitives of ``llrb_tree``:

* colour predicate on present and absent links
* left / right rotations (including size transfer) and their no-op paths
* colour flips for 4-node split / merge and the ignored configurations
* the bottom-up ``balance`` step
* ``move_red_left`` / ``move_red_right`` with and without sibling borrowing
"""

import unittest

from llrb_tree import (
    BLACK,
    RED,
    Node,
    balance,
    flip_colors,
    is_red,
    move_red_left,
    move_red_right,
    rotate_left,
    rotate_right,
    size_of,
)


def leaf(key, color=BLACK):
    return Node(key, color=color)


class TestColourAndSize(unittest.TestCase):
    def test_absent_link_is_black(self):
        self.assertFalse(is_red(None))
        self.assertEqual(size_of(None), 0)

    def test_new_node_is_red_singleton(self):
        node = Node(1)
        self.assertTrue(is_red(node))
        self.assertEqual(node.size, 1)
        self.assertFalse(is_red(leaf(1)))


class TestRotations(unittest.TestCase):
    def test_rotate_left_promotes_red_right_child(self):
        h = Node(10, color=BLACK, left=leaf(5), right=leaf(20, RED), size=3)

        top = rotate_left(h)

        self.assertEqual(top.key, 20)
        self.assertFalse(is_red(top))
        self.assertIs(top.left, h)
        self.assertTrue(is_red(h))
        self.assertIsNone(h.right)
        self.assertEqual(top.size, 3)
        self.assertEqual(h.size, 2)

    def test_rotate_left_without_red_right_is_noop(self):
        right = leaf(20)
        h = Node(10, color=BLACK, right=right, size=2)

        self.assertIs(rotate_left(h), h)
        self.assertIs(h.right, right)
        self.assertFalse(is_red(h))
        self.assertIsNone(rotate_left(None))

    def test_rotate_right_promotes_red_left_child(self):
        h = Node(10, color=BLACK, left=leaf(5, RED), right=leaf(20), size=3)

        top = rotate_right(h)

        self.assertEqual(top.key, 5)
        self.assertFalse(is_red(top))
        self.assertIs(top.right, h)
        self.assertTrue(is_red(h))
        self.assertIsNone(h.left)
        self.assertEqual(top.size, 3)
        self.assertEqual(h.size, 2)

    def test_rotate_right_without_red_left_is_noop(self):
        h = Node(10, color=BLACK, left=leaf(5), size=2)
        self.assertIs(rotate_right(h), h)
        self.assertEqual(h.left.key, 5)


class TestFlipColors(unittest.TestCase):
    def test_split_black_parent_with_red_children(self):
        h = Node(2, color=BLACK, left=leaf(1, RED), right=leaf(3, RED), size=3)
        flip_colors(h)
        self.assertTrue(is_red(h))
        self.assertFalse(is_red(h.left))
        self.assertFalse(is_red(h.right))

    def test_merge_red_parent_with_black_children(self):
        h = Node(2, color=RED, left=leaf(1), right=leaf(3), size=3)
        flip_colors(h)
        self.assertFalse(is_red(h))
        self.assertTrue(is_red(h.left))
        self.assertTrue(is_red(h.right))

    def test_other_configurations_are_left_alone(self):
        h = Node(2, color=BLACK, left=leaf(1), right=leaf(3), size=3)
        flip_colors(h)
        self.assertEqual((h.color, h.left.color, h.right.color), (BLACK, BLACK, BLACK))

        h = Node(2, color=RED, left=leaf(1, RED), right=leaf(3), size=3)
        flip_colors(h)
        self.assertEqual((h.color, h.left.color, h.right.color), (RED, RED, BLACK))

        lonely = Node(2, color=BLACK, left=leaf(1, RED), size=2)
        flip_colors(lonely)
        self.assertFalse(is_red(lonely))
        self.assertTrue(is_red(lonely.left))

        flip_colors(None)


class TestBalance(unittest.TestCase):
    def test_red_right_link_leans_left_and_size_is_recomputed(self):
        h = Node(10, color=BLACK, right=leaf(20, RED), size=1)

        top = balance(h)

        self.assertEqual(top.key, 20)
        self.assertFalse(is_red(top))
        self.assertEqual(top.left.key, 10)
        self.assertTrue(is_red(top.left))
        self.assertEqual(top.size, 2)
        self.assertEqual(top.left.size, 1)

    def test_two_reds_in_a_row_are_split(self):
        bottom = leaf(10, RED)
        middle = Node(20, color=RED, left=bottom, size=2)
        h = Node(30, color=BLACK, left=middle, size=3)

        top = balance(h)

        self.assertEqual(top.key, 20)
        self.assertTrue(is_red(top))
        self.assertEqual((top.left.key, top.right.key), (10, 30))
        self.assertFalse(is_red(top.left))
        self.assertFalse(is_red(top.right))
        self.assertEqual(top.size, 3)

    def test_balanced_node_only_resizes(self):
        h = Node(10, color=BLACK, left=leaf(5, RED), size=99)
        self.assertIs(balance(h), h)
        self.assertEqual(h.size, 2)
        self.assertIsNone(balance(None))


class TestMoveRed(unittest.TestCase):
    def test_move_red_left_merges_with_black_sibling(self):
        h = Node(20, color=RED, left=leaf(10), right=leaf(30), size=3)

        top = move_red_left(h)

        self.assertIs(top, h)
        self.assertFalse(is_red(top))
        self.assertTrue(is_red(top.left))
        self.assertTrue(is_red(top.right))

    def test_move_red_left_borrows_from_right_3_node(self):
        right = Node(40, color=BLACK, left=leaf(30, RED), size=2)
        h = Node(20, color=RED, left=leaf(10), right=right, size=4)

        top = move_red_left(h)

        self.assertEqual(top.key, 30)
        self.assertTrue(is_red(top))
        self.assertEqual(top.size, 4)
        self.assertEqual(top.left.key, 20)
        self.assertFalse(is_red(top.left))
        self.assertEqual(top.left.size, 2)
        self.assertEqual(top.left.left.key, 10)
        self.assertTrue(is_red(top.left.left))
        self.assertEqual(top.right.key, 40)
        self.assertFalse(is_red(top.right))
        self.assertEqual(top.right.size, 1)

    def test_move_red_left_requires_red_deficient_descent(self):
        h = Node(20, color=BLACK, left=leaf(10), right=leaf(30), size=3)
        self.assertIs(move_red_left(h), h)
        self.assertEqual((h.color, h.left.color, h.right.color), (BLACK, BLACK, BLACK))

        h = Node(20, color=RED, left=leaf(10, RED), right=leaf(30), size=3)
        self.assertIs(move_red_left(h), h)
        self.assertTrue(is_red(h.left))
        self.assertFalse(is_red(h.right))

    def test_move_red_right_merges_with_black_sibling(self):
        h = Node(20, color=RED, left=leaf(10), right=leaf(30), size=3)

        top = move_red_right(h)

        self.assertIs(top, h)
        self.assertFalse(is_red(top))
        self.assertTrue(is_red(top.left))
        self.assertTrue(is_red(top.right))

    def test_move_red_right_borrows_from_left_3_node(self):
        left = Node(20, color=BLACK, left=leaf(10, RED), size=2)
        h = Node(30, color=RED, left=left, right=leaf(40), size=4)

        top = move_red_right(h)

        self.assertEqual(top.key, 20)
        self.assertTrue(is_red(top))
        self.assertEqual(top.size, 4)
        self.assertEqual(top.left.key, 10)
        self.assertFalse(is_red(top.left))
        self.assertEqual(top.right.key, 30)
        self.assertFalse(is_red(top.right))
        self.assertEqual(top.right.size, 2)
        # the right-leaning red link is left for ``balance`` to fix
        self.assertTrue(is_red(top.right.right))

    def test_move_red_right_requires_red_deficient_descent(self):
        h = Node(20, color=RED, left=leaf(10), right=leaf(30, RED), size=3)
        self.assertIs(move_red_right(h), h)
        self.assertTrue(is_red(h))
        self.assertTrue(is_red(h.right))
        self.assertIsNone(move_red_right(None))


if __name__ == "__main__":
    unittest.main(verbosity=2)
