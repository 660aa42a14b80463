import unittest

from linegraph_scene import FontSpec, LineNode, Node, Rect, RectangleNode, TextNode, coerce_color, parse_hex_color


class NodeTreeTests(unittest.TestCase):
    def test_add_and_remove_child(self) -> None:
        root = Node()
        child = LineNode()
        root.add_child(child)
        self.assertIs(child.parent, root)
        self.assertEqual(root.children, (child,))
        self.assertTrue(root.remove_child(child))
        self.assertIsNone(child.parent)
        self.assertFalse(root.remove_child(child))

    def test_node_has_single_parent(self) -> None:
        a, b, child = Node(), Node(), Node()
        a.add_child(child)
        with self.assertRaisesRegex(ValueError, "already has a parent"):
            b.add_child(child)

    def test_rejects_self_and_cycles(self) -> None:
        root = Node()
        mid = Node()
        leaf = Node()
        root.add_child(mid)
        mid.add_child(leaf)
        with self.assertRaisesRegex(ValueError, "own child"):
            root.add_child(root)
        with self.assertRaisesRegex(ValueError, "cycle"):
            leaf.add_child(root)

    def test_iter_tree_is_preorder(self) -> None:
        root = RectangleNode()
        first = LineNode()
        nested = TextNode()
        second = LineNode()
        root.add_child(first)
        first.add_child(nested)
        root.add_child(second)
        self.assertEqual(list(root.iter_tree()), [root, first, nested, second])
        self.assertTrue(root.contains(nested))
        self.assertFalse(first.contains(second))

    def test_nodes_compare_by_identity(self) -> None:
        self.assertNotEqual(LineNode(), LineNode())

    def test_degenerate_line(self) -> None:
        self.assertTrue(LineNode(point1=(2.0, 3.0), point2=(2.0, 3.0)).is_degenerate)
        self.assertFalse(LineNode(point1=(2.0, 3.0), point2=(2.0, 4.0)).is_degenerate)


class TextNodeTests(unittest.TestCase):
    def test_adjust_size_measures_text(self) -> None:
        node = TextNode(text="123", font=FontSpec(size_px=20))
        self.assertEqual(node.size, (0.0, 0.0))
        w, h = node.adjust_size()
        self.assertGreater(w, 0)
        self.assertGreater(h, 0)

    def test_quarter_turn_swaps_size(self) -> None:
        upright = TextNode(text="Label", font=FontSpec(size_px=20))
        turned = TextNode(text="Label", font=FontSpec(size_px=20), angle=90)
        w, h = upright.adjust_size()
        self.assertEqual(turned.adjust_size(), (h, w))

    def test_missing_font_file_falls_back_with_warning(self) -> None:
        font = FontSpec(size_px=14, file_path="/nonexistent/missing-font.ttf")
        with self.assertLogs("linegraph_scene.text", level="WARNING"):
            node = TextNode(text="7", font=font)
            _, h = node.adjust_size()
        self.assertGreater(h, 0)

    def test_bounds_apply_pivot(self) -> None:
        node = TextNode(position=(100.0, 40.0), pivot=(1.0, 0.5), size=(30.0, 10.0))
        self.assertEqual(node.bounds(), Rect(70.0, 35.0, 30.0, 10.0))


class GeometryTests(unittest.TestCase):
    def test_rect_edges(self) -> None:
        rect = Rect(100, 50, 250, 250)
        self.assertEqual(rect.right, 350.0)
        self.assertEqual(rect.bottom, 300.0)
        self.assertEqual(rect.bottom_left, (100.0, 300.0))
        self.assertEqual(rect.bottom_right, (350.0, 300.0))
        self.assertTrue(rect.contains(350.0, 300.0))
        self.assertFalse(rect.contains(99.0, 60.0))

    def test_rect_rejects_invalid_values(self) -> None:
        with self.assertRaises(ValueError):
            Rect(0, 0, -1, 5)
        with self.assertRaises(ValueError):
            Rect(0, float("nan"), 1, 1)

    def test_colors(self) -> None:
        self.assertEqual(parse_hex_color("#0A0B0C"), (10, 11, 12, 255))
        self.assertEqual(parse_hex_color("#0A0B0C80"), (10, 11, 12, 128))
        self.assertEqual(coerce_color((1, 2, 3)), (1, 2, 3, 255))
        self.assertEqual(coerce_color([1, 2, 3, 4]), (1, 2, 3, 4))
        with self.assertRaises(ValueError):
            coerce_color((1, 2))
        with self.assertRaises(ValueError):
            coerce_color((0, 0, 300))
        with self.assertRaises(ValueError):
            coerce_color(7)
        with self.assertRaisesRegex(ValueError, "hex color"):
            parse_hex_color("#12345")

    def test_font_spec_validation(self) -> None:
        with self.assertRaisesRegex(ValueError, "size_px"):
            FontSpec(size_px=0)
        with self.assertRaisesRegex(ValueError, "family"):
            FontSpec(family=" ")
        self.assertEqual(FontSpec(family=" ", file_path="/tmp/font.ttf").source_kind, "file")
        self.assertEqual(FontSpec().source_kind, "system")


if __name__ == "__main__":
    unittest.main()
