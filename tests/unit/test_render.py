import math
import unittest

from sorted_map import SortedMap
from sorted_map.render import render, render_pairs, parse_rendered


class TestRender(unittest.TestCase):
    def test_render_empty_map(self):
        self.assertEqual(render(SortedMap()), "SortedMap([])")

    def test_render_keeps_order(self):
        rendered: str = render(SortedMap([("b", 2), ("a", 1)]))
        self.assertEqual(rendered, "SortedMap([('b', 2), ('a', 1)])")

    def test_repr_is_render(self):
        sorted_map = SortedMap([(1, None), ("two", [2])])
        self.assertEqual(repr(sorted_map), render(sorted_map))

    def test_render_pairs(self):
        self.assertEqual(render_pairs([("a", 1)]), "SortedMap([('a', 1)])")

    def test_parse_rendered(self):
        self.assertEqual(parse_rendered("SortedMap([('a', 1), ('b', 2)])"), [("a", 1), ("b", 2)])

    def test_round_trip(self):
        maps = [
            SortedMap(),
            SortedMap([("a", 1), ("b", 2)]),
            SortedMap([(3, "three"), ((1, 2), {"nested": [1, 2]}), (None, True), ("x", 1.5)]),
            SortedMap([("a", 1), ("b", 2), ("c", 3)]).delete("a").put("a", 0),
        ]
        for sorted_map in maps:
            with self.subTest(sorted_map=sorted_map):
                self.assertEqual(SortedMap(parse_rendered(repr(sorted_map))), sorted_map)
                self.assertEqual(SortedMap.from_rendered(repr(sorted_map)), sorted_map)

    def test_round_trip_nested_sorted_map(self):
        inner = SortedMap([("b", 2), ("a", 1)])
        sorted_map = SortedMap([("inner", inner), ("list", [SortedMap(), {"d": SortedMap([("x", None)])}])])
        self.assertEqual(repr(sorted_map), "SortedMap([('inner', SortedMap([('b', 2), ('a', 1)])), ('list', [SortedMap([]), {'d': SortedMap([('x', None)])}])])")

        rebuilt = SortedMap.from_rendered(repr(sorted_map))
        self.assertEqual(rebuilt, sorted_map)
        self.assertIsInstance(rebuilt["inner"], SortedMap)
        self.assertEqual(rebuilt["inner"].keys(), ("b", "a"))

    def test_nested_sorted_map_as_key(self):
        pairs = parse_rendered("SortedMap([((1, frozenset()), SortedMap([('a', 1)]))])")
        self.assertEqual(pairs, [((1, frozenset()), SortedMap([("a", 1)]))])

    def test_round_trip_special_values(self):
        maps = {
            "inf": SortedMap([("pos", float("inf")), ("neg", float("-inf"))]),
            "frozenset": SortedMap([(frozenset({1, 2}), frozenset({"x"})), ("empty", frozenset())]),
            "set": SortedMap([("empty", set()), ("full", {3, 4})]),
            "complex": SortedMap([("c", 1 + 2j), ("neg", -5)]),
        }
        for name, sorted_map in maps.items():
            with self.subTest(name=name):
                self.assertEqual(SortedMap.from_rendered(repr(sorted_map)), sorted_map)

    def test_nan_parses(self):
        rebuilt = SortedMap.from_rendered(repr(SortedMap([("n", float("nan"))])))
        self.assertTrue(math.isnan(rebuilt["n"]))

    def test_parse_rendered_rejects_non_literals(self):
        for text in ["SortedMap([('a', open('x'))])", "SortedMap([('a', name)])", "SortedMap([('a', {[1]: 2})])", "SortedMap([('a', -'s')])"]:
            with self.subTest(text=text):
                with self.assertRaises(ValueError):
                    parse_rendered(text)

    def test_parse_rendered_rejects_other_text(self):
        for text in ["[('a', 1)]", "SortedMap(", "SortedMap({'a': 1})", "SortedMap([1, 2])", "SortedMap([('a',)])"]:
            with self.subTest(text=text):
                with self.assertRaises(ValueError):
                    parse_rendered(text)


if __name__ == "__main__":
    unittest.main()
