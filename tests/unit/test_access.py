import unittest

from sorted_map import SortedMap, KeyNotFoundError, POP
from sorted_map.protocols.access import get_in, put_in, update_in, pop_in, get_and_update_in


class BaseAccessTest(unittest.TestCase):
    def setUp(self):
        self.inner = SortedMap([("x", 1), ("y", 2)])
        self.outer = SortedMap([("first", self.inner), ("plain", {"k": "v"})])


class GetInTests(BaseAccessTest):
    def test_get_in_nested_sorted_map(self):
        self.assertEqual(get_in(self.outer, ["first", "y"]), 2)

    def test_get_in_nested_plain_dict(self):
        self.assertEqual(get_in(self.outer, ["plain", "k"]), "v")

    def test_get_in_missing_key_returns_default(self):
        self.assertIsNone(get_in(self.outer, ["first", "z"]))
        self.assertEqual(get_in(self.outer, ["missing", "z"], "default"), "default")

    def test_get_in_through_non_map_returns_default(self):
        self.assertIsNone(get_in(self.outer, ["first", "x", "deeper"]))

    def test_get_in_empty_path_returns_data(self):
        self.assertIs(get_in(self.outer, []), self.outer)


class PutInTests(BaseAccessTest):
    def test_put_in_existing_key_keeps_position(self):
        result = put_in(self.outer, ["first", "x"], 10)
        self.assertEqual(result["first"].to_list(), [("x", 10), ("y", 2)])
        self.assertEqual(result.keys(), ("first", "plain"))

    def test_put_in_missing_key_appends_at_end(self):
        result = put_in(self.outer, ["first", "z"], 3)
        self.assertEqual(result["first"].keys(), ("x", "y", "z"))

    def test_put_in_does_not_change_original(self):
        put_in(self.outer, ["first", "x"], 10)
        put_in(self.outer, ["plain", "k"], "changed")
        self.assertEqual(self.inner.get("x"), 1)
        self.assertEqual(self.outer["plain"], {"k": "v"})

    def test_put_in_plain_dict_is_copied(self):
        result = put_in(self.outer, ["plain", "k2"], "v2")
        self.assertEqual(result["plain"], {"k": "v", "k2": "v2"})

    def test_put_in_missing_intermediate_raises(self):
        with self.assertRaises(KeyNotFoundError) as ctx:
            put_in(self.outer, ["missing", "x"], 1)
        self.assertEqual(ctx.exception.key, "missing")

    def test_put_in_empty_path_raises(self):
        with self.assertRaises(ValueError):
            put_in(self.outer, [], 1)

    def test_put_in_through_non_map_raises(self):
        with self.assertRaises(TypeError):
            put_in(self.outer, ["first", "x", "deeper"], 1)


class UpdateInTests(BaseAccessTest):
    def test_update_in(self):
        result = update_in(self.outer, ["first", "y"], lambda v: v * 100)
        self.assertEqual(get_in(result, ["first", "y"]), 200)

    def test_update_in_missing_last_key_receives_none(self):
        result = update_in(self.outer, ["first", "z"], lambda v: "was none" if v is None else v)
        self.assertEqual(result["first"].to_list(), [("x", 1), ("y", 2), ("z", "was none")])

    def test_get_and_update_in_returns_old_value(self):
        value, result = get_and_update_in(self.outer, ["first", "x"], lambda v: (v, v + 1))
        self.assertEqual(value, 1)
        self.assertEqual(get_in(result, ["first", "x"]), 2)

    def test_get_and_update_in_pop(self):
        value, result = get_and_update_in(self.outer, ["plain", "k"], lambda v: POP)
        self.assertEqual(value, "v")
        self.assertEqual(result["plain"], {})


class PopInTests(BaseAccessTest):
    def test_pop_in(self):
        value, result = pop_in(self.outer, ["first", "x"])
        self.assertEqual(value, 1)
        self.assertEqual(result["first"].keys(), ("y",))
        self.assertEqual(result.keys(), ("first", "plain"))

    def test_pop_in_missing_key(self):
        value, result = pop_in(self.outer, ["first", "z"])
        self.assertIsNone(value)
        self.assertEqual(result, self.outer)

    def test_pop_in_missing_intermediate(self):
        value, result = pop_in(self.outer, ["missing", "z"])
        self.assertIsNone(value)
        self.assertIs(result, self.outer)

    def test_pop_in_top_level(self):
        value, result = pop_in(self.outer, ["plain"])
        self.assertEqual(value, {"k": "v"})
        self.assertEqual(result.keys(), ("first",))

    def test_pop_in_non_map_at_any_level_returns_data(self):
        for path in (["first", "x", "deeper"], ["first", "x", "deeper", "more"]):
            with self.subTest(path=path):
                value, result = pop_in(self.outer, path)
                self.assertIsNone(value)
                self.assertEqual(result, self.outer)

    def test_pop_in_on_non_map_data(self):
        self.assertEqual(pop_in(5, ["k"]), (None, 5))


if __name__ == "__main__":
    unittest.main()
