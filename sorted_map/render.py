import ast
import logging
import math

from collections.abc import Callable

# Internal imports
from .utils.error_strings import NOT_A_RENDERING, NOT_A_PAIR

RENDER_NAME = "SortedMap"

# Names that repr() emits for floats without a literal form
FLOAT_NAMES: dict[str, float] = {"inf": math.inf, "nan": math.nan}


def render_pairs(pairs: list[tuple]) -> str:
    """
    Format a list of (key, value) pairs as a SortedMap constructor call.
    """
    return f"{RENDER_NAME}({pairs!r})"


def render(sorted_map) -> str:
    """
    Return the rendering of a map, ex: SortedMap([('a', 1), ('b', 2)])

    Pairs are listed in the map's order, so feeding the list back to the constructor rebuilds an equal map.
    """
    return render_pairs(list(sorted_map))


def _is_call(node: ast.AST, name: str) -> bool:
    return (
        isinstance(node, ast.Call)
        and isinstance(node.func, ast.Name)
        and node.func.id == name
        and not node.keywords
    )


def _build_pairs(node: ast.AST, factory: Callable) -> list[tuple]:
    if not isinstance(node, ast.List):
        raise ValueError(NOT_A_RENDERING.format(text=ast.unparse(node)))

    pairs: list[tuple] = []
    for element in node.elts:
        if not (isinstance(element, ast.Tuple) and len(element.elts) == 2):
            raise ValueError(NOT_A_PAIR.format(item=ast.unparse(element)))
        pairs.append((_build(element.elts[0], factory), _build(element.elts[1], factory)))
    return pairs


def _build(node: ast.AST, factory: Callable):
    """
    Rebuild a value from its repr() syntax tree.

    Handles what repr() produces beyond plain literals: nested SortedMaps, inf / nan, set() and frozenset(...).
    Everything else goes through ast.literal_eval, which raises ValueError for anything that is not a literal.
    """
    if _is_call(node, RENDER_NAME) and len(node.args) == 1:
        return factory(_build_pairs(node.args[0], factory))

    if _is_call(node, "frozenset") and len(node.args) <= 1:
        return frozenset(_build(node.args[0], factory)) if node.args else frozenset()

    if _is_call(node, "set") and len(node.args) == 0:
        return set()

    if isinstance(node, ast.Name) and node.id in FLOAT_NAMES:
        return FLOAT_NAMES[node.id]

    if isinstance(node, ast.UnaryOp) and isinstance(node.op, (ast.USub, ast.UAdd)):
        operand = _build(node.operand, factory)
        if not isinstance(operand, (int, float, complex)) or isinstance(operand, bool):
            raise ValueError(NOT_A_RENDERING.format(text=ast.unparse(node)))
        return -operand if isinstance(node.op, ast.USub) else +operand

    if isinstance(node, ast.Tuple):
        return tuple(_build(element, factory) for element in node.elts)

    if isinstance(node, ast.List):
        return [_build(element, factory) for element in node.elts]

    if isinstance(node, ast.Set):
        return {_build(element, factory) for element in node.elts}

    if isinstance(node, ast.Dict):
        if any(key is None for key in node.keys): # {**other}
            raise ValueError(NOT_A_RENDERING.format(text=ast.unparse(node)))
        return {_build(key, factory): _build(value, factory) for key, value in zip(node.keys, node.values)}

    return ast.literal_eval(node)


def parse_rendered(text: str, factory: Callable | None = None) -> list[tuple]:
    """
    Parse a rendering back into its list of (key, value) pairs.

    Nested renderings are rebuilt with factory (SortedMap by default). Keys and values must be
    made of literals, inf / nan, sets, frozensets and nested SortedMaps. Raises ValueError for anything else.
    """
    if factory is None:
        # sorted_map.py imports this module, so the class can only be looked up at call time
        from .sorted_map import SortedMap
        factory = SortedMap

    try:
        tree = ast.parse(text.strip(), mode="eval")
    except SyntaxError as e:
        logging.info(f"Could not parse rendering {text}: {e}")
        raise ValueError(NOT_A_RENDERING.format(text=text)) from e

    body = tree.body
    if not (_is_call(body, RENDER_NAME) and len(body.args) == 1):
        logging.info(f"Text is not a {RENDER_NAME}(...) call: {text}")
        raise ValueError(NOT_A_RENDERING.format(text=text))

    try:
        pairs = _build_pairs(body.args[0], factory)
    except TypeError as e: # Unhashable key or set member
        logging.info(f"Could not rebuild rendering {text}: {e}")
        raise ValueError(NOT_A_RENDERING.format(text=text)) from e

    logging.debug(f"Parsed {len(pairs)} pairs from rendering")
    return pairs
