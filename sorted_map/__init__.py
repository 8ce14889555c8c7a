from .sorted_map import (
    SortedMap as SortedMap,
    KeyNotFoundError as KeyNotFoundError,
    NOT_FOUND as NOT_FOUND,
    POP as POP,
)

from .render import parse_rendered as parse_rendered

from .protocols.collect import into as into

from .protocols.access import (
    get_in as get_in,
    put_in as put_in,
    update_in as update_in,
    pop_in as pop_in,
    get_and_update_in as get_and_update_in,
)
