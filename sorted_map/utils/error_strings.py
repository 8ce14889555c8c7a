KEY_NOT_FOUND = "key {key!r} not found in: {rendered}"
NOT_A_RENDERING = "ERR not a SortedMap rendering: {text!r}"
NOT_A_PAIR = "ERR expected a (key, value) pair, got: {item!r}"
MALFORMED_PAIR_ARG = "ERR expected key=value, got: {arg!r}"
EMPTY_KEY_PATH = "ERR key path must contain at least one key"
