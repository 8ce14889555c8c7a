from .error_strings import (
    KEY_NOT_FOUND as KEY_NOT_FOUND,
    NOT_A_RENDERING as NOT_A_RENDERING,
    NOT_A_PAIR as NOT_A_PAIR,
    MALFORMED_PAIR_ARG as MALFORMED_PAIR_ARG,
    EMPTY_KEY_PATH as EMPTY_KEY_PATH,
)

from .position_ledger import PositionLedger as PositionLedger

from .profiler import profile as profile
