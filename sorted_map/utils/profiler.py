import cProfile
import pstats
import io
import logging
from functools import wraps


def profile(func=None, output_file=None, top: int = 20):
    """
    Run the wrapped function under cProfile and log the `top` most expensive calls.

    If output_file is given, the raw stats are also dumped there (readable with pstats or snakeviz).
    """
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            pr = cProfile.Profile()
            pr.enable()
            try:
                return f(*args, **kwargs)
            finally:
                pr.disable()
                s = io.StringIO()
                ps = pstats.Stats(pr, stream=s).sort_stats('cumulative')
                ps.print_stats(top)
                logging.info(f"Profile of {f.__name__}:\n{s.getvalue()}")
                if output_file:
                    ps.dump_stats(output_file)
                    logging.info(f"Profile data saved to {output_file}")
        return wrapper

    if func is None:
        return decorator
    return decorator(func)
