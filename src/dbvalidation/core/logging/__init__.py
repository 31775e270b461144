# dbvalidation/core/logging/
# ├─ __init__.py      # public API: setup_logging, make_dict_config, request id helpers
# ├─ builder.py       # make_dict_config(settings) + setup_logging(settings)
# ├─ formatters.py    # JsonFormatter, ColorFormatter
# ├─ filters.py       # RequestIdFilter (+ contextvar helpers), RedactFilter
# └─ handlers.py      # handler dict factories (console / rotating files)

from .builder import setup_logging, make_dict_config
from .filters import set_request_id, get_request_id, reset_request_id, RequestIdFilter, RedactFilter

__all__ = [
    "setup_logging",
    "make_dict_config",
    "set_request_id",
    "get_request_id",
    "reset_request_id",
    "RequestIdFilter",
    "RedactFilter",
]
