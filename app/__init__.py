"""Application package exposing the shared FunctionApp instance.

The FunctionApp is configured with FUNCTION-level authentication so that the
name generation endpoints require a function key. Read-only discovery routes
(rules, private DNS zones, OpenAPI docs) opt into anonymous access explicitly.
"""

from __future__ import annotations

import azure.functions as func

app = func.FunctionApp(http_auth_level=func.AuthLevel.FUNCTION)

# Import route modules so decorators execute at import time
from .routes import dns as _dns_routes  # noqa: F401,E402
from .routes import docs as _docs_routes  # noqa: F401,E402
from .routes import names as _name_routes  # noqa: F401,E402
from .routes import rules as _rule_routes  # noqa: F401,E402

__all__ = ["app"]
