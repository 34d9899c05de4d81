"""La Patisserie FastAPI application.

Commands and event handlers run synchronously inside each request.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV selects the config overlay (``test``, ``production``).
from patisserie.config import allowed_origins
from patisserie.domain import patisserie

patisserie.init()

with patisserie.domain_context():
    _origins = allowed_origins()

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
from patisserie.api import create_app  # noqa: E402

app = create_app(patisserie, allowed_origins=_origins)
