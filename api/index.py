"""
Serverless entry point: expose the mock API as a module-level ASGI app.

vercel.json routes every request here; /api/* is rewritten by the app itself.
The deployed bundle is read-only, so unless MOCK_PERSIST is set explicitly
the document is kept in memory for the lifetime of the instance.
"""
import dataclasses
import os
import sys
from pathlib import Path

# Ensure project root is on path when the platform runs from api/
_root = Path(__file__).resolve().parent.parent
if str(_root) not in sys.path:
    sys.path.insert(0, str(_root))

from api.app import create_app  # noqa: E402
from api.core.config import Settings, get_settings  # noqa: E402
from api.core.log import configure_logging  # noqa: E402


def hosted_settings() -> Settings:
    settings = get_settings()
    if os.getenv("MOCK_PERSIST") is None:
        settings = dataclasses.replace(settings, persist=False)
    return settings


settings = hosted_settings()
configure_logging(settings.log_level)

app = create_app(settings)
