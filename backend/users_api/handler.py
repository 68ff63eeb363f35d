"""Lambda Entry Point — translates API Gateway events into ASGI requests.

Set the Lambda handler to ``users_api.handler.handler``.

Invariants:
    - One Mangum instance per process, reused across warm invocations
    - lifespan="off": shutdown would close the cached database connection

Design Decisions:
    - Logging configured at import (cold start) since no lifespan runs here
"""

from mangum import Mangum

from users_api.config import get_settings
from users_api.infrastructure.observability import setup_logging
from users_api.main import app

settings = get_settings()
setup_logging(settings.log_level, settings.log_format)

handler = Mangum(
    app,
    lifespan="off",
    api_gateway_base_path=settings.api_gateway_base_path,
)
