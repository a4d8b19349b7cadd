from __future__ import annotations

import re
import uuid

from fastapi import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

# 只接受短的、可安全写进日志的外部 request id
_VALID_REQUEST_ID = re.compile(r"^[A-Za-z0-9._-]{1,64}$")


def resolve_request_id(incoming: str | None) -> str:
    if incoming and _VALID_REQUEST_ID.match(incoming):
        return incoming
    return uuid.uuid4().hex


async def request_id_middleware(request: Request, call_next):
    rid = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
    request.state.request_id = rid

    response: Response = await call_next(request)
    response.headers[REQUEST_ID_HEADER] = rid
    return response
