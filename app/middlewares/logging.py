# app/middlewares/logging.py
"""请求/响应访问日志中间件

注意：使用纯 ASGI 中间件而非 BaseHTTPMiddleware，避免 Python 3.11+ 中的
ExceptionGroup 兼容性问题。
"""
from __future__ import annotations

import json
import logging
import time
from urllib.parse import parse_qsl

from starlette.types import ASGIApp, Message, Receive, Scope, Send

logger = logging.getLogger("api.access")
logger.setLevel(logging.DEBUG)

# 如果没有 handler，添加一个控制台输出
if not logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(
        "%(asctime)s | %(levelname)s | %(message)s"
    ))
    logger.addHandler(handler)

# 这些查询参数的值不进日志
SENSITIVE_PARAMS = frozenset({"appid", "api_key", "apikey"})

MAX_LOGGED_BODY = 2000


def mask_query(query_string: str) -> dict:
    params = {}
    for k, v in parse_qsl(query_string, keep_blank_values=True):
        params[k] = "***" if k.lower() in SENSITIVE_PARAMS else v
    return params


class LoggingMiddleware:
    """
    记录请求参数、状态码、耗时；JSON 响应会附带（截断后的）响应体
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        # 只处理 HTTP 请求
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        start_time = time.time()
        method = scope.get("method", "")
        path = scope.get("path", "")
        query_params = mask_query(scope.get("query_string", b"").decode("utf-8"))

        req_log = f">>> {method} {path}"
        if query_params:
            req_log += f" | Query: {json.dumps(query_params, ensure_ascii=False)}"
        logger.info(req_log)

        response_status = 0
        is_json = False
        response_body_parts: list[bytes] = []

        async def send_wrapper(message: Message) -> None:
            nonlocal response_status, is_json
            if message["type"] == "http.response.start":
                response_status = message.get("status", 0)
                for name, value in message.get("headers", []):
                    if name.lower() == b"content-type" and value.startswith(b"application/json"):
                        is_json = True
            elif message["type"] == "http.response.body" and is_json:
                body = message.get("body", b"")
                if body:
                    response_body_parts.append(body)
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            duration = time.time() - start_time
            resp_log = f"<<< {method} {path} | Status: {response_status} | Time: {duration:.3f}s"
            if response_body_parts:
                resp_text = b"".join(response_body_parts).decode("utf-8", errors="replace")
                # 截断过长的响应
                if len(resp_text) > MAX_LOGGED_BODY:
                    resp_text = resp_text[:MAX_LOGGED_BODY] + "...[truncated]"
                resp_log += f"\n{resp_text}"
            logger.info(resp_log)
