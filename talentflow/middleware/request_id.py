"""请求ID中间件

使用纯 ASGI 中间件而非 BaseHTTPMiddleware，ContextVar 的修改在整个请求内可见。
"""
import time
import uuid
from contextvars import ContextVar

from talentflow.log import get_logger

logger = get_logger()

_request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDMiddleware:
    """请求ID中间件（纯 ASGI 实现）

    为每个请求生成唯一ID（客户端已带 X-Request-ID 时沿用），
    写入 request.state.request_id 供异常处理器记录日志，
    并在响应头中返回 X-Request-ID。请求结束时记录一条耗时日志。

    使用示例:
        from fastapi import FastAPI
        from talentflow.middleware import RequestIDMiddleware

        app = FastAPI()
        app.add_middleware(RequestIDMiddleware)
    """

    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request_id = ""
        for name, value in scope.get("headers", []):
            if name == b"x-request-id":
                request_id = value.decode("latin-1")
                break
        request_id = request_id or uuid.uuid4().hex

        scope.setdefault("state", {})["request_id"] = request_id
        token = _request_id_var.set(request_id)

        status_code = 500
        started = time.perf_counter()

        async def send_wrapper(message):
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
                headers = list(message.get("headers", []))
                headers.append((b"x-request-id", request_id.encode()))
                message = {**message, "headers": headers}
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.info(
                f"{scope.get('method')} {scope.get('path')} -> {status_code} ({elapsed_ms:.1f}ms)",
                extra={"request_id": request_id},
            )
            _request_id_var.reset(token)


def get_request_id() -> str:
    """当前请求的ID，不在请求上下文中时返回空字符串"""
    return _request_id_var.get()
