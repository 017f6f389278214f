"""全局异常处理器

提供 FastAPI 全局异常处理器，自动将异常转换为统一的 JSON 响应格式:

    {"status": "error", "message": "...", "msg_details": [], "data": {}, "error_code": "..."}

客户端只依赖 message 字段，所以每个错误响应都保证带 message。
"""

import os
import sys
import traceback
from typing import Dict, Optional

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from talentflow.log import get_logger
from talentflow.response import ErrorResponse, ResponseStatus
from .exceptions import BusinessException, ErrorCode

logger = get_logger()


# ==================== 验证错误翻译 ====================

# Pydantic v2 错误类型 -> 中文消息
_VALIDATION_MESSAGES: Dict[str, str] = {
    "missing": "此字段为必填项",
    "int_type": "必须是整数",
    "int_parsing": "必须是整数",
    "float_type": "必须是数字",
    "bool_type": "必须是布尔值",
    "str_type": "必须是字符串",
    "list_type": "必须是列表",
    "dict_type": "必须是对象",
    "model_type": "必须是有效的对象",
    "json_invalid": "JSON 格式不正确",
    "string_pattern_mismatch": "格式不正确",
    "value_error": "值无效",
    "extra_forbidden": "不允许额外的字段",
}

# 需要上下文的错误类型
_VALIDATION_TEMPLATES: Dict[str, str] = {
    "string_too_short": "长度不能少于 {min_length} 个字符",
    "string_too_long": "长度不能超过 {max_length} 个字符",
    "greater_than": "必须大于 {gt}",
    "greater_than_equal": "必须大于或等于 {ge}",
    "less_than": "必须小于 {lt}",
    "less_than_equal": "必须小于或等于 {le}",
    "too_short": "元素数量不能少于 {min_length} 个",
    "too_long": "元素数量不能超过 {max_length} 个",
}


def translate_validation_error(error: dict) -> str:
    """把单条 Pydantic 验证错误翻译为 "字段: 消息" 形式

    未收录的错误类型保留原始英文消息。

    使用示例:
        translate_validation_error({"loc": ("body", "title"), "type": "missing", "msg": "Field required"})
        # -> "title: 此字段为必填项"
    """
    loc_parts = [str(loc) for loc in error.get("loc", ()) if loc not in ("body", "query", "path", "header", "cookie")]
    field = ".".join(loc_parts) if loc_parts else "请求体"

    error_type = error.get("type", "")
    ctx = error.get("ctx") or {}

    message: Optional[str] = None
    if error_type in _VALIDATION_TEMPLATES:
        try:
            message = _VALIDATION_TEMPLATES[error_type].format(**ctx)
        except KeyError:
            message = None
    elif error_type in ("enum", "literal_error"):
        expected = ctx.get("expected", "")
        message = f"值必须是以下之一: {expected}"
    elif error_type in _VALIDATION_MESSAGES:
        message = _VALIDATION_MESSAGES[error_type]

    return f"{field}: {message or error.get('msg', '值无效')}"


def _is_debug(request: Request) -> bool:
    """应用配置 debug=True 或环境变量 DEBUG=true 时进入调试模式"""
    app = request.scope.get("app")
    settings = getattr(app.state, "settings", None) if app is not None else None
    if settings is not None and getattr(settings, "debug", False):
        return True
    return os.getenv("DEBUG", "false").lower() == "true"


def _error_content(message: str, error_code: str, msg_details=None) -> dict:
    return {
        "status": ResponseStatus.ERROR.value,
        "message": message,
        "msg_details": list(msg_details or []),
        "data": {},
        "error_code": str(error_code),
    }


async def business_exception_handler(
    request: Request,
    exc: BusinessException
) -> JSONResponse:
    """业务异常处理器

    处理所有继承自 BusinessException 的异常（NotFoundError、TransientServerError、
    PersistenceError 等），4xx 记 warning，5xx 记 error。
    """
    request_id = getattr(request.state, "request_id", "unknown")

    log_method = logger.warning if exc.status_code < 500 else logger.error
    log_method(
        f"Business exception occurred: {exc.code} - {exc.message}",
        extra={
            "request_id": request_id,
            "path": request.url.path,
            "method": request.method,
            "error_code": str(exc.code),
            "status_code": exc.status_code,
        }
    )

    content = _error_content(exc.message, exc.code, exc.details)

    if exc.extra and _is_debug(request):
        content["debug_info"] = exc.extra

    return JSONResponse(status_code=exc.status_code, content=content)


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """请求参数验证异常处理器

    把 FastAPI 的验证错误转换为中文消息列表放入 msg_details。
    """
    request_id = getattr(request.state, "request_id", "unknown")
    errors = [translate_validation_error(error) for error in exc.errors()]

    logger.warning(
        f"Validation error: {len(errors)} field(s) failed validation",
        extra={
            "request_id": request_id,
            "path": request.url.path,
            "method": request.method,
        }
    )

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=_error_content("请求参数验证失败", ErrorCode.VALIDATION_ERROR.value, errors),
    )


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException
) -> JSONResponse:
    """HTTP 异常处理器（路由不存在、方法不允许等）"""
    request_id = getattr(request.state, "request_id", "unknown")

    log_method = logger.warning if exc.status_code < 500 else logger.error
    log_method(
        f"HTTP exception: {exc.status_code} - {exc.detail}",
        extra={
            "request_id": request_id,
            "path": request.url.path,
            "method": request.method,
            "status_code": exc.status_code,
        }
    )

    return JSONResponse(
        status_code=exc.status_code,
        content=_error_content(str(exc.detail), f"HTTP_{exc.status_code}"),
        headers=getattr(exc, "headers", None),
    )


async def general_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """通用异常处理器

    兜底处理未捕获的异常，记录完整堆栈，不向客户端暴露原始异常。
    """
    request_id = getattr(request.state, "request_id", "unknown")

    exc_type, exc_value, exc_traceback = sys.exc_info()
    tb_lines = traceback.format_exception(exc_type or type(exc), exc_value or exc, exc_traceback or exc.__traceback__)

    logger.error(
        f"Unhandled exception: {type(exc).__name__}: {exc}",
        extra={
            "request_id": request_id,
            "path": request.url.path,
            "method": request.method,
            "exception_type": type(exc).__name__,
            "traceback": "".join(tb_lines),
        }
    )

    content = _error_content("Internal server error", ErrorCode.INTERNAL_SERVER_ERROR.value)

    if _is_debug(request):
        content["msg_details"] = [
            f"异常类型: {type(exc).__name__}",
            f"异常消息: {exc}",
        ]
        content["debug_info"] = {
            "exception_type": type(exc).__name__,
            "exception_message": str(exc),
            "traceback": tb_lines[-5:],
        }

    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=content)


def register_exception_handlers(app) -> None:
    """注册所有异常处理器到 FastAPI 应用

    注册顺序:
    1. BusinessException - 业务异常
    2. RequestValidationError - 参数验证异常
    3. HTTPException - HTTP 异常
    4. Exception - 通用异常（兜底）

    使用示例:
        from fastapi import FastAPI
        from talentflow.exceptions import register_exception_handlers

        app = FastAPI()
        register_exception_handlers(app)
    """
    app.add_exception_handler(BusinessException, business_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    app.router.responses[422] = {
        "description": "请求参数验证失败",
        "model": ErrorResponse,
    }

    logger.info("Exception handlers registered successfully")
