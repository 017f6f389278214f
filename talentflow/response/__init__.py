"""响应模块

使用示例:
    from talentflow.response import Resp

    return Resp.OK(data=result)
    return Resp.Created(data=job)
"""

from .base_response import (
    Resp,
    ResponseStatus,
    ErrorResponse,
    BaseResponse,
    SuccessResponse,
    ClientErrorResponse,
    OK,
    Created,
    BadRequest,
    NotFound,
)

__all__ = [
    "Resp",
    "ResponseStatus",
    "ErrorResponse",
    "BaseResponse",
    "SuccessResponse",
    "ClientErrorResponse",
    "OK",
    "Created",
    "BadRequest",
    "NotFound",
]
