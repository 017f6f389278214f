"""异常处理模块

提供业务异常类、全局异常处理器等功能。

使用示例:
    from talentflow.exceptions import Err, register_exception_handlers

    app = FastAPI()
    register_exception_handlers(app)

    @router.get("/jobs/{job_id}")
    def get_job(job_id: int):
        job = store.get_by_id(job_id)
        if job is None:
            raise Err.not_found("职位不存在", code=ErrorCode.JOB_NOT_FOUND)
        return Resp.OK(job)
"""

from .exceptions import (
    Err,
    ErrorCode,
    ErrorCodeType,
    BusinessException,
    NotFoundError,
    ValidationException,
    TransientServerError,
    PersistenceError,
)

from .handlers import (
    register_exception_handlers,
    business_exception_handler,
    validation_exception_handler,
    http_exception_handler,
    general_exception_handler,
    translate_validation_error,
)

__all__ = [
    "Err",
    "ErrorCode",
    "ErrorCodeType",
    "BusinessException",
    "NotFoundError",
    "ValidationException",
    "TransientServerError",
    "PersistenceError",
    "register_exception_handlers",
    "business_exception_handler",
    "validation_exception_handler",
    "http_exception_handler",
    "general_exception_handler",
    "translate_validation_error",
]
