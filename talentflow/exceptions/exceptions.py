"""业务异常类定义

定义应用使用的业务异常类体系。

排序相关的三类错误（均可由用户重新拖拽重试，不会自动重试）:
    - NotFoundError: 排序意图引用的 ID 不存在（404）
    - TransientServerError: 模拟的服务端故障（500）
    - PersistenceError: 存储写入未完成，已整体回滚（500）
"""

import copy
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from fastapi import status


class ErrorCode(str, Enum):
    """错误代码枚举

    继承自 str，可以直接作为字符串使用，也会原样出现在错误响应的 error_code 字段中。

    使用示例:
        raise NotFoundError("职位不存在", code=ErrorCode.JOB_NOT_FOUND)

        if payload["error_code"] == ErrorCode.TRANSIENT_SERVER_ERROR:
            ...
    """

    # ==================== 通用错误 ====================
    BUSINESS_ERROR = "BUSINESS_ERROR"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"

    # ==================== 资源相关 (404) ====================
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    JOB_NOT_FOUND = "JOB_NOT_FOUND"
    CANDIDATE_NOT_FOUND = "CANDIDATE_NOT_FOUND"

    # ==================== 验证相关 (422) ====================
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_PARAMETER = "INVALID_PARAMETER"

    # ==================== 服务相关 (5xx) ====================
    TRANSIENT_SERVER_ERROR = "TRANSIENT_SERVER_ERROR"
    PERSISTENCE_ERROR = "PERSISTENCE_ERROR"


# 类型别名，支持枚举和字符串
ErrorCodeType = Union[str, ErrorCode]


class BusinessException(Exception):
    """业务异常基类

    所有业务异常都应该继承此类。

    属性:
        message: 错误消息（面向用户）
        code: 错误代码（用于程序判断）
        status_code: HTTP 状态码
        details: 详细错误信息列表
        extra: 额外的上下文信息

    使用示例:
        raise BusinessException(
            message="数据验证失败",
            code=ErrorCode.VALIDATION_ERROR,
            details=["title 不能为空"]
        )
    """

    def __init__(
        self,
        message: str,
        code: ErrorCodeType = ErrorCode.BUSINESS_ERROR,
        status_code: int = status.HTTP_400_BAD_REQUEST,
        details: Optional[List[str]] = None,
        **extra: Any
    ):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or []
        self.extra = extra
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典格式"""
        return {
            "message": self.message,
            "code": self.code,
            "status_code": self.status_code,
            # 返回深拷贝，避免调用方修改返回值反向污染异常对象内部状态
            "details": copy.deepcopy(self.details),
            "extra": copy.deepcopy(self.extra)
        }

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"code={self.code!r}, "
            f"status_code={self.status_code})"
        )


class NotFoundError(BusinessException):
    """资源不存在异常

    使用示例:
        raise NotFoundError("职位不存在", code=ErrorCode.JOB_NOT_FOUND, resource_id=99)
    """

    def __init__(
        self,
        message: str = "资源不存在",
        code: ErrorCodeType = ErrorCode.RESOURCE_NOT_FOUND,
        details: Optional[List[str]] = None,
        **extra: Any
    ):
        super().__init__(
            message=message,
            code=code,
            status_code=status.HTTP_404_NOT_FOUND,
            details=details,
            **extra
        )


class ValidationException(BusinessException):
    """数据验证异常"""

    def __init__(
        self,
        message: str = "数据验证失败",
        code: ErrorCodeType = ErrorCode.VALIDATION_ERROR,
        details: Optional[List[str]] = None,
        **extra: Any
    ):
        super().__init__(
            message=message,
            code=code,
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            details=details,
            **extra
        )


class TransientServerError(BusinessException):
    """临时性服务端故障

    代表任意一次后端抖动（目前由网络模拟层按概率注入）。
    调用方应回滚乐观更新并提示用户，重试由用户重新发起。
    """

    def __init__(
        self,
        message: str = "Server error",
        code: ErrorCodeType = ErrorCode.TRANSIENT_SERVER_ERROR,
        details: Optional[List[str]] = None,
        **extra: Any
    ):
        super().__init__(
            message=message,
            code=code,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details=details,
            **extra
        )


class PersistenceError(BusinessException):
    """持久化失败

    底层存储写入未完成。抛出时事务已回滚，没有任何记录被视为已更新。
    """

    def __init__(
        self,
        message: str = "Internal server error",
        code: ErrorCodeType = ErrorCode.PERSISTENCE_ERROR,
        details: Optional[List[str]] = None,
        **extra: Any
    ):
        super().__init__(
            message=message,
            code=code,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details=details,
            **extra
        )


class Err:
    """异常快捷创建类

    使用示例:
        from talentflow.exceptions import Err

        raise Err.not_found("职位不存在", code=ErrorCode.JOB_NOT_FOUND)
        raise Err.invalid("数据验证失败", details=["stage 不能为空"])
        raise Err.transient()
    """

    @staticmethod
    def not_found(message: str = "资源不存在", **kwargs) -> NotFoundError:
        """资源不存在 (404)"""
        return NotFoundError(message, **kwargs)

    @staticmethod
    def invalid(message: str = "数据验证失败", **kwargs) -> ValidationException:
        """数据验证失败 (422)"""
        return ValidationException(message, **kwargs)

    @staticmethod
    def transient(message: str = "Server error", **kwargs) -> TransientServerError:
        """临时性服务端故障 (500)"""
        return TransientServerError(message, **kwargs)

    @staticmethod
    def persistence(message: str = "Internal server error", **kwargs) -> PersistenceError:
        """存储写入失败 (500)"""
        return PersistenceError(message, **kwargs)

    @staticmethod
    def fail(message: str = "操作失败", **kwargs) -> BusinessException:
        """通用业务异常 (400)"""
        return BusinessException(message, **kwargs)
