from datetime import datetime
from enum import Enum
from typing import Any, List, Optional

from fastapi import status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field


class ResponseStatus(str, Enum):
    """响应状态枚举

    用于标识响应的业务状态，与 HTTP 状态码独立。
    """
    SUCCESS = "success"   # 请求成功
    ERROR = "error"       # 请求失败（客户端或服务端错误）


class ErrorResponse(BaseModel):
    """错误响应模型

    描述所有错误响应的统一格式，客户端只依赖 message 字段展示提示。
    """
    status: str = Field(default="error", description="响应状态")
    message: str = Field(description="错误消息")
    msg_details: List[str] = Field(default=[], description="详细信息")
    data: dict = Field(default={}, description="空数据")
    error_code: str = Field(description="错误码")


class BaseResponse:
    """基础响应类"""

    @staticmethod
    def _serialize_data(data: Any, _is_top_level: bool = True) -> Any:
        """递归序列化数据，处理 SQLAlchemy 模型、datetime 和嵌套结构

        Args:
            data: 要序列化的数据
            _is_top_level: 是否为顶层调用，顶层 None 转为 {}，嵌套 None 保持为 None
        """
        if data is None:
            return {} if _is_top_level else None

        if isinstance(data, datetime):
            return data.isoformat()

        # SQLAlchemy 模型对象优先使用自身的 to_dict（字段名为 API 约定的驼峰形式）
        if hasattr(data, '__table__') and callable(getattr(data, 'to_dict', None)):
            return BaseResponse._serialize_data(data.to_dict(), False)

        if isinstance(data, (list, tuple)):
            return [BaseResponse._serialize_data(item, False) for item in data]

        if isinstance(data, dict):
            return {k: BaseResponse._serialize_data(v, False) for k, v in data.items()}

        return data

    @staticmethod
    def _create_response(
        message: str,
        data: Any = None,
        msg_details: Optional[List[str]] = None,
        status_code: int = status.HTTP_200_OK,
        response_status: ResponseStatus = ResponseStatus.SUCCESS
    ) -> JSONResponse:
        """创建标准化响应"""
        content = {
            "status": response_status.value,
            "message": message,
            "msg_details": msg_details if msg_details is not None else [],
            "data": BaseResponse._serialize_data(data)
        }
        return JSONResponse(status_code=status_code, content=content)


class SuccessResponse(BaseResponse):
    """成功响应类"""

    @staticmethod
    def OK(data: Any = None, message: str = "请求成功") -> JSONResponse:
        """200 OK - 请求成功"""
        return BaseResponse._create_response(
            data=data,
            message=message,
            status_code=status.HTTP_200_OK,
        )

    @staticmethod
    def Created(data: Any = None, message: str = "创建成功") -> JSONResponse:
        """201 Created - 创建成功"""
        return BaseResponse._create_response(
            data=data,
            message=message,
            status_code=status.HTTP_201_CREATED,
        )


class ClientErrorResponse(BaseResponse):
    """客户端错误响应类"""

    @staticmethod
    def BadRequest(message: str = "请求参数错误", msg_details: Optional[List[str]] = None) -> JSONResponse:
        """400 Bad Request - 请求参数错误"""
        return BaseResponse._create_response(
            message=message,
            msg_details=msg_details,
            status_code=status.HTTP_400_BAD_REQUEST,
            response_status=ResponseStatus.ERROR
        )

    @staticmethod
    def NotFound(message: str = "资源不存在", msg_details: Optional[List[str]] = None) -> JSONResponse:
        """404 Not Found - 资源不存在"""
        return BaseResponse._create_response(
            message=message,
            msg_details=msg_details,
            status_code=status.HTTP_404_NOT_FOUND,
            response_status=ResponseStatus.ERROR
        )


# 简化别名（最常用的）
OK = SuccessResponse.OK
Created = SuccessResponse.Created
BadRequest = ClientErrorResponse.BadRequest
NotFound = ClientErrorResponse.NotFound


class Resp:
    """响应快捷类

    只需导入一个类，IDE 自动补全所有响应方法。

    使用示例:
        from talentflow.response import Resp

        return Resp.OK(data={"jobs": jobs, "totalCount": total})
        return Resp.Created(data=job)
        return Resp.NotFound(message="职位不存在")
    """

    OK = OK
    """200 OK - 请求成功

    参数:
        data: 响应数据
        message: 响应消息，默认 "请求成功"
    """

    Created = Created
    """201 Created - 创建成功"""

    BadRequest = BadRequest
    """400 Bad Request - 请求参数错误"""

    NotFound = NotFound
    """404 Not Found - 资源不存在"""
