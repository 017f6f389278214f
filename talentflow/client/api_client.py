"""
TalentFlow 异步 API 客户端

基于 httpx.AsyncClient。成功时返回响应信封中的 data，
非 2xx 响应和传输层错误统一抛出 ApiError，调用方不需要区分错误种类就能回滚，
需要时可以通过 error_code 区分。

使用示例:
    # 进程内直连应用（不经过网络）
    async with TalentFlowClient.for_app(app) as api:
        page = await api.list_jobs(status="active")
        await api.reorder_job(moved_id=1, reference_id=3)

    # 连接远程服务
    async with TalentFlowClient(httpx.AsyncClient(base_url="http://127.0.0.1:8000")) as api:
        ...
"""

from typing import Any, Dict, List, Optional

import httpx

from talentflow.log import client_logger

TRANSPORT_ERROR = "TRANSPORT_ERROR"


class ApiError(Exception):
    """接口调用失败

    属性:
        status_code: HTTP 状态码，传输层错误时为 0
        message: 服务端返回的 message，或传输错误描述
        error_code: 服务端错误码（TRANSIENT_SERVER_ERROR、JOB_NOT_FOUND 等）
    """

    def __init__(self, status_code: int, message: str, error_code: Optional[str] = None):
        self.status_code = status_code
        self.message = message
        self.error_code = error_code
        super().__init__(f"{status_code} {error_code or ''} {message}".strip())

    @property
    def kind(self) -> str:
        """错误种类，用于日志"""
        return self.error_code or f"HTTP_{self.status_code}"

    def __repr__(self) -> str:
        return (
            f"ApiError(status_code={self.status_code}, "
            f"error_code={self.error_code!r}, message={self.message!r})"
        )


class TalentFlowClient:
    """TalentFlow API 客户端

    Args:
        http: httpx.AsyncClient 实例（需设置 base_url）
    """

    def __init__(self, http: httpx.AsyncClient):
        self._http = http

    @classmethod
    def for_app(cls, app, base_url: str = "http://talentflow", timeout: float = 10.0) -> "TalentFlowClient":
        """创建直连 ASGI 应用的客户端"""
        transport = httpx.ASGITransport(app=app)
        return cls(httpx.AsyncClient(transport=transport, base_url=base_url, timeout=timeout))

    async def __aenter__(self) -> "TalentFlowClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    # ==================== 请求 ====================

    async def _request(self, method: str, url: str, **kwargs) -> Any:
        try:
            response = await self._http.request(method, url, **kwargs)
        except httpx.TimeoutException as exc:
            client_logger.error(f"{method} {url} 超时: {exc}")
            raise ApiError(0, f"Request timed out: {exc}", TRANSPORT_ERROR) from exc
        except httpx.HTTPError as exc:
            client_logger.error(f"{method} {url} 传输失败: {exc}")
            raise ApiError(0, f"Network error: {exc}", TRANSPORT_ERROR) from exc

        try:
            payload = response.json()
        except ValueError:
            payload = None

        if response.is_success:
            if isinstance(payload, dict) and "data" in payload:
                return payload["data"]
            return payload

        message = response.reason_phrase or "Request failed"
        error_code = None
        if isinstance(payload, dict):
            message = payload.get("message") or message
            error_code = payload.get("error_code")

        client_logger.warning(f"{method} {url} -> {response.status_code} {error_code}: {message}")
        raise ApiError(response.status_code, message, error_code)

    @staticmethod
    def _params(**params) -> Dict[str, Any]:
        return {key: value for key, value in params.items() if value is not None}

    # ==================== 职位 ====================

    async def list_jobs(
        self,
        status: Optional[str] = None,
        search: Optional[str] = None,
        tag: Optional[str] = None,
        page: int = 1,
    ) -> Dict[str, Any]:
        """职位列表，返回 {"jobs": [...], "totalCount": n}"""
        return await self._request(
            "GET", "/jobs", params=self._params(status=status, search=search, tag=tag, page=page)
        )

    async def create_job(self, title: str, **fields) -> Dict[str, Any]:
        return await self._request("POST", "/jobs", json={"title": title, **fields})

    async def get_job(self, job_id: int) -> Dict[str, Any]:
        return await self._request("GET", f"/jobs/{job_id}")

    async def update_job(self, job_id: int, **fields) -> Dict[str, Any]:
        return await self._request("PATCH", f"/jobs/{job_id}", json=fields)

    async def reorder_job(self, moved_id: int, reference_id: int) -> Dict[str, Any]:
        """拖拽重排，成功返回 {"success": True}"""
        return await self._request(
            "PATCH",
            f"/jobs/{moved_id}/reorder",
            json={"movedId": moved_id, "referenceId": reference_id},
        )

    async def list_job_candidates(self, job_id: int) -> List[Dict[str, Any]]:
        return await self._request("GET", f"/jobs/{job_id}/candidates")

    # ==================== 候选人 ====================

    async def list_candidates(self, stage: Optional[str] = None, search: Optional[str] = None) -> List[Dict[str, Any]]:
        return await self._request("GET", "/candidates", params=self._params(stage=stage, search=search))

    async def get_candidate(self, candidate_id: int) -> Dict[str, Any]:
        return await self._request("GET", f"/candidates/{candidate_id}")

    async def create_candidate(self, name: str, email: str, job_id: Optional[int] = None) -> Dict[str, Any]:
        return await self._request("POST", "/candidates", json={"name": name, "email": email, "jobId": job_id})

    async def update_candidate_stage(self, candidate_id: int, stage: str) -> Dict[str, Any]:
        return await self._request("PATCH", f"/candidates/{candidate_id}", json={"stage": stage})

    async def get_timeline(self, candidate_id: int) -> List[Dict[str, Any]]:
        return await self._request("GET", f"/candidates/{candidate_id}/timeline")

    async def list_notes(self, candidate_id: int) -> List[Dict[str, Any]]:
        return await self._request("GET", f"/candidates/{candidate_id}/notes")

    async def add_note(self, candidate_id: int, content: str) -> Dict[str, Any]:
        return await self._request("POST", f"/candidates/{candidate_id}/notes", json={"content": content})

    # ==================== 测评 ====================

    async def get_assessment(self, job_id: int) -> Dict[str, Any]:
        return await self._request("GET", f"/assessments/{job_id}")

    async def save_assessment(self, job_id: int, sections: List[Dict[str, Any]]) -> Dict[str, Any]:
        return await self._request("PUT", f"/assessments/{job_id}", json={"sections": sections})

    async def submit_assessment(self, job_id: int, answers: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("POST", f"/assessments/{job_id}/submit", json=answers)


__all__ = ["ApiError", "TalentFlowClient", "TRANSPORT_ERROR"]
