"""错误类别到 HTTP 状态码的映射

核心层只抛出带 code 的 TaskShareError，传输层状态码在此统一决定。
FastAPI 请求校验失败同样归为 INVALID_ENTITY。
响应体格式：{"error": {"code": ..., "message": ...}}
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.responses import JSONResponse
from taskshare.core.exceptions import InvalidEntityError, TaskShareError

log = structlog.get_logger()

_STATUS_BY_CODE: dict[str, int] = {
    "UNAUTHENTICATED": 401,
    "FORBIDDEN": 403,
    "NOT_FOUND": 404,
    "CONFLICT": 409,
    "INVALID_ENTITY": 400,
    "UNAVAILABLE": 503,
}


class UnauthenticatedError(TaskShareError):
    """请求未携带已校验的 subject 标识"""

    code = "UNAUTHENTICATED"


def error_response(error: TaskShareError) -> JSONResponse:
    """构造错误响应"""
    content: dict = {
        "error": {
            "code": error.code,
            "message": error.message,
        }
    }
    if isinstance(error, InvalidEntityError) and error.details:
        content["error"]["details"] = error.details

    return JSONResponse(
        status_code=_STATUS_BY_CODE.get(error.code, 500),
        content=content,
    )


def _validation_details(exc: RequestValidationError) -> list[dict]:
    """只保留 loc / msg / type，避免把原始输入与异常对象写入响应"""
    return [
        {
            "loc": list(error.get("loc", ())),
            "msg": error.get("msg", ""),
            "type": error.get("type", ""),
        }
        for error in exc.errors()
    ]


async def _handle_taskshare_error(request: Request, exc: TaskShareError) -> JSONResponse:
    await log.ainfo("request_rejected", code=exc.code, reason=exc.message)
    return error_response(exc)


async def _handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """请求体/参数形状错误与实体校验失败统一为 INVALID_ENTITY"""
    error = InvalidEntityError("Invalid request data", details=_validation_details(exc))
    await log.ainfo("request_rejected", code=error.code, reason=error.message)
    return error_response(error)


def register_error_handlers(app: FastAPI) -> None:
    """注册 TaskShareError 与请求校验异常处理器"""
    app.add_exception_handler(TaskShareError, _handle_taskshare_error)
    app.add_exception_handler(RequestValidationError, _handle_request_validation_error)
