# orchestrator.py
# -*- coding: utf-8 -*-

"""
Thực thi RequestDescriptor qua HttpTransport và gộp kết quả.

- Request đơn (MOF, METI không detail): lỗi HTTP -> ApiError, lỗi kết nối -> TransportError
- METI detail: request cơ bản + 7 sub-resource chạy song song. Mỗi task có
  FailurePolicy riêng: ABORT thì raise, PLACEHOLDER thì thay bằng
  {"error": "Failed to fetch ..."} và không làm hỏng cả kết quả.
"""

import json
import logging
from concurrent.futures import ThreadPoolExecutor, wait
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List

from company_info.config import DETAIL_MAX_WORKERS
from company_info.exceptions import ApiError, CompanyInfoError
from company_info.models import HttpResponse, RequestDescriptor
from company_info.transport import HttpTransport
from company_info.utils import parse_json_body

logger = logging.getLogger(__name__)

BODY_PREVIEW_LENGTH = 200


class FailurePolicy(Enum):
    ABORT = "abort"
    PLACEHOLDER = "placeholder"


@dataclass
class FetchTask:
    request: RequestDescriptor
    policy: FailurePolicy = FailurePolicy.ABORT


def error_placeholder(request: RequestDescriptor) -> Dict[str, str]:
    return {"error": f"Failed to fetch {request.endpoint or request.url}"}


def fetch(transport: HttpTransport, request: RequestDescriptor, encoding: str = "utf-8") -> HttpResponse:
    """
    Gửi một GET request.

    Raises:
        TransportError: Không nhận được response (raise nguyên trạng từ transport)
        ApiError: Response có status >= 400
    """
    response = transport.get(request.full_url, headers=request.headers or None)
    if not response.ok:
        body = response.text(encoding)
        logger.error(
            "API error %s at %s: %s",
            response.status_code,
            request.endpoint or request.url,
            body[:BODY_PREVIEW_LENGTH]
        )
        raise ApiError(
            message=f"API Error: Status {response.status_code}, {body}",
            url=request.url,
            status_code=response.status_code,
            body=body
        )
    return response


def execute(transport: HttpTransport, request: RequestDescriptor, encoding: str = "utf-8") -> str:
    """Thực thi một request và trả về body đã decode"""
    return fetch(transport, request, encoding).text(encoding)


def _run_task(transport: HttpTransport, task: FetchTask) -> Any:
    try:
        response = fetch(transport, task.request)
    except CompanyInfoError as e:
        if task.policy is FailurePolicy.ABORT:
            raise
        logger.warning("Không lấy được %s: %s", task.request.name or task.request.url, e)
        return error_placeholder(task.request)
    return parse_json_body(response.text())


def run_tasks(
    transport: HttpTransport,
    tasks: List[FetchTask],
    max_workers: int = None
) -> List[Any]:
    """
    Chạy song song các FetchTask và chờ tất cả hoàn tất (không dừng sớm khi có lỗi).

    Returns:
        Danh sách kết quả theo đúng thứ tự tasks (JSON đã parse hoặc placeholder)

    Raises:
        CompanyInfoError: Lỗi của task đầu tiên (theo thứ tự) có policy ABORT
    """
    if not tasks:
        return []

    with ThreadPoolExecutor(max_workers=max_workers or DETAIL_MAX_WORKERS) as executor:
        futures = [executor.submit(_run_task, transport, task) for task in tasks]
        wait(futures)

    return [future.result() for future in futures]


def execute_detailed(
    transport: HttpTransport,
    requests: List[RequestDescriptor],
    max_workers: int = None
) -> str:
    """
    Thực thi METI detail lookup.

    requests[0] là request cơ bản (ABORT). Nếu nó lỗi thì raise ngay, không
    gửi các request sub-resource. Các request còn lại chạy với PLACEHOLDER.

    Returns:
        JSON string: {"basic": ..., "certification": ..., ..., "workplace": ...}
    """
    base_request, sub_requests = requests[0], requests[1:]
    base = _run_task(transport, FetchTask(base_request, FailurePolicy.ABORT))

    tasks = [FetchTask(request, FailurePolicy.PLACEHOLDER) for request in sub_requests]
    details = run_tasks(transport, tasks, max_workers)

    result = {base_request.name: base}
    for request, detail in zip(sub_requests, details):
        result[request.name] = detail

    failed = [request.name for request, detail in zip(sub_requests, details)
              if detail == error_placeholder(request)]
    if failed:
        logger.info("Detail lookup hoàn tất, %d/%d sub-resource lỗi: %s",
                    len(failed), len(sub_requests), ", ".join(failed))

    return json.dumps(result, ensure_ascii=False)
