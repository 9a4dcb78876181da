# models.py
# -*- coding: utf-8 -*-

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Tuple, Union
from urllib.parse import urlencode

from company_info.constants import (
    ApiType,
    ResponseType,
    SearchMode,
    SearchTarget,
    ALLOWED_RESPONSE_TYPES,
)
from company_info.exceptions import ConfigurationError


@dataclass(frozen=True)
class ApiConfig:
    """
    Cấu hình của một client instance (mỗi instance chỉ dùng một backend).

    application_id là credential dùng chung một slot, ý nghĩa tùy backend:
    - MOF: アプリケーションID (tham số `id`)
    - METI: API token (header X-hojinInfo-api-token)
    """
    application_id: str
    version: str
    response_type: ResponseType
    base_url: str
    api_type: ApiType = ApiType.MOF

    def __post_init__(self):
        try:
            api_type = ApiType(self.api_type)
            response_type = ResponseType(self.response_type)
        except ValueError as e:
            raise ConfigurationError(str(e))
        object.__setattr__(self, "api_type", api_type)
        object.__setattr__(self, "response_type", response_type)
        object.__setattr__(self, "base_url", (self.base_url or "").rstrip("/"))

        if not self.application_id:
            raise ConfigurationError("Thiếu application ID / API token", field="application_id")
        if not self.base_url:
            raise ConfigurationError("Thiếu base URL", field="base_url")
        if response_type not in ALLOWED_RESPONSE_TYPES[api_type]:
            raise ConfigurationError(
                f"{api_type.value.upper()} API không hỗ trợ response type {response_type.value}",
                field="response_type"
            )


@dataclass
class NumberSearchOptions:
    """Options tìm theo 法人番号 (MOF). history: "0" không gồm lịch sử, "1" gồm lịch sử"""
    history: Optional[str] = None


@dataclass
class MetiNumberSearchOptions:
    """Options tìm theo 法人番号 (METI). detail=True -> lấy thêm 7 sub-resource"""
    detail: bool = False


@dataclass
class NameSearchOptions:
    """
    Options tìm theo tên pháp nhân (chỉ MOF).

    Attributes:
        mode: 1 = khớp đầu (mặc định), 2 = khớp một phần
        target: 1 = JIS第一・第二水準, 2 = JIS第一～第四水準, 3 = tên tiếng Anh
        address: Mã tỉnh (2 số) hoặc mã tỉnh + mã thành phố (5 số)
        kind: Loại pháp nhân, tối đa 4 mã, nối bằng dấu phẩy
        change: "1" để gồm lịch sử thay đổi
        close: "0" để loại trừ pháp nhân đã đóng
        from_: Ngày chỉ định 法人番号 từ (YYYY-MM-DD), gửi lên dưới tên `from`
        to: Ngày chỉ định 法人番号 đến (YYYY-MM-DD)
        divide: Số thứ tự phần chia (1 ~ 99999)
    """
    mode: Optional[Union[SearchMode, str]] = None
    target: Optional[Union[SearchTarget, str]] = None
    address: Optional[str] = None
    kind: Optional[str] = None
    change: Optional[str] = None
    close: Optional[str] = None
    from_: Optional[str] = None
    to: Optional[str] = None
    divide: Optional[str] = None


SearchOptions = Union[NumberSearchOptions, MetiNumberSearchOptions, NameSearchOptions]


@dataclass
class RequestDescriptor:
    """
    Mô tả một HTTP request, chưa thực thi.

    params được serialize bằng form encoding chuẩn. raw_query chứa các cặp
    key/value đã encode sẵn, được nối nguyên văn sau params.

    name là key của request trong composite result (vd: "basic", "patent"),
    endpoint là path tương đối so với base URL.
    """
    url: str
    params: List[Tuple[str, str]] = field(default_factory=list)
    raw_query: List[Tuple[str, str]] = field(default_factory=list)
    headers: Dict[str, str] = field(default_factory=dict)
    method: str = "GET"
    name: Optional[str] = None
    endpoint: Optional[str] = None

    @property
    def query_string(self) -> str:
        parts = []
        if self.params:
            parts.append(urlencode(self.params))
        parts.extend(f"{key}={value}" for key, value in self.raw_query)
        return "&".join(parts)

    @property
    def full_url(self) -> str:
        query = self.query_string
        return f"{self.url}?{query}" if query else self.url


@dataclass
class HttpResponse:
    status_code: int
    content: bytes = b""
    headers: Mapping[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    def text(self, encoding: str = "utf-8") -> str:
        return self.content.decode(encoding, errors="replace")
