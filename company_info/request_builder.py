# request_builder.py
# -*- coding: utf-8 -*-

"""
Xây dựng request cho API 法人番号 (MOF) và gBizINFO (METI).
Chỉ tạo RequestDescriptor, không thực hiện I/O.
"""

import logging
from dataclasses import replace
from typing import List, Optional

from company_info.constants import (
    ApiType,
    SearchType,
    SearchTarget,
    METI_HOJIN_PATH,
    METI_TOKEN_HEADER,
    METI_BASIC_KEY,
    METI_SUBRESOURCES,
    MIN_NAME_SEARCH_VERSION,
    ERR_NAME_SEARCH_METI,
    ERR_NAME_SEARCH_VERSION,
    ERR_OPTIONS_MISMATCH,
)
from company_info.exceptions import ConfigurationError
from company_info.models import (
    ApiConfig,
    NumberSearchOptions,
    MetiNumberSearchOptions,
    NameSearchOptions,
    RequestDescriptor,
    SearchOptions,
)
from company_info.utils import contains_japanese, encode_name, wire_value

logger = logging.getLogger(__name__)

# Thứ tự tham số optional khi tìm theo tên: (tên wire, field của NameSearchOptions)
NAME_OPTION_PARAMS = (
    ("mode", "mode"),
    ("target", "target"),
    ("address", "address"),
    ("kind", "kind"),
    ("change", "change"),
    ("close", "close"),
    ("from", "from_"),
    ("to", "to"),
    ("divide", "divide"),
)


def _mof_url(config: ApiConfig, search_type: SearchType) -> str:
    return f"{config.base_url}/{config.version}/{search_type.value}"


def _check_options(config: ApiConfig, options: SearchOptions, expected: type) -> None:
    if not isinstance(options, expected):
        raise ConfigurationError(
            ERR_OPTIONS_MISMATCH.format(
                options=type(options).__name__,
                api=config.api_type.value.upper()
            ),
            field="options"
        )


def meti_headers(config: ApiConfig) -> dict:
    return {
        METI_TOKEN_HEADER: config.application_id,
        "Content-Type": "application/json",
    }


def build_mof_number_request(
    config: ApiConfig,
    corporate_number: str,
    options: Optional[NumberSearchOptions] = None
) -> RequestDescriptor:
    """
    Request tìm theo 法人番号 (MOF).

    Args:
        config: ApiConfig của backend MOF
        corporate_number: 法人番号, nhiều số nối bằng dấu phẩy (tối đa 10).
                          Không kiểm tra số lượng hay check digit ở đây.
        options: NumberSearchOptions

    Returns:
        RequestDescriptor tới {base}/{version}/num
    """
    options = options or NumberSearchOptions()
    _check_options(config, options, NumberSearchOptions)

    params = [
        ("id", config.application_id),
        ("number", corporate_number),
        ("type", config.response_type.value),
    ]
    history = wire_value(options.history)
    if history is not None:
        params.append(("history", history))

    return RequestDescriptor(url=_mof_url(config, SearchType.BY_NUMBER), params=params)


def build_meti_number_requests(
    config: ApiConfig,
    corporate_number: str,
    options: Optional[MetiNumberSearchOptions] = None
) -> List[RequestDescriptor]:
    """
    Request tìm theo 法人番号 (gBizINFO).

    Request đầu tiên luôn là thông tin cơ bản (name="basic"). Nếu detail=True,
    thêm 7 request sub-resource theo thứ tự METI_SUBRESOURCES.
    """
    options = options or MetiNumberSearchOptions()
    _check_options(config, options, MetiNumberSearchOptions)

    headers = meti_headers(config)
    base_endpoint = f"{METI_HOJIN_PATH}/{corporate_number}"
    requests = [
        RequestDescriptor(
            url=f"{config.base_url}{base_endpoint}",
            headers=dict(headers),
            name=METI_BASIC_KEY,
            endpoint=base_endpoint,
        )
    ]

    if options.detail:
        for subresource in METI_SUBRESOURCES:
            endpoint = f"{base_endpoint}/{subresource}"
            requests.append(
                RequestDescriptor(
                    url=f"{config.base_url}{endpoint}",
                    headers=dict(headers),
                    name=subresource,
                    endpoint=endpoint,
                )
            )

    return requests


def build_number_requests(
    config: ApiConfig,
    corporate_number: str,
    options: Optional[SearchOptions] = None
) -> List[RequestDescriptor]:
    """
    Chọn schema options và builder theo backend của config.

    Raises:
        ConfigurationError: Nếu options thuộc schema của backend khác
    """
    if config.api_type is ApiType.METI:
        return build_meti_number_requests(config, corporate_number, options)
    return [build_mof_number_request(config, corporate_number, options)]


def check_name_search_supported(config: ApiConfig) -> None:
    """
    Raises:
        ConfigurationError: Backend METI, hoặc MOF version < 2
    """
    if config.api_type is ApiType.METI:
        raise ConfigurationError(ERR_NAME_SEARCH_METI, field="api_type")

    try:
        version = float(config.version)
    except (TypeError, ValueError):
        raise ConfigurationError(f"API version không hợp lệ: {config.version}", field="version")
    if version < MIN_NAME_SEARCH_VERSION:
        raise ConfigurationError(
            ERR_NAME_SEARCH_VERSION.format(min_version=MIN_NAME_SEARCH_VERSION, version=config.version),
            field="version"
        )


def build_name_request(
    config: ApiConfig,
    corporate_name: str,
    options: Optional[NameSearchOptions] = None
) -> RequestDescriptor:
    """
    Request tìm theo tên pháp nhân (chỉ MOF).

    Nếu tên có ký tự tiếng Nhật và chưa chỉ định target, target mặc định là
    JIS第一・第二水準 (tìm gần đúng). Options của caller không bị thay đổi.

    Tham số `name` đã được encode bằng encode_name() và nối nguyên văn sau
    các tham số khác, không đi qua urlencode.

    Raises:
        ConfigurationError: Backend không hỗ trợ tìm theo tên
    """
    check_name_search_supported(config)
    options = options or NameSearchOptions()
    _check_options(config, options, NameSearchOptions)

    has_japanese = contains_japanese(corporate_name)
    if has_japanese and wire_value(options.target) is None:
        options = replace(options, target=SearchTarget.JIS_LEVEL_1_2)
    logger.debug("Name %r contains Japanese: %s", corporate_name, has_japanese)

    params = [
        ("id", config.application_id),
        ("type", config.response_type.value),
    ]
    for wire_name, attr in NAME_OPTION_PARAMS:
        value = wire_value(getattr(options, attr))
        if value is not None:
            params.append((wire_name, value))

    encoded_name = encode_name(corporate_name)
    logger.debug("Encoded name: %s", encoded_name)

    return RequestDescriptor(
        url=_mof_url(config, SearchType.BY_NAME),
        params=params,
        raw_query=[("name", encoded_name)],
    )
