# client.py
# -*- coding: utf-8 -*-

import logging
from typing import Any, Mapping, Union

from company_info.config import DETAIL_MAX_WORKERS
from company_info.constants import ApiType
from company_info.models import (
    ApiConfig,
    NameSearchOptions,
    SearchOptions,
)
from company_info.orchestrator import execute, execute_detailed
from company_info.request_builder import (
    build_number_requests,
    build_name_request,
    check_name_search_supported,
)
from company_info.transport import HttpTransport, RequestsTransport
from company_info.utils import (
    mask_credential,
    number_options_from_dict,
    name_options_from_dict,
)

logger = logging.getLogger(__name__)


class CompanyInfoClient:
    """
    Client tra cứu thông tin pháp nhân qua API 法人番号 (MOF) hoặc gBizINFO (METI).
    Backend được chọn bởi config.api_type.
    """

    def __init__(
        self,
        config: ApiConfig,
        transport: HttpTransport = None,
        max_workers: int = None
    ):
        self.config = config
        self.transport = transport or RequestsTransport()
        self.max_workers = max_workers or DETAIL_MAX_WORKERS
        logger.debug(
            "CompanyInfoClient: api=%s version=%s base_url=%s credential=%s",
            config.api_type.value,
            config.version,
            config.base_url,
            mask_credential(config.application_id)
        )

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def close(self) -> None:
        self.transport.close()

    def search_by_number(
        self,
        corporate_number: str,
        options: Union[SearchOptions, Mapping[str, Any], None] = None
    ) -> str:
        """
        Tra cứu theo 法人番号.

        Args:
            corporate_number: 法人番号 (MOF cho phép tối đa 10 số nối bằng dấu phẩy)
            options: NumberSearchOptions (MOF), MetiNumberSearchOptions (METI)
                     hoặc dict, schema chọn theo backend

        Returns:
            MOF: CSV/XML body. METI: JSON body, hoặc JSON composite nếu detail=True

        Raises:
            ConfigurationError: Options không khớp backend
            ValidationError: Options dạng dict không hợp lệ
            TransportError: Không kết nối được
            ApiError: HTTP status >= 400 (với METI detail: chỉ khi request cơ bản lỗi)
        """
        if options is None or isinstance(options, Mapping):
            options = number_options_from_dict(self.config.api_type, options)

        requests = build_number_requests(self.config, corporate_number, options)

        if self.config.api_type is ApiType.METI:
            logger.debug("METI request: %s (%d requests)", requests[0].url, len(requests))
            if len(requests) > 1:
                return execute_detailed(self.transport, requests, self.max_workers)
            return execute(self.transport, requests[0])

        return execute(self.transport, requests[0], self.config.response_type.charset)

    def search_by_name(
        self,
        corporate_name: str,
        options: Union[NameSearchOptions, Mapping[str, Any], None] = None
    ) -> str:
        """
        Tra cứu theo tên pháp nhân (chỉ MOF, API version >= 2).

        Raises:
            ConfigurationError: Backend METI hoặc version < 2 (trước khi gửi request)
            ValidationError: Options dạng dict không hợp lệ
            TransportError: Không kết nối được
            ApiError: HTTP status >= 400
        """
        check_name_search_supported(self.config)

        if options is None or isinstance(options, Mapping):
            options = name_options_from_dict(options)

        request = build_name_request(self.config, corporate_name, options)
        logger.debug("MOF name request: %s params=%s", request.url,
                     [(k, v) for k, v in request.params if k != "id"])
        return execute(self.transport, request, self.config.response_type.charset)
