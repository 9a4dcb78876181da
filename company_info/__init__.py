# company_info package
# -*- coding: utf-8 -*-

"""
company_info - Tra cứu thông tin pháp nhân Nhật Bản qua API 法人番号 (国税庁) và gBizINFO (経済産業省)
"""

__version__ = "1.0.0"

from company_info.constants import (
    ApiType,
    ResponseType,
    SearchMode,
    SearchTarget,
    CorporateKind,
)
from company_info.models import (
    ApiConfig,
    NumberSearchOptions,
    MetiNumberSearchOptions,
    NameSearchOptions,
)
from company_info.client import CompanyInfoClient
from company_info.config import load_config
from company_info.exceptions import (
    CompanyInfoError,
    ConfigurationError,
    ValidationError,
    TransportError,
    ApiError,
)

__all__ = [
    "ApiType",
    "ResponseType",
    "SearchMode",
    "SearchTarget",
    "CorporateKind",
    "ApiConfig",
    "NumberSearchOptions",
    "MetiNumberSearchOptions",
    "NameSearchOptions",
    "CompanyInfoClient",
    "load_config",
    "CompanyInfoError",
    "ConfigurationError",
    "ValidationError",
    "TransportError",
    "ApiError",
    "__version__",
]
