# constants.py
# -*- coding: utf-8 -*-

"""
Constants cho client tra cứu thông tin pháp nhân Nhật Bản (法人番号 / gBizINFO)
"""

from enum import Enum


class SearchType(str, Enum):
    """Loại tìm kiếm (path segment của API Bộ Tài chính)"""
    BY_NUMBER = "num"
    BY_NAME = "name"


class ApiType(str, Enum):
    """Backend API"""
    MOF = "mof"    # 財務省 / 国税庁 法人番号システム Web-API
    METI = "meti"  # 経済産業省 gBizINFO


class ResponseType(str, Enum):
    """Định dạng response (tham số `type`)"""
    CSV_SHIFT_JIS = "01"
    CSV_UNICODE = "02"
    XML_UNICODE = "12"
    JSON = "json"

    @property
    def charset(self) -> str:
        return "cp932" if self is ResponseType.CSV_SHIFT_JIS else "utf-8"


class CorporateKind(str, Enum):
    """Loại pháp nhân (tham số `kind`)"""
    GOVERNMENT = "01"
    LOCAL_GOVERNMENT = "02"
    REGISTERED_CORPORATION = "03"
    FOREIGN_CORPORATION = "04"


class SearchMode(str, Enum):
    """Phương thức tìm theo tên"""
    PREFIX_MATCH = "1"
    PARTIAL_MATCH = "2"


class SearchTarget(str, Enum):
    """Đối tượng tìm theo tên"""
    JIS_LEVEL_1_2 = "1"  # JIS第一・第二水準 (tìm gần đúng)
    JIS_LEVEL_1_4 = "2"  # JIS第一～第四水準 (khớp hoàn toàn)
    ENGLISH = "3"        # 英語表記


# Định dạng hợp lệ theo từng backend
ALLOWED_RESPONSE_TYPES = {
    ApiType.MOF: (ResponseType.CSV_SHIFT_JIS, ResponseType.CSV_UNICODE, ResponseType.XML_UNICODE),
    ApiType.METI: (ResponseType.JSON,),
}

# Tên format trên CLI -> ResponseType
FORMAT_NAMES = {
    ApiType.MOF: {
        "csv-sjis": ResponseType.CSV_SHIFT_JIS,
        "csv": ResponseType.CSV_UNICODE,
        "xml": ResponseType.XML_UNICODE,
    },
    ApiType.METI: {
        "json": ResponseType.JSON,
    },
}

DEFAULT_FORMATS = {
    ApiType.MOF: "xml",
    ApiType.METI: "json",
}

# gBizINFO
METI_HOJIN_PATH = "/hojin/v1/hojin"
METI_TOKEN_HEADER = "X-hojinInfo-api-token"
METI_BASIC_KEY = "basic"
# Thứ tự cố định, quyết định key của composite result
METI_SUBRESOURCES = (
    "certification",
    "commendation",
    "finance",
    "patent",
    "procurement",
    "subsidy",
    "workplace",
)

# Tìm theo tên chỉ có từ API version 2
MIN_NAME_SEARCH_VERSION = 2

# Giá trị hợp lệ của option
FLAG_VALUES = ("0", "1")
MAX_DIVIDE = 99999

# Error Messages
ERR_MISSING_CREDENTIAL = (
    "Chưa cấu hình biến môi trường {env_var}.\n"
    "Vui lòng kiểm tra file .env hoặc .env.local và đặt {env_var}."
)
ERR_INVALID_API = "API không hợp lệ: {api}. Giá trị hợp lệ: mof (財務省), meti (経済産業省)"
ERR_INVALID_FORMAT = "{api} API không hỗ trợ format: {fmt}. Format hợp lệ: {allowed}"
ERR_NAME_SEARCH_METI = (
    "gBizINFO (経済産業省) API không hỗ trợ tìm theo tên pháp nhân. "
    "Chỉ có thể tìm theo 法人番号."
)
ERR_NAME_SEARCH_VERSION = (
    "Tìm theo tên pháp nhân chỉ dùng được với API version {min_version} trở lên "
    "(hiện tại: {version}). Vui lòng đặt MOF_API_VERSION >= {min_version}."
)
ERR_OPTIONS_MISMATCH = "Options {options} không dùng được với {api} API."
ERR_INVALID_OPTIONS_JSON = "--options phải là JSON object hợp lệ: {error}"

# CLI Messages
MSG_ERROR = "Đã xảy ra lỗi: {error}"
MSG_API_ERROR_DETAIL = "HTTP status {status}: {body}"
