# utils.py
# -*- coding: utf-8 -*-

"""
Utility functions cho company_info
"""

import json
import re
from enum import Enum
from typing import Any, Mapping, Optional, Union
from urllib.parse import quote

from company_info.constants import (
    ApiType,
    CorporateKind,
    SearchMode,
    SearchTarget,
    FLAG_VALUES,
    MAX_DIVIDE,
)
from company_info.exceptions import ValidationError
from company_info.models import (
    NumberSearchOptions,
    MetiNumberSearchOptions,
    NameSearchOptions,
)

# Hiragana, Katakana, CJK Unified Ideographs, full-width forms, dấu câu CJK
JAPANESE_PATTERN = re.compile(r"[\u3000-\u303f\u3040-\u309f\u30a0-\u30ff\uff00-\uff9f\u4e00-\u9faf]")

# Các ký tự encodeURIComponent không escape nhưng RFC 3986 coi là reserved
RFC3986_EXTRA_PATTERN = re.compile(r"[!'()*]")

# encodeURIComponent giữ nguyên: A-Z a-z 0-9 - _ . ! ~ * ' ( )
URI_COMPONENT_SAFE = "-_.!~*'()"

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
ADDRESS_PATTERN = re.compile(r"^(\d{2}|\d{5})$")
MAX_KINDS = 4


def contains_japanese(text: str) -> bool:
    """Kiểm tra text có chứa ký tự tiếng Nhật không"""
    if not text:
        return False
    return JAPANESE_PATTERN.search(text) is not None


def encode_name(name: str) -> str:
    """
    Encode tên pháp nhân để nối trực tiếp vào query string.

    1. Percent-encode UTF-8 giống encodeURIComponent
    2. Encode thêm ! ' ( ) * theo RFC 3986
    3. Thay %20 bằng +

    Args:
        name: Tên pháp nhân (Unicode)

    Returns:
        Chuỗi đã encode
    """
    encoded = quote(name, safe=URI_COMPONENT_SAFE)
    encoded = RFC3986_EXTRA_PATTERN.sub(lambda m: "%{:02X}".format(ord(m.group(0))), encoded)
    return encoded.replace("%20", "+")


def wire_value(value: Union[Enum, str, int, None]) -> Optional[str]:
    """Chuyển giá trị option thành string gửi lên API. None/"" -> None"""
    if value is None:
        return None
    if isinstance(value, Enum):
        value = value.value
    value = str(value)
    return value or None


def mask_credential(credential: str, visible: int = 5) -> str:
    if not credential:
        return ""
    return f"{credential[:visible]}..."


def parse_json_body(text: str) -> Any:
    """Parse JSON body, trả về text gốc nếu không phải JSON"""
    try:
        return json.loads(text)
    except ValueError:
        return text


def _check_keys(data: Mapping[str, Any], allowed: tuple) -> None:
    if not isinstance(data, Mapping):
        raise ValidationError("Options phải là JSON object", field="options")
    unknown = [key for key in data if key not in allowed]
    if unknown:
        raise ValidationError(
            f"Option không hợp lệ: {', '.join(unknown)}. Option hợp lệ: {', '.join(allowed)}",
            field=unknown[0]
        )


def _choice(data: Mapping[str, Any], key: str, choices) -> Optional[str]:
    value = wire_value(data.get(key))
    if value is not None and value not in choices:
        raise ValidationError(
            f"Giá trị '{value}' không hợp lệ cho {key}. Giá trị hợp lệ: {', '.join(choices)}",
            field=key
        )
    return value


def _date(data: Mapping[str, Any], key: str) -> Optional[str]:
    value = wire_value(data.get(key))
    if value is not None and not DATE_PATTERN.match(value):
        raise ValidationError(f"{key} phải có dạng YYYY-MM-DD: {value}", field=key)
    return value


def number_options_from_dict(
    api_type: ApiType,
    data: Optional[Mapping[str, Any]]
) -> Union[NumberSearchOptions, MetiNumberSearchOptions]:
    """
    Parse options tìm theo 法人番号, schema chọn theo backend đang cấu hình.

    Raises:
        ValidationError: Nếu có key lạ hoặc giá trị ngoài miền hợp lệ
    """
    data = data or {}
    if ApiType(api_type) is ApiType.METI:
        _check_keys(data, ("detail",))
        detail = data.get("detail", False)
        if not isinstance(detail, bool):
            raise ValidationError("detail phải là true hoặc false", field="detail")
        return MetiNumberSearchOptions(detail=detail)

    _check_keys(data, ("history",))
    return NumberSearchOptions(history=_choice(data, "history", FLAG_VALUES))


def name_options_from_dict(data: Optional[Mapping[str, Any]]) -> NameSearchOptions:
    """
    Parse options tìm theo tên pháp nhân.

    Key `from` của JSON được map sang field from_.

    Raises:
        ValidationError: Nếu có key lạ hoặc giá trị ngoài miền hợp lệ
    """
    data = data or {}
    _check_keys(data, ("mode", "target", "address", "kind", "change", "close", "from", "to", "divide"))

    address = wire_value(data.get("address"))
    if address is not None and not ADDRESS_PATTERN.match(address):
        raise ValidationError(f"address phải là mã 2 hoặc 5 chữ số: {address}", field="address")

    kind = wire_value(data.get("kind"))
    if kind is not None:
        kinds = kind.split(",")
        valid_kinds = [k.value for k in CorporateKind]
        if len(kinds) > MAX_KINDS or any(k not in valid_kinds for k in kinds):
            raise ValidationError(
                f"kind phải gồm tối đa {MAX_KINDS} mã trong {', '.join(valid_kinds)}: {kind}",
                field="kind"
            )

    divide = wire_value(data.get("divide"))
    if divide is not None and not (divide.isdigit() and 1 <= int(divide) <= MAX_DIVIDE):
        raise ValidationError(f"divide phải trong khoảng 1 ~ {MAX_DIVIDE}: {divide}", field="divide")

    return NameSearchOptions(
        mode=_choice(data, "mode", [m.value for m in SearchMode]),
        target=_choice(data, "target", [t.value for t in SearchTarget]),
        address=address,
        kind=kind,
        change=_choice(data, "change", FLAG_VALUES),
        close=_choice(data, "close", FLAG_VALUES),
        from_=_date(data, "from"),
        to=_date(data, "to"),
        divide=divide,
    )
