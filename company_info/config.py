# config.py
# -*- coding: utf-8 -*-

"""
Cấu hình cho client tra cứu thông tin pháp nhân
"""

import logging
import os
from typing import Mapping, Optional

from dotenv import load_dotenv

from company_info.constants import (
    ApiType,
    FORMAT_NAMES,
    DEFAULT_FORMATS,
    ERR_MISSING_CREDENTIAL,
    ERR_INVALID_API,
    ERR_INVALID_FORMAT,
)
from company_info.exceptions import ConfigurationError
from company_info.models import ApiConfig

logger = logging.getLogger(__name__)

MOF_BASE_URL = "https://api.houjin-bangou.nta.go.jp"
METI_BASE_URL = "https://info.gbiz.go.jp"

DEFAULT_MOF_VERSION = "4"
DEFAULT_METI_VERSION = "1"

REQUEST_TIMEOUT = 10
DETAIL_MAX_WORKERS = 7

# Biến môi trường
ENV_MOF_APPLICATION_ID = "MOF_APPLICATION_ID"
ENV_MOF_API_VERSION = "MOF_API_VERSION"
ENV_METI_API_TOKEN = "METI_API_TOKEN"
ENV_METI_API_VERSION = "METI_API_VERSION"
ENV_METI_API_URL = "METI_API_URL"

# .env.local được load trước, .env không ghi đè
ENV_FILES = (".env.local", ".env")


def load_env_files() -> None:
    """Load biến môi trường từ .env.local rồi .env (không override biến đã có)"""
    for env_file in ENV_FILES:
        if load_dotenv(env_file, override=False):
            logger.debug("Loaded environment from %s", env_file)


def parse_api_type(api: str) -> ApiType:
    try:
        return ApiType((api or "").strip().lower())
    except ValueError:
        raise ConfigurationError(ERR_INVALID_API.format(api=api), field="api")


def load_config(
    api: str = "mof",
    fmt: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None
) -> ApiConfig:
    """
    Tạo ApiConfig từ biến môi trường.

    Args:
        api: "mof" hoặc "meti"
        fmt: Tên format (csv-sjis, csv, xml cho MOF; json cho METI).
             None -> format mặc định của backend
        environ: Mapping biến môi trường (mặc định os.environ)

    Returns:
        ApiConfig

    Raises:
        ConfigurationError: API/format không hợp lệ hoặc thiếu credential
    """
    env = os.environ if environ is None else environ
    api_type = parse_api_type(api)

    fmt_name = (fmt or DEFAULT_FORMATS[api_type]).strip().lower()
    formats = FORMAT_NAMES[api_type]
    if fmt_name not in formats:
        raise ConfigurationError(
            ERR_INVALID_FORMAT.format(
                api=api_type.value.upper(),
                fmt=fmt_name,
                allowed=", ".join(formats)
            ),
            field="format"
        )

    if api_type is ApiType.MOF:
        credential_env = ENV_MOF_APPLICATION_ID
        version = env.get(ENV_MOF_API_VERSION) or DEFAULT_MOF_VERSION
        base_url = MOF_BASE_URL
    else:
        credential_env = ENV_METI_API_TOKEN
        version = env.get(ENV_METI_API_VERSION) or DEFAULT_METI_VERSION
        base_url = env.get(ENV_METI_API_URL) or METI_BASE_URL

    application_id = env.get(credential_env) or ""
    if not application_id:
        raise ConfigurationError(
            ERR_MISSING_CREDENTIAL.format(env_var=credential_env),
            field=credential_env
        )

    return ApiConfig(
        application_id=application_id,
        version=version,
        response_type=formats[fmt_name],
        base_url=base_url,
        api_type=api_type,
    )
