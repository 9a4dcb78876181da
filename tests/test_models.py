"""Unit tests cho ApiConfig và RequestDescriptor."""

import pytest

from company_info.constants import ApiType, ResponseType
from company_info.exceptions import ConfigurationError
from company_info.models import ApiConfig, HttpResponse, RequestDescriptor


class TestApiConfig:

    def test_accepts_string_values(self):
        config = ApiConfig(
            application_id="id",
            version="4",
            response_type="02",
            base_url="https://api.example.test/",
            api_type="mof",
        )
        assert config.api_type is ApiType.MOF
        assert config.response_type is ResponseType.CSV_UNICODE
        assert config.base_url == "https://api.example.test"

    def test_missing_credential(self):
        with pytest.raises(ConfigurationError) as exc_info:
            ApiConfig("", "4", ResponseType.XML_UNICODE, "https://x", ApiType.MOF)
        assert exc_info.value.field == "application_id"

    def test_json_not_allowed_for_mof(self):
        with pytest.raises(ConfigurationError):
            ApiConfig("id", "4", ResponseType.JSON, "https://x", ApiType.MOF)

    def test_xml_not_allowed_for_meti(self):
        with pytest.raises(ConfigurationError):
            ApiConfig("token", "1", ResponseType.XML_UNICODE, "https://x", ApiType.METI)

    def test_unknown_api_type(self):
        with pytest.raises(ConfigurationError):
            ApiConfig("id", "4", ResponseType.XML_UNICODE, "https://x", "edinet")

    def test_charset(self):
        assert ResponseType.CSV_SHIFT_JIS.charset == "cp932"
        assert ResponseType.XML_UNICODE.charset == "utf-8"


class TestRequestDescriptor:

    def test_params_then_raw_query(self):
        request = RequestDescriptor(
            url="https://x/4/name",
            params=[("id", "a b"), ("type", "12")],
            raw_query=[("name", "%E5%9B%BD+A")],
        )
        assert request.full_url == "https://x/4/name?id=a+b&type=12&name=%E5%9B%BD+A"

    def test_no_query(self):
        assert RequestDescriptor(url="https://x/hojin").full_url == "https://x/hojin"

    def test_raw_query_only(self):
        request = RequestDescriptor(url="https://x", raw_query=[("name", "A%26B")])
        assert request.full_url == "https://x?name=A%26B"


class TestHttpResponse:

    def test_ok(self):
        assert HttpResponse(200).ok
        assert HttpResponse(399).ok
        assert not HttpResponse(400).ok
        assert not HttpResponse(500).ok

    def test_text_shift_jis(self):
        response = HttpResponse(200, "国税庁".encode("cp932"))
        assert response.text("cp932") == "国税庁"
