"""
Unit tests cho request_builder:
- Tham số MOF tìm theo 法人番号 / tên
- Target mặc định khi tên có tiếng Nhật
- METI fan-out requests
"""

import pytest

from company_info.constants import METI_SUBRESOURCES, SearchMode, SearchTarget
from company_info.exceptions import ConfigurationError
from company_info.models import (
    ApiConfig,
    NumberSearchOptions,
    MetiNumberSearchOptions,
    NameSearchOptions,
)
from company_info.request_builder import (
    build_mof_number_request,
    build_meti_number_requests,
    build_number_requests,
    build_name_request,
)
from tests.conftest import MOF_BASE, METI_BASE, NUMBER


def params_dict(request):
    return dict(request.params)


class TestMofNumberRequest:

    def test_without_history(self, mof_config):
        request = build_mof_number_request(mof_config, NUMBER)
        assert request.method == "GET"
        assert request.url == f"{MOF_BASE}/4/num"
        assert request.params == [
            ("id", "app-id-12345"),
            ("number", NUMBER),
            ("type", "12"),
        ]
        assert request.raw_query == []

    @pytest.mark.parametrize("history", ["0", "1"])
    def test_history_present_iff_supplied(self, mof_config, history):
        request = build_mof_number_request(mof_config, NUMBER, NumberSearchOptions(history=history))
        assert params_dict(request) == {
            "id": "app-id-12345",
            "number": NUMBER,
            "type": "12",
            "history": history,
        }

    def test_full_url(self, mof_config):
        request = build_mof_number_request(mof_config, NUMBER, NumberSearchOptions(history="1"))
        assert request.full_url == (
            f"{MOF_BASE}/4/num?id=app-id-12345&number={NUMBER}&type=12&history=1"
        )

    def test_multiple_numbers_passed_through(self, mof_config):
        request = build_mof_number_request(mof_config, "1111111111111,2222222222222")
        assert params_dict(request)["number"] == "1111111111111,2222222222222"

    def test_rejects_meti_options(self, mof_config):
        with pytest.raises(ConfigurationError):
            build_number_requests(mof_config, NUMBER, MetiNumberSearchOptions(detail=True))


class TestMetiNumberRequests:

    def test_basic_only(self, meti_config):
        requests = build_meti_number_requests(meti_config, NUMBER)
        assert len(requests) == 1
        request = requests[0]
        assert request.url == f"{METI_BASE}/hojin/v1/hojin/{NUMBER}"
        assert request.full_url == request.url
        assert request.name == "basic"
        assert request.headers == {
            "X-hojinInfo-api-token": "meti-token-abcdef",
            "Content-Type": "application/json",
        }

    def test_detail_fan_out(self, meti_config):
        requests = build_meti_number_requests(meti_config, NUMBER, MetiNumberSearchOptions(detail=True))
        assert len(requests) == 8
        assert [r.name for r in requests] == ["basic"] + list(METI_SUBRESOURCES)
        for request in requests[1:]:
            assert request.url == f"{METI_BASE}/hojin/v1/hojin/{NUMBER}/{request.name}"
            assert request.endpoint == f"/hojin/v1/hojin/{NUMBER}/{request.name}"
            assert request.headers["X-hojinInfo-api-token"] == "meti-token-abcdef"

    def test_dispatch_by_backend(self, meti_config):
        requests = build_number_requests(meti_config, NUMBER, MetiNumberSearchOptions())
        assert len(requests) == 1

    def test_rejects_mof_options(self, meti_config):
        with pytest.raises(ConfigurationError):
            build_number_requests(meti_config, NUMBER, NumberSearchOptions(history="1"))


class TestNameRequest:

    def test_japanese_name_defaults_target(self, mof_config):
        request = build_name_request(mof_config, "国税庁")
        assert params_dict(request)["target"] == SearchTarget.JIS_LEVEL_1_2.value
        assert request.url == f"{MOF_BASE}/4/name"

    def test_explicit_target_wins(self, mof_config):
        request = build_name_request(mof_config, "国税庁", NameSearchOptions(target=SearchTarget.ENGLISH))
        assert params_dict(request)["target"] == "3"

    def test_ascii_name_has_no_default_target(self, mof_config):
        request = build_name_request(mof_config, "Toyota")
        assert "target" not in params_dict(request)

    def test_caller_options_not_mutated(self, mof_config):
        options = NameSearchOptions(mode=SearchMode.PARTIAL_MATCH)
        build_name_request(mof_config, "トヨタ", options)
        assert options.target is None

    def test_name_appended_raw_after_params(self, mof_config):
        request = build_name_request(mof_config, "A&B Co.", NameSearchOptions(mode="2"))
        assert "name" not in params_dict(request)
        assert request.raw_query == [("name", "A%26B+Co.")]
        assert request.full_url == f"{MOF_BASE}/4/name?id=app-id-12345&type=12&mode=2&name=A%26B+Co."

    def test_optional_params_order(self, mof_config):
        options = NameSearchOptions(
            divide="3", to="2020-12-31", from_="2015-10-05", close="0",
            change="1", kind="03", address="13", target="2", mode="1",
        )
        request = build_name_request(mof_config, "X", options)
        assert [key for key, _ in request.params] == [
            "id", "type", "mode", "target", "address", "kind",
            "change", "close", "from", "to", "divide",
        ]

    def test_empty_values_omitted(self, mof_config):
        request = build_name_request(mof_config, "X", NameSearchOptions(address="", kind=None))
        assert [key for key, _ in request.params] == ["id", "type"]

    def test_meti_rejected(self, meti_config):
        with pytest.raises(ConfigurationError):
            build_name_request(meti_config, "国税庁")

    def test_version_below_2_rejected(self):
        config = ApiConfig("id", "1", "12", MOF_BASE, "mof")
        with pytest.raises(ConfigurationError) as exc_info:
            build_name_request(config, "国税庁")
        assert exc_info.value.field == "version"

    @pytest.mark.parametrize("version", ["2", "2.0", "4"])
    def test_numeric_versions_from_2_accepted(self, version):
        config = ApiConfig("id", version, "12", MOF_BASE, "mof")
        request = build_name_request(config, "Toyota")
        assert request.url == f"{MOF_BASE}/{version}/name"

    @pytest.mark.parametrize("version", ["1.5", "abc"])
    def test_low_or_invalid_version_rejected(self, version):
        config = ApiConfig("id", version, "12", MOF_BASE, "mof")
        with pytest.raises(ConfigurationError) as exc_info:
            build_name_request(config, "Toyota")
        assert exc_info.value.field == "version"
