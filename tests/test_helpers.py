from datetime import date
from urllib.parse import parse_qs, urlparse

import pytest

import absendo
from absendo.shared.utils.errors import ValidationError
from absendo.shared.utils.helpers import (
    generate_date_str,
    generate_response,
    parse_bool,
    parse_date_str,
    resolve_fetch_url,
    validate_params,
)
from absendo.shared.utils.types import ErrorType
from absendo.shared.utils.version import find_pyproject, get_version

from .conftest import CALENDAR_URL, SCHULNETZ_URL

GATEWAY = "https://proxy.example.org/proxy"


class TestResolveFetchUrl:
    def test_matching_host_is_rewritten(self):
        url = resolve_fetch_url(SCHULNETZ_URL, gateway_url=GATEWAY, gateway_host="schulnetz.lu.ch")

        assert url.startswith(f"{GATEWAY}?url=")
        assert parse_qs(urlparse(url).query)["url"] == [SCHULNETZ_URL]

    def test_other_hosts_pass_through(self):
        assert (
            resolve_fetch_url(CALENDAR_URL, gateway_url=GATEWAY, gateway_host="schulnetz.lu.ch")
            == CALENDAR_URL
        )

    def test_empty_gateway_disables_rewrite(self):
        assert resolve_fetch_url(SCHULNETZ_URL, gateway_url="") == SCHULNETZ_URL

    def test_configured_defaults(self):
        url = resolve_fetch_url(SCHULNETZ_URL)

        assert url != SCHULNETZ_URL
        assert "url=" in url


class TestValidateParams:
    def test_valid_params(self):
        params = validate_params(
            {"calendar_url": CALENDAR_URL, "date": "2024-01-15", "full_names": "true"}
        )

        assert params["calendar_url"] == CALENDAR_URL
        assert params["date"] == "2024-01-15"
        assert params["full_names"] is True

    def test_defaults(self):
        params = validate_params({"calendar_url": CALENDAR_URL})

        assert params["date"] == generate_date_str()
        assert params["full_names"] is False

    @pytest.mark.parametrize("qsp", [None, {}, {"calendar_url": "   "}])
    def test_missing_url(self, qsp):
        with pytest.raises(ValidationError) as excinfo:
            validate_params(qsp)

        assert excinfo.value.error_type == ErrorType.URL_ERROR
        assert excinfo.value.status_code == 400
        assert excinfo.value.message == "Calendar URL is required"

    @pytest.mark.parametrize("url", ["ftp://example.org/cal.ics", "not a url", "https://"])
    def test_invalid_url(self, url):
        with pytest.raises(ValidationError) as excinfo:
            validate_params({"calendar_url": url})

        assert excinfo.value.error_type == ErrorType.URL_ERROR

    def test_invalid_date(self):
        with pytest.raises(ValidationError) as excinfo:
            validate_params({"calendar_url": CALENDAR_URL, "date": "15.01.2024"})

        assert excinfo.value.error_type == ErrorType.VALUE_ERROR
        assert excinfo.value.status_code == 400


class TestParsers:
    def test_parse_date_str(self):
        assert parse_date_str("2024-01-15") == date(2024, 1, 15)

    def test_parse_date_str_invalid(self):
        with pytest.raises(ValidationError):
            parse_date_str("2024-13-01")

    @pytest.mark.parametrize("value", [True, "1", "true", "TRUE", "yes", "on"])
    def test_parse_bool_true(self, value):
        assert parse_bool(value, "flag") is True

    @pytest.mark.parametrize("value", [False, "0", "false", "no", "off", ""])
    def test_parse_bool_false(self, value):
        assert parse_bool(value, "flag") is False

    def test_parse_bool_invalid(self):
        with pytest.raises(ValidationError) as excinfo:
            parse_bool("maybe", "full_names")

        assert "full_names" in excinfo.value.message


def test_generate_response_serializes_error_type():
    response = generate_response(
        400, {"status": "error", "error": {"type": ErrorType.URL_ERROR, "message": "bad"}}
    )

    assert response["statusCode"] == 400
    assert response["headers"]["Content-Type"] == "application/json"
    assert response["body"]["error"]["type"] == "URL_ERROR"


class TestVersion:
    def test_package_version_follows_pyproject(self):
        assert get_version() == "0.1.0"
        assert absendo.__version__ == get_version()

    def test_foreign_pyproject_is_ignored(self, tmp_path):
        (tmp_path / "pyproject.toml").write_text('[project]\nname = "other"\nversion = "9.9.9"\n')
        module = tmp_path / "venv" / "site-packages" / "absendo" / "version.py"

        assert find_pyproject(module) is None

    def test_own_pyproject_is_found(self, tmp_path):
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text('[project]\nname = "absendo-calendar"\nversion = "1.2.3"\n')
        module = tmp_path / "src" / "absendo" / "shared" / "utils" / "version.py"

        assert find_pyproject(module) == pyproject
