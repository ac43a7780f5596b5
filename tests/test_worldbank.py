"""
Tests for the World Bank datasource.
"""

from __future__ import annotations

from unittest.mock import Mock, patch

import pandas as pd
import pytest
import requests

from beyond_ols.datasources import worldbank
from beyond_ols.datasources.worldbank import client
from beyond_ols.datasources.worldbank.countries import (
    COUNTRY_COLUMNS,
    CountryInfo,
    countries_to_frame,
    parse_country,
)
from beyond_ols.datasources.worldbank.indicators import IndicatorValue, parse_indicator_value

# =============================================================================
# Fixtures / Sample API Responses
# =============================================================================

VNM_COUNTRY: dict = {
    "id": "VNM",
    "iso2Code": "VN",
    "name": "Viet Nam",
    "region": {"id": "EAS", "iso2code": "Z4", "value": "East Asia & Pacific"},
    "adminregion": {"id": "EAP", "iso2code": "4E", "value": "East Asia & Pacific (excluding high income)"},
    "incomeLevel": {"id": "LMC", "iso2code": "XN", "value": "Lower middle income"},
    "lendingType": {"id": "IBD", "iso2code": "XF", "value": "IBRD"},
    "capitalCity": "Hanoi",
    "longitude": "105.825",
    "latitude": "21.0069",
}

WLD_COUNTRY: dict = {
    "id": "WLD",
    "iso2Code": "1W",
    "name": "World",
    "region": {"id": "NA", "iso2code": "NA", "value": "Aggregates"},
    "adminregion": {"id": "", "iso2code": "", "value": ""},
    "incomeLevel": {"id": "NA", "iso2code": "NA", "value": "Aggregates"},
    "lendingType": {"id": "", "iso2code": "", "value": "Aggregates"},
    "capitalCity": "",
    "longitude": "",
    "latitude": "",
}


def _indicator_record(iso3: str, name: str, year: int, value: float | None, code: str) -> dict:
    return {
        "indicator": {"id": code, "value": "..."},
        "country": {"id": iso3[:2], "value": name},
        "countryiso3code": iso3,
        "date": str(year),
        "value": value,
        "unit": "",
        "obs_status": "",
        "decimal": 0,
    }


def _response(payload: object) -> Mock:
    resp = Mock()
    resp.json.return_value = payload
    resp.raise_for_status = Mock()
    return resp


def _page(records: list[dict], page: int = 1, pages: int = 1) -> list:
    return [{"page": page, "pages": pages, "per_page": client.PER_PAGE, "total": len(records)}, records]


# =============================================================================
# Client
# =============================================================================


class TestGetAllPages:
    """Pagination and error payloads."""

    @patch("beyond_ols.datasources.worldbank.client.session.get")
    def test_single_page(self, mock_get: Mock) -> None:
        mock_get.return_value = _response(_page([VNM_COUNTRY]))

        records = client.get_all_pages("country")

        assert records == [VNM_COUNTRY]
        mock_get.assert_called_once()
        url = mock_get.call_args.args[0]
        params = mock_get.call_args.kwargs["params"]
        assert url == f"{client.WORLD_BANK_API}/country"
        assert params["format"] == "json"
        assert params["page"] == 1

    @patch("beyond_ols.datasources.worldbank.client.session.get")
    def test_follows_pages(self, mock_get: Mock) -> None:
        mock_get.side_effect = [
            _response(_page([VNM_COUNTRY], page=1, pages=2)),
            _response(_page([WLD_COUNTRY], page=2, pages=2)),
        ]

        records = client.get_all_pages("country")

        assert [r["id"] for r in records] == ["VNM", "WLD"]
        assert mock_get.call_count == 2

    @patch("beyond_ols.datasources.worldbank.client.session.get")
    def test_empty_result(self, mock_get: Mock) -> None:
        mock_get.return_value = _response([{"page": 0, "pages": 0, "total": 0}, None])
        assert client.get_all_pages("country/XXX/indicator/SP.POP.TOTL") == []

    @patch("beyond_ols.datasources.worldbank.client.session.get")
    def test_error_payload_raises(self, mock_get: Mock) -> None:
        mock_get.return_value = _response(
            [{"message": [{"id": "120", "key": "Invalid value", "value": "The provided parameter value is not valid"}]}]
        )
        with pytest.raises(worldbank.WorldBankError, match="Invalid value"):
            client.get_all_pages("country/all/indicator/NOPE")

    @patch("beyond_ols.datasources.worldbank.client.session.get")
    def test_malformed_payload_raises(self, mock_get: Mock) -> None:
        mock_get.return_value = _response({"unexpected": True})
        with pytest.raises(worldbank.WorldBankError):
            client.get_all_pages("country")

    @patch("beyond_ols.datasources.worldbank.client.session.get")
    def test_http_error_propagates(self, mock_get: Mock) -> None:
        resp = Mock()
        resp.raise_for_status.side_effect = requests.HTTPError("503 Server Error")
        mock_get.return_value = resp
        with pytest.raises(requests.HTTPError):
            client.get_all_pages("country")

    @patch("beyond_ols.datasources.worldbank.client.session.get")
    def test_html_body_raises(self, mock_get: Mock) -> None:
        resp = Mock()
        resp.raise_for_status = Mock()
        resp.json.side_effect = requests.JSONDecodeError("Expecting value", "<html>", 0)
        resp.text = "<html>Service under maintenance</html>"
        mock_get.return_value = resp
        with pytest.raises(worldbank.WorldBankError, match="not JSON"):
            client.get_all_pages("country")


class TestSession:
    """Retry policy and headers of the World Bank session."""

    def test_retries_rate_limit_and_server_errors(self) -> None:
        adapter = client.session.get_adapter(client.WORLD_BANK_API)
        assert adapter.max_retries.total == 5
        for status in (429, 500, 502, 503, 504):
            assert status in adapter.max_retries.status_forcelist

    def test_honours_retry_after(self) -> None:
        assert client.WORLD_BANK_RETRY.respect_retry_after_header is True

    def test_requests_json(self) -> None:
        assert client.session.headers["Accept"] == "application/json"
        assert "beyond-ols" in client.session.headers["User-Agent"]


# =============================================================================
# Countries
# =============================================================================


class TestParseCountry:
    """Parsing /v2/country records."""

    def test_parses_metadata(self) -> None:
        info = parse_country(VNM_COUNTRY)
        assert info.iso3c == "VNM"
        assert info.iso2c == "VN"
        assert info.country == "Viet Nam"
        assert info.region == "East Asia & Pacific"
        assert info.income == "Lower middle income"
        assert info.lending == "IBRD"
        assert info.capital == "Hanoi"
        assert info.longitude == pytest.approx(105.825)
        assert info.latitude == pytest.approx(21.0069)

    def test_aggregate_blank_fields(self) -> None:
        info = parse_country(WLD_COUNTRY)
        assert info.region == "Aggregates"
        assert info.capital is None
        assert info.longitude is None
        assert info.latitude is None


# =============================================================================
# Indicators
# =============================================================================


class TestParseIndicatorValue:
    """Parsing indicator records."""

    def test_parses_value(self) -> None:
        v = parse_indicator_value(_indicator_record("VNM", "Viet Nam", 2015, 92_677_082.0, "SP.POP.TOTL"))
        assert v == IndicatorValue(iso3c="VNM", country="Viet Nam", year=2015, value=92_677_082.0)

    def test_null_value(self) -> None:
        v = parse_indicator_value(_indicator_record("VNM", "Viet Nam", 1980, None, "NY.GDP.PCAP.KD"))
        assert v is not None
        assert v.value is None

    def test_missing_iso3_skipped(self) -> None:
        assert parse_indicator_value(_indicator_record("", "Some aggregate", 2015, 1.0, "SP.POP.TOTL")) is None


class TestBuildIndicatorTable:
    """Combining indicator series with country metadata."""

    def test_one_row_per_country_year(self) -> None:
        values = {
            "population": [
                IndicatorValue("VNM", "Viet Nam", 2015, 92_677_082.0),
                IndicatorValue("VNM", "Viet Nam", 2016, 93_640_435.0),
            ],
            "gdp_per_cap": [
                IndicatorValue("VNM", "Viet Nam", 2015, 2_578.0),
            ],
        }
        countries = [parse_country(VNM_COUNTRY)]

        table = worldbank.build_indicator_table(values, countries)

        assert len(table) == 2
        assert list(table.columns[:6]) == ["iso3c", "iso2c", "country", "year", "population", "gdp_per_cap"]
        assert table["year"].tolist() == [2015, 2016]
        assert table.loc[0, "gdp_per_cap"] == 2_578.0
        assert pd.isna(table.loc[1, "gdp_per_cap"])
        assert (table["region"] == "East Asia & Pacific").all()

    def test_name_falls_back_to_indicator_record(self) -> None:
        values = {"population": [IndicatorValue("XKX", "Kosovo", 2015, 1_788_196.0)]}
        table = worldbank.build_indicator_table(values, [parse_country(VNM_COUNTRY)])

        assert table.loc[0, "country"] == "Kosovo"
        assert pd.isna(table.loc[0, "region"])

    def test_duplicate_metadata_rows_collapse(self) -> None:
        values = {"population": [IndicatorValue("VNM", "Viet Nam", 2015, 1.0)]}
        countries = [parse_country(VNM_COUNTRY), parse_country(VNM_COUNTRY)]
        table = worldbank.build_indicator_table(values, countries)
        assert len(table) == 1

    def test_sorted_by_code_then_year(self) -> None:
        values = {
            "population": [
                IndicatorValue("WLD", "World", 2016, 2.0),
                IndicatorValue("VNM", "Viet Nam", 2016, 1.0),
                IndicatorValue("VNM", "Viet Nam", 2015, 1.0),
            ]
        }
        countries = [parse_country(VNM_COUNTRY), parse_country(WLD_COUNTRY)]
        table = worldbank.build_indicator_table(values, countries)
        assert list(zip(table["iso3c"], table["year"], strict=True)) == [
            ("VNM", 2015),
            ("VNM", 2016),
            ("WLD", 2016),
        ]


class TestFetchIndicators:
    """End-to-end fetch with a mocked session."""

    @patch("beyond_ols.datasources.worldbank.client.session.get")
    def test_fetch_indicators(self, mock_get: Mock) -> None:
        def fake_get(url: str, params: dict) -> Mock:
            if url.endswith("/country"):
                return _response(_page([VNM_COUNTRY, WLD_COUNTRY]))
            code = url.rsplit("/", 1)[-1]
            value = 92_677_082.0 if code == "SP.POP.TOTL" else 2_578.0
            return _response(
                _page(
                    [
                        _indicator_record("VNM", "Viet Nam", 2015, value, code),
                        _indicator_record("", "Unkeyed aggregate", 2015, value, code),
                    ]
                )
            )

        mock_get.side_effect = fake_get

        table = worldbank.fetch_indicators(start=2015, end=2015)

        assert len(table) == 1
        row = table.iloc[0]
        assert row["iso3c"] == "VNM"
        assert row["population"] == 92_677_082.0
        assert row["gdp_per_cap"] == 2_578.0
        assert row["income"] == "Lower middle income"

        indicator_calls = [c for c in mock_get.call_args_list if "/indicator/" in c.args[0]]
        assert {c.args[0].rsplit("/", 1)[-1] for c in indicator_calls} == {
            "SP.POP.TOTL",
            "NY.GDP.PCAP.KD",
        }
        assert all(c.kwargs["params"]["date"] == "2015:2015" for c in indicator_calls)

    def test_country_frame_one_row_per_code(self) -> None:
        info = CountryInfo("VNM", "VN", "Viet Nam", "East Asia & Pacific", "Hanoi", 105.8, 21.0, None, None)
        frame = countries_to_frame([info, info])
        assert len(frame) == 1
        assert list(frame.columns) == COUNTRY_COLUMNS
