"""Tests for reading and filtering package-results files."""

import json

import pytest

from asmigrate.core.errors import EmptyInputError, ParseError
from asmigrate.core.loader import load_sites, read_package_results

from fakes import write_package_results


def test_loads_sites_in_file_order(tmp_path):
    path = write_package_results(
        tmp_path / "results.json",
        [
            {"SiteName": "b", "SitePackagePath": "b.zip"},
            {"SiteName": "a", "SitePackagePath": "a.zip"},
        ],
    )
    sites = load_sites(path)
    assert [s.site_name for s in sites] == ["b", "a"]
    assert sites[0].site_package_path == "b.zip"


def test_sites_without_package_are_dropped(tmp_path):
    path = write_package_results(
        tmp_path / "results.json",
        [
            {"SiteName": "ok", "SitePackagePath": "ok.zip"},
            {"SiteName": "failed", "SitePackagePath": None},
            {"SiteName": "missing"},
            {"SiteName": "blank", "SitePackagePath": "   "},
        ],
    )
    sites = load_sites(path)
    assert [s.site_name for s in sites] == ["ok"]


def test_extra_fields_ignored(tmp_path):
    path = write_package_results(
        tmp_path / "results.json",
        [
            {
                "SiteName": "ok",
                "SitePackagePath": "ok.zip",
                "Timestamp": "2024-05-01",
                "PackagingErrors": [],
            }
        ],
    )
    assert len(load_sites(path)) == 1


def test_single_object_accepted(tmp_path):
    path = write_package_results(
        tmp_path / "results.json", {"SiteName": "only", "SitePackagePath": "only.zip"}
    )
    assert [s.site_name for s in load_sites(path)] == ["only"]


def test_byte_order_mark_accepted(tmp_path):
    path = tmp_path / "results.json"
    payload = json.dumps([{"SiteName": "bom", "SitePackagePath": "bom.zip"}])
    path.write_bytes(b"\xef\xbb\xbf" + payload.encode("utf-8"))
    assert [s.site_name for s in load_sites(path)] == ["bom"]


def test_all_null_paths_is_empty_input(tmp_path):
    path = write_package_results(
        tmp_path / "results.json",
        [{"SiteName": "a", "SitePackagePath": None}],
    )
    with pytest.raises(EmptyInputError):
        load_sites(path)


def test_empty_list_is_empty_input(tmp_path):
    path = write_package_results(tmp_path / "results.json", [])
    with pytest.raises(EmptyInputError):
        load_sites(path)


def test_empty_input_is_not_a_parse_error(tmp_path):
    path = write_package_results(tmp_path / "results.json", [])
    with pytest.raises(EmptyInputError) as exc_info:
        load_sites(path)
    assert not isinstance(exc_info.value, ParseError)


def test_missing_file(tmp_path):
    with pytest.raises(ParseError, match="not found"):
        load_sites(tmp_path / "nope.json")


def test_invalid_json(tmp_path):
    path = tmp_path / "results.json"
    path.write_text("[{not json", encoding="utf-8")
    with pytest.raises(ParseError, match="not valid JSON"):
        load_sites(path)


def test_wrong_top_level_type(tmp_path):
    path = write_package_results(tmp_path / "results.json", "just a string")
    with pytest.raises(ParseError, match="list of site records"):
        load_sites(path)


def test_record_without_site_name(tmp_path):
    path = write_package_results(
        tmp_path / "results.json", [{"SitePackagePath": "a.zip"}]
    )
    with pytest.raises(ParseError, match="Record 0"):
        read_package_results(path)


def test_non_object_record(tmp_path):
    path = write_package_results(tmp_path / "results.json", [["a", "b"]])
    with pytest.raises(ParseError, match="not an object"):
        read_package_results(path)
