import json

import pytest

from catime.update_checker import (
    ReleaseInfo,
    UpdateCheck,
    UpdateError,
    check_for_update,
    compare_versions,
    fetch_latest_release,
    parse_latest_release,
)


@pytest.mark.parametrize(
    "newer, older",
    [("1.2.4", "1.2.3"), ("1.3.0", "1.2.9"), ("2.0.0", "1.9.9"), ("1.10.0", "1.9.0")],
)
def test_compare_versions_ordering(newer, older):
    assert compare_versions(newer, older) == 1
    assert compare_versions(older, newer) == -1


def test_compare_versions_equal():
    assert compare_versions("1.2.3", "1.2.3") == 0


def test_compare_versions_missing_parts_are_zero():
    assert compare_versions("1.2", "1.2.0") == 0
    assert compare_versions("3", "3.0.0") == 0


def _release_json(tag, url):
    return json.dumps(
        {
            "tag_name": tag,
            "name": "release",
            "assets": [{"browser_download_url": url}],
        }
    )


def test_parse_latest_release_strips_v_prefix():
    url = "https://downloads.example.com/app.exe"
    info = parse_latest_release(_release_json("v1.4.2", url))
    assert info == ReleaseInfo(version="1.4.2", download_url=url)


def test_parse_latest_release_uppercase_prefix():
    info = parse_latest_release(_release_json("V2.0.1", "https://example.com/a"))
    assert info.version == "2.0.1"


def test_parse_latest_release_without_prefix():
    info = parse_latest_release(_release_json("1.0.0", "https://example.com/b"))
    assert info.version == "1.0.0"


def test_parse_latest_release_missing_tag():
    with pytest.raises(UpdateError):
        parse_latest_release('{"browser_download_url": "https://example.com/x"}')


def test_parse_latest_release_missing_url():
    with pytest.raises(UpdateError):
        parse_latest_release('{"tag_name": "v1.0.0"}')


def test_parse_latest_release_unterminated_value():
    with pytest.raises(UpdateError):
        parse_latest_release('{"tag_name": "v1.0.0')


def test_parse_latest_release_truncates_long_values():
    long_tag = "9" * 50
    long_url = "https://example.com/" + "a" * 400
    info = parse_latest_release(_release_json(long_tag, long_url))
    assert len(info.version) == 31
    assert len(info.download_url) == 255
    assert long_url.startswith(info.download_url)


def test_fetch_latest_release_from_file(tmp_path):
    url = "https://example.com/file.zip"
    doc = tmp_path / "latest.json"
    doc.write_text(_release_json("v3.1.0", url), encoding="utf-8")
    info = fetch_latest_release(doc.as_uri(), timeout=5)
    assert info == ReleaseInfo("3.1.0", url)


def test_fetch_latest_release_unreachable(tmp_path):
    missing = tmp_path / "missing.json"
    with pytest.raises(UpdateError):
        fetch_latest_release(missing.as_uri(), timeout=5)


def test_check_for_update_newer_available():
    url = "https://example.com/new.exe"
    result = check_for_update("1.0.0", lambda: ReleaseInfo("1.1.0", url))
    assert result == UpdateCheck("1.0.0", "1.1.0", url)
    assert result.update_available is True


def test_check_for_update_up_to_date():
    result = check_for_update("1.1.0", lambda: ReleaseInfo("1.1.0", "u"))
    assert result.update_available is False


def test_check_for_update_older_remote():
    result = check_for_update("2.0.0", lambda: ReleaseInfo("1.9.9", "u"))
    assert result.update_available is False


def test_check_for_update_propagates_errors():
    def failing():
        raise UpdateError("offline")

    with pytest.raises(UpdateError):
        check_for_update("1.0.0", failing)