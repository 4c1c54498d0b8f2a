"""Share URL parsing."""

from url_parser import extract_share_data, validate_share_url


def test_extracts_fragment_parameter():
    url = 'http://localhost:8080/#/atziri-temple?t=ABC123'
    assert extract_share_data(url) == 'ABC123'


def test_stops_at_next_parameter():
    url = 'https://example.com/#/atziri-temple?t=XYZ&mode=view'
    assert extract_share_data(url) == 'XYZ'


def test_query_string_outside_fragment_is_ignored():
    assert extract_share_data('https://example.com/?t=ABC') is None


def test_missing_or_invalid():
    assert extract_share_data('https://example.com/#/atziri-temple') is None
    assert extract_share_data('not a url') is None
    assert extract_share_data('') is None
    assert extract_share_data(None) is None


def test_validate_share_url():
    assert validate_share_url('http://localhost:8080/#/atziri-temple?t=ABC')
    assert validate_share_url('https://example.com/#/atziri-temple?t=ABC')
    assert not validate_share_url('https://example.com/#/atziri-temple')
    assert not validate_share_url('javascript:alert(1)#?t=ABC')
    assert not validate_share_url('data:text/html,hi#?t=ABC')
    assert not validate_share_url('not a url')
