from app.utils.formatters import format_currency, location_from_address, excerpt


def test_format_currency_whole_dollars():
    assert format_currency(1250000) == "$1,250,000"
    assert format_currency(999.6) == "$1,000"
    assert format_currency(0) == "$0"


def test_format_currency_negative():
    assert format_currency(-1500) == "-$1,500"


def test_location_is_last_address_part():
    assert location_from_address("12 Main St, Springfield, IL", "x") == "IL"
    assert location_from_address("Austin", "x") == "Austin"


def test_location_default_when_empty():
    assert location_from_address("12 Main St, ", "the target market") == "the target market"


def test_excerpt():
    assert excerpt("short") == "short"
    assert excerpt("a" * 150) == "a" * 100 + "..."
