# parser tests run against a local html fixture so they never hit the network

from pathlib import Path
import pytest
from lifeexp.errors import NumericParseError, ParseError, RowShapeError, TableNotFound
from lifeexp.models import COMMON_KEY, CountryStatistic, compute_common
from lifeexp.parser import parse_table

FIXTURE = Path(__file__).parent / "data" / "life_expectancy.html"


def _page(rows: str, leading_tables: int = 2) -> str:
    filler = '<table class="wikitable"><tbody></tbody></table>' * leading_tables
    return f'<html><body>{filler}<table class="wikitable"><tbody>{rows}</tbody></table></body></html>'


def test_parse_fixture_page():
    table = parse_table(FIXTURE.read_text())

    # header row and the unlinked "World" row are skipped
    assert set(table) == {"France", "Japan"}
    assert table["France"] == CountryStatistic(81.5, 78.7, 84.3)
    assert table["Japan"] == CountryStatistic(84.6, 81.6, 87.6)
    assert COMMON_KEY not in table


def test_parse_then_aggregate_end_to_end():
    table = parse_table(FIXTURE.read_text())
    table[COMMON_KEY] = compute_common(table)

    assert len(table) == 3
    assert table[COMMON_KEY].all == pytest.approx(83.05)
    assert table[COMMON_KEY].male == pytest.approx(80.15)
    assert table[COMMON_KEY].female == pytest.approx(85.95)


def test_row_without_link_is_skipped_and_later_rows_parsed():
    html = _page(
        "<tr><td>Unlinked</td><td>1</td><td>2</td><td>3</td></tr>"
        '<tr><td><a href="#">Peru</a></td><td>77.7</td><td>75.1</td><td>80.4</td></tr>'
    )
    assert parse_table(html) == {"Peru": CountryStatistic(77.7, 75.1, 80.4)}


def test_missing_table_raises():
    with pytest.raises(TableNotFound):
        parse_table(_page("", leading_tables=1), table_index=3)


def test_table_index_and_class_are_configurable():
    html = (
        '<table class="stats"><tbody>'
        '<tr><td><a href="#">Chile</a></td><td>80.2</td><td>77.6</td><td>82.7</td></tr>'
        "</tbody></table>"
    )
    assert parse_table(html, table_class="stats", table_index=0) == {
        "Chile": CountryStatistic(80.2, 77.6, 82.7)
    }


def test_short_row_skipped_by_default():
    html = _page(
        '<tr><td><a href="#">Nauru</a></td><td>63.9</td></tr>'
        '<tr><td><a href="#">Fiji</a></td><td>67.1</td><td>65.2</td><td>69.2</td></tr>'
    )
    assert set(parse_table(html)) == {"Fiji"}


def test_short_row_fails_in_strict_mode():
    html = _page('<tr><td><a href="#">Nauru</a></td><td>63.9</td></tr>')
    with pytest.raises(RowShapeError):
        parse_table(html, strict=True)


@pytest.mark.parametrize("value", ["n/a", "", "inf", "-4.0", "8_1", "\u0668\u0661", "1e999"])
def test_bad_number_fails_whole_parse(value):
    html = _page(f'<tr><td><a href="#">Tonga</a></td><td>{value}</td><td>69.0</td><td>73.0</td></tr>')
    with pytest.raises(NumericParseError):
        parse_table(html)


def test_duplicate_country_keeps_last_row():
    html = _page(
        '<tr><td><a href="#">Mali</a></td><td>1</td><td>1</td><td>1</td></tr>'
        '<tr><td><a href="#">Mali</a></td><td>60.4</td><td>58.9</td><td>61.9</td></tr>'
    )
    assert parse_table(html) == {"Mali": CountryStatistic(60.4, 58.9, 61.9)}


def test_common_row_on_page_is_dropped():
    html = _page('<tr><td><a href="#">Common</a></td><td>1</td><td>1</td><td>1</td></tr>')
    assert parse_table(html) == {}


def test_empty_body_yields_empty_table():
    assert parse_table(_page("")) == {}


def test_rejected_markup_is_a_parse_error():
    with pytest.raises(ParseError):
        parse_table("<![]>")
