from datetime import date
from decimal import Decimal
from pathlib import Path

import pytest

from repurchase.errors import DocumentShapeError
from repurchase.models import Transaction
from repurchase.parser import (
    HtmlTableExtractor,
    JsonYearExtractor,
    parse_html_transactions,
    parse_json_transactions,
)

FIXTURES = Path(__file__).parent / "fixtures"


def _table(*rows: list[str]) -> str:
    body = "".join(
        '<tr class="tableTr">' + "".join(f"<td>{cell}</td>" for cell in row) + "</tr>"
        for row in rows
    )
    return f'<html><body><table id="resultReurchaseId">{body}</table></body></html>'


def test_html_extracts_transactions_in_discovery_order():
    html = (FIXTURES / "sample_table.html").read_text(encoding="utf-8")
    result = HtmlTableExtractor().extract(html)

    assert [t.company for t in result.transactions] == [
        "Acme AB",
        "Nordic Steel Oyj",
        "Fjord Holding A/S",
    ]
    assert result.transactions[0] == Transaction(
        company="Acme AB",
        type="Buy-back",
        date=date(2024, 3, 15),
        price=Decimal("12.50"),
        quantity=Decimal("1000"),
        value=Decimal("12500"),
        comment=None,
    )
    # bad calendar date and blank company are skipped, short rows never count
    assert [outcome.index for outcome in result.skipped] == [4, 8]
    assert all(outcome.reason for outcome in result.skipped)


def test_html_price_cell_is_either_price_or_comment():
    html = (FIXTURES / "sample_table.html").read_text(encoding="utf-8")
    acme, nordic, fjord = parse_html_transactions(html)

    assert acme.price == Decimal("12.50") and acme.comment is None
    assert nordic.price is None and nordic.comment == "See note 1"
    assert nordic.quantity == Decimal("2500")
    assert nordic.value == Decimal("61250.00")
    assert fjord.price == Decimal("98.10") and fjord.comment is None


def test_html_unparsable_amounts_become_invalid_sentinel():
    html = (FIXTURES / "sample_table.html").read_text(encoding="utf-8")
    fjord = parse_html_transactions(html)[-1]

    assert fjord.quantity.is_nan()
    assert fjord.value.is_nan()
    assert not fjord.quantity.is_finite()


def test_html_maps_shuffled_header_by_name():
    html = _table(
        ["Value", "Date", "Company", "Type", "Price", "Quantity"],
        ["12500", "2024-03-15", "Acme AB", "Buy-back", "12,50", "1 000"],
    )
    (transaction,) = parse_html_transactions(html)
    assert transaction.company == "Acme AB"
    assert transaction.type == "Buy-back"
    assert transaction.value == Decimal("12500")
    assert transaction.quantity == Decimal("1000")
    assert transaction.price == Decimal("12.50")
    assert transaction.date == date(2024, 3, 15)


def test_html_rows_before_header_are_skipped_not_raised():
    html = _table(
        ["Acme AB", "Buy-back", "2024-03-15", "1", "1", "1"],
        ["Company", "Type", "Date", "Price", "Quantity", "Value"],
        ["Acme AB", "Buy-back", "2024-03-16", "1", "1", "1"],
    )
    result = HtmlTableExtractor().extract(html)

    assert [t.date for t in result.transactions] == [date(2024, 3, 16)]
    assert len(result.skipped) == 1


def test_html_short_rows_never_produce_transactions():
    html = _table(
        ["Company", "Type", "Date", "Price", "Quantity", "Value"],
        ["Acme AB", "Buy-back", "2024-03-15", "1", "1"],
        ["Acme AB"],
    )
    result = HtmlTableExtractor().extract(html)

    assert result.transactions == []
    assert result.skipped == []


def test_html_only_first_header_is_honoured():
    html = _table(
        ["Company", "Type", "Date", "Price", "Quantity", "Value"],
        ["Type", "Company", "Date", "Price", "Quantity", "Value"],
        ["Acme AB", "Buy-back", "2024-03-15", "1", "1", "1"],
    )
    (transaction,) = parse_html_transactions(html)
    assert transaction.company == "Acme AB"


def test_html_missing_table_is_shape_error():
    with pytest.raises(DocumentShapeError):
        parse_html_transactions("<html><body><table id='other'></table></body></html>")


def test_json_extracts_rows_with_lenient_fallbacks():
    document = (FIXTURES / "sample_year_2024.json").read_text(encoding="utf-8")
    result = JsonYearExtractor().extract(document)

    assert len(result.transactions) == 3
    assert len(result.skipped) == 2

    acme = result.transactions[0]
    assert acme == Transaction(
        company="Acme AB",
        type="Buy-back",
        date=date(2024, 12, 30),
        price=Decimal("12.50"),
        quantity=Decimal("1000"),
        value=Decimal("12500.00"),
        comment=None,
    )

    boreal = result.transactions[1]
    assert boreal.price is None
    assert boreal.quantity == Decimal("0")
    assert boreal.value == Decimal("0")
    assert all(t.comment is None for t in result.transactions)


def test_json_skips_unknown_keys_and_odd_nodes():
    document = """
    {
      "meta": {"rows": []},
      "data": {
        "transactionData": {
          "rowsData": {
            "2024-01-02": {"rows": [42, {"company_name": "Acme AB", "type": "Buy-back",
                                         "date": "2024-01-02", "price": 1.5, "quantity": 10,
                                         "value": "15"}]},
            "2024-01-03": {"rows": "none"},
            "2024-01-04": []
          },
          "extra": {}
        }
      }
    }
    """
    result = JsonYearExtractor().extract(document)

    (transaction,) = result.transactions
    assert transaction.price == Decimal("1.5")
    assert transaction.quantity == Decimal("10")
    assert [outcome.index for outcome in result.skipped] == [0]


def test_json_without_data_node_yields_nothing():
    assert parse_json_transactions('{"status": "ok"}') == []
    assert parse_json_transactions('{"data": {"transactionData": null}}') == []


@pytest.mark.parametrize("document", ["not json", "[1, 2]"])
def test_json_malformed_document_is_shape_error(document):
    with pytest.raises(DocumentShapeError):
        parse_json_transactions(document)


def test_html_column_map_is_rebuilt_for_every_document():
    extractor = HtmlTableExtractor()
    shuffled = _table(
        ["Value", "Date", "Company", "Type", "Price", "Quantity"],
        ["12500", "2024-03-15", "Acme AB", "Buy-back", "12,50", "1 000"],
    )
    standard = _table(
        ["Company", "Type", "Date", "Price", "Quantity", "Value"],
        ["Beta AB", "Sale", "2024-03-16", "5.00", "10", "50"],
    )
    headerless = _table(
        ["12500", "2024-03-15", "Gamma AB", "Buy-back", "12,50", "1 000"],
        ["Delta AB", "Buy-back", "2024-03-17", "1", "1", "1"],
    )

    (first,) = extractor.extract(shuffled).transactions
    assert first.company == "Acme AB"

    (second,) = extractor.extract(standard).transactions
    assert (second.company, second.type, second.value) == ("Beta AB", "Sale", Decimal("50"))

    result = extractor.extract(headerless)
    assert result.transactions == []
    assert len(result.skipped) == 1
