"""Tests for tax code, invoice and bill commands."""

from decimal import Decimal

import click
import pytest

from ledgerkit.cli.commands.tax import format_percent, parse_line, resolve_tax_code
from ledgerkit.cli.main import cli
from ledgerkit.domain.errors import NotFoundError


def test_format_percent():
    assert format_percent(Decimal("0.2")) == "20%"
    assert format_percent(Decimal("0.050000")) == "5%"
    assert format_percent(Decimal("0.075")) == "7.5%"
    assert format_percent(Decimal("0")) == "0%"


def test_resolve_tax_code(tax_service):
    code_id = tax_service.create_tax_code("VAT20", Decimal("0.2"))

    assert resolve_tax_code(tax_service, "VAT20") == code_id
    assert resolve_tax_code(tax_service, str(code_id)) == code_id
    with pytest.raises(NotFoundError):
        resolve_tax_code(tax_service, "GST")


def test_parse_line(tax_service):
    code_id = tax_service.create_tax_code("VAT20", Decimal("0.2"))

    line = parse_line(tax_service, "Widgets; 2 ; $25.00 ;VAT20")
    assert line.description == "Widgets"
    assert line.quantity == Decimal("2")
    assert line.unit_price == Decimal("25.00")
    assert line.tax_code_id == code_id

    untaxed = parse_line(tax_service, ";1;10")
    assert untaxed.description is None
    assert untaxed.tax_code_id is None


@pytest.mark.parametrize("spec", ["Widgets;2", "Widgets;two;25", "a;1;2;3;4"])
def test_parse_line_rejects_malformed(tax_service, spec):
    with pytest.raises(click.BadParameter):
        parse_line(tax_service, spec)


def test_tax_code_create_and_list(cli_runner, temp_db):
    result = cli_runner.invoke(
        cli,
        ["--db-path", temp_db.database_path, "tax-code", "create", "UAE VAT", "5%",
         "--jurisdiction", "UAE"],
    )
    assert result.exit_code == 0
    assert "Created tax code 'UAE VAT' (ID: 1) at 5%" in result.output

    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "tax-code", "list"])
    assert result.exit_code == 0
    assert "UAE VAT" in result.output
    assert "5%" in result.output
    assert "UAE" in result.output


def test_tax_code_list_empty(cli_runner, temp_db):
    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "tax-code", "list"])
    assert "No tax codes found" in result.output


def test_tax_code_invalid_rate(cli_runner, temp_db):
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "tax-code", "create", "BAD", "150%"]
    )
    assert result.exit_code == 1
    assert "between 0 and 1" in result.output

    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "tax-code", "create", "BAD", "lots"]
    )
    assert result.exit_code == 1
    assert "Invalid rate" in result.output


def test_invoice_add_and_list(cli_runner, temp_db, tax_service):
    tax_service.create_tax_code("VAT20", Decimal("0.2"))

    result = cli_runner.invoke(
        cli,
        ["--db-path", temp_db.database_path, "invoice", "add", "INV-001", "--party", "Acme",
         "--date", "2024-01-15", "--line", "Widgets;2;25.00;VAT20", "--line", "Setup;1;50"],
    )
    assert result.exit_code == 0
    assert "Created invoice 'INV-001'" in result.output
    assert "Lines: 2, total before tax 100.00" in result.output

    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "invoice", "list"])
    assert "INV-001" in result.output
    assert "Acme" in result.output

    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "bill", "list"])
    assert "No bills found" in result.output


def test_bill_with_unknown_tax_code(cli_runner, temp_db):
    result = cli_runner.invoke(
        cli,
        ["--db-path", temp_db.database_path, "bill", "add", "B-1", "--party", "Vendor",
         "--date", "2024-01-15", "--line", "Paper;1;10;GST"],
    )

    assert result.exit_code == 1
    assert "Tax code 'GST' not found" in result.output


def test_duplicate_bill_number(cli_runner, temp_db):
    args = ["--db-path", temp_db.database_path, "bill", "add", "B-1", "--party", "Vendor",
            "--date", "2024-01-15", "--line", "Paper;1;10"]
    assert cli_runner.invoke(cli, args).exit_code == 0

    result = cli_runner.invoke(cli, args)
    assert result.exit_code == 1
    assert "Bill 'B-1' already exists" in result.output
