"""Tests for transaction commands."""

from datetime import datetime, UTC
from decimal import Decimal

from finboard.cli.main import cli


def test_add_transaction_minimal(cli_runner, cli_args):
    """Test adding a transaction with minimal fields."""
    result = cli_runner.invoke(
        cli,
        cli_args + ["add", "--amount", "50.00", "--description", "Lunch", "--date", "2024-01-15"],
    )

    assert result.exit_code == 0
    assert "Created transaction 1" in result.output
    assert "Date: 2024-01-15" in result.output
    assert "Amount: 50.00 (expense)" in result.output
    assert "Category: Other" in result.output


def test_add_income_with_tags(cli_runner, cli_args, temp_db):
    """Test adding an income transaction with tags and notes."""
    result = cli_runner.invoke(
        cli,
        cli_args
        + [
            "add",
            "--amount",
            "$1,200",
            "--description",
            "Bonus",
            "--category",
            "Salary",
            "--type",
            "income",
            "--tags",
            "work, yearly",
            "--notes",
            "Q4",
        ],
    )

    assert result.exit_code == 0
    assert "Tags: work, yearly" in result.output
    txn = temp_db.get_transaction(1)
    assert txn.amount == Decimal("1200")
    assert txn.type == "income"
    assert txn.notes == "Q4"


def test_add_transaction_invalid_amount(cli_runner, cli_args):
    """Test that an unparseable amount is rejected."""
    result = cli_runner.invoke(
        cli, cli_args + ["add", "--amount", "lots", "--description", "Lunch"]
    )

    assert result.exit_code == 1
    assert "Invalid amount format" in result.output


def test_add_transaction_non_positive_amount(cli_runner, cli_args):
    """Test that zero amounts fail validation."""
    result = cli_runner.invoke(cli, cli_args + ["add", "--amount", "0", "--description", "Free"])

    assert result.exit_code == 1
    assert "Amount must be a positive number" in result.output


def test_add_transaction_unknown_category(cli_runner, cli_args):
    """Test that categories are restricted to the known set."""
    result = cli_runner.invoke(
        cli,
        cli_args + ["add", "--amount", "5", "--description", "Trip", "--category", "Travel"],
    )

    assert result.exit_code == 2


def _seed(temp_db):
    temp_db.create_transaction(
        amount=Decimal("20"),
        description="Coffee beans",
        category="Food",
        type="expense",
        created_at=datetime(2024, 1, 10, 8, tzinfo=UTC),
        tags=("home",),
    )
    temp_db.create_transaction(
        amount=Decimal("500"),
        description="Freelance",
        category="Salary",
        type="income",
        created_at=datetime(2024, 1, 31, 18, tzinfo=UTC),
    )
    temp_db.create_transaction(
        amount=Decimal("35"),
        description="Taxi",
        category="Transport",
        type="expense",
        created_at=datetime(2024, 2, 1, 9, tzinfo=UTC),
    )


def test_list_transactions_inclusive_end_date(cli_runner, cli_args, temp_db):
    """Test that the end date includes the whole day."""
    _seed(temp_db)

    result = cli_runner.invoke(
        cli,
        cli_args
        + ["transaction", "list", "--start-date", "2024-01-01", "--end-date", "2024-01-31"],
    )

    assert result.exit_code == 0
    assert "Found 2 transaction(s)" in result.output
    assert "Freelance" in result.output
    assert "Taxi" not in result.output
    assert "Expenses: 20.00 | Income: 500.00 | Count: 2" in result.output


def test_list_transactions_verbose(cli_runner, cli_args, temp_db):
    """Test that verbose output shows tags."""
    _seed(temp_db)

    result = cli_runner.invoke(cli, cli_args + ["transaction", "list", "-v"])

    assert result.exit_code == 0
    assert "Tags: home" in result.output


def test_list_transactions_empty(cli_runner, cli_args):
    """Test listing with no transactions."""
    result = cli_runner.invoke(cli, cli_args + ["transaction", "list"])

    assert result.exit_code == 0
    assert "No transactions found." in result.output


def test_update_transaction(cli_runner, cli_args, temp_db):
    """Test updating a transaction's amount and category."""
    _seed(temp_db)

    result = cli_runner.invoke(
        cli,
        cli_args + ["transaction", "update", "1", "--amount", "25.5", "--category", "Shopping"],
    )

    assert result.exit_code == 0
    assert "Updated transaction 1" in result.output
    # CLI writes through its own connection
    temp_db.disconnect()
    txn = temp_db.get_transaction(1)
    assert txn.amount == Decimal("25.50")
    assert txn.category == "Shopping"


def test_update_missing_transaction(cli_runner, cli_args):
    """Test updating a transaction that doesn't exist."""
    result = cli_runner.invoke(
        cli, cli_args + ["transaction", "update", "9", "--description", "Nothing"]
    )

    assert result.exit_code == 1
    assert "Transaction 9 not found" in result.output


def test_delete_transaction_with_confirmation(cli_runner, cli_args, temp_db):
    """Test deleting after confirming the prompt."""
    _seed(temp_db)

    result = cli_runner.invoke(cli, cli_args + ["transaction", "delete", "2"], input="y\n")

    assert result.exit_code == 0
    assert "Deleted transaction 2" in result.output
    temp_db.disconnect()
    assert temp_db.get_transaction(2) is None


def test_delete_transaction_cancelled(cli_runner, cli_args, temp_db):
    """Test that declining the prompt keeps the transaction."""
    _seed(temp_db)

    result = cli_runner.invoke(cli, cli_args + ["transaction", "delete", "2"], input="n\n")

    assert result.exit_code == 0
    assert "Deletion cancelled." in result.output
    assert temp_db.get_transaction(2) is not None


def test_delete_missing_transaction(cli_runner, cli_args):
    """Test deleting a transaction that doesn't exist."""
    result = cli_runner.invoke(cli, cli_args + ["transaction", "delete", "3", "--yes"])

    assert result.exit_code == 1
    assert "Transaction 3 not found" in result.output


def test_update_transaction_clears_notes(cli_runner, cli_args, temp_db):
    """Test that an empty --notes clears the stored notes."""
    temp_db.create_transaction(
        amount=Decimal("20"),
        description="Dinner",
        category="Food",
        type="expense",
        created_at=datetime(2024, 1, 10, 19, tzinfo=UTC),
        notes="anniversary",
        receipt_path="receipts/dinner.jpg",
    )

    result = cli_runner.invoke(
        cli, cli_args + ["transaction", "update", "1", "--notes", "", "--receipt", ""]
    )

    assert result.exit_code == 0
    temp_db.disconnect()
    txn = temp_db.get_transaction(1)
    assert txn.notes is None
    assert txn.receipt_path is None
