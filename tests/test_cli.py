"""Tests for the command-line interface."""
import json

import pytest
from click.testing import CliRunner

from voice_ledger.cli import cli
from voice_ledger.storage import LedgerStore


@pytest.fixture(autouse=True)
def wide_console(monkeypatch):
    """Keep rich tables on one line per row."""
    monkeypatch.setenv("COLUMNS", "200")


@pytest.fixture
def runner():
    return CliRunner()


def _invoke(runner, ledger_path, *args, **kwargs):
    return runner.invoke(cli, ['--ledger', str(ledger_path), *args], **kwargs)


class TestInterpretCommand:
    """Tests for `voice-ledger interpret`."""

    def test_json_output(self, runner, ledger_path):
        result = _invoke(runner, ledger_path, 'interpret', '--offline', '--json', 'bought coffee 25000')

        assert result.exit_code == 0
        payload = json.loads(result.output)
        assert payload['type'] == 'expense'
        assert payload['amount'] == 25000
        assert payload['category'] == 'Food'
        assert payload['confidence'] == 0.6

    def test_json_output_with_huge_number(self, runner, ledger_path):
        result = _invoke(runner, ledger_path, 'interpret', '--offline', '--json', 'beli kopi ' + "9" * 400)

        assert result.exit_code == 0
        assert "Infinity" not in result.output
        assert json.loads(result.output)['amount'] == 0

    def test_readable_output(self, runner, ledger_path):
        result = _invoke(runner, ledger_path, 'interpret', '--offline', 'terima gaji 5.000.000')

        assert result.exit_code == 0
        assert "income" in result.output
        assert "Rp 5.000.000" in result.output
        assert "Salary" in result.output

    def test_does_not_touch_ledger(self, runner, ledger_path):
        _invoke(runner, ledger_path, 'interpret', '--offline', 'bought coffee 25000')
        assert not ledger_path.exists()


class TestAddCommand:
    """Tests for `voice-ledger add`."""

    def test_add_with_yes(self, runner, ledger_path):
        result = _invoke(runner, ledger_path, 'add', '--offline', '--yes', 'bought coffee 25000')

        assert result.exit_code == 0
        stored = LedgerStore(ledger_path).list_all()
        assert len(stored) == 1
        assert stored[0].category == "Food"
        assert stored[0].amount == 25000

    def test_add_with_utc_offset_keeps_ledger_readable(self, runner, ledger_path):
        result = _invoke(
            runner, ledger_path, 'add', '--offline', '--yes',
            '--date', '2024-05-01 10:00 +0700', 'beli nasi 15000'
        )
        assert result.exit_code == 0
        assert LedgerStore(ledger_path).list_all()[0].date.tzinfo is None

        history = _invoke(runner, ledger_path, 'history')
        assert history.exit_code == 0
        assert "Food" in history.output

        summary = _invoke(runner, ledger_path, 'summary', '--period', 'all')
        assert summary.exit_code == 0
        assert "Rp 15.000" in summary.output

    def test_add_with_overrides(self, runner, ledger_path):
        result = _invoke(
            runner, ledger_path, 'add', '--offline', '--yes',
            '--amount', '350.000', '--category', 'tagihan', '--description', 'Listrik Desember',
            '--date', '2024-12-05',
            'bayar listrik'
        )

        assert result.exit_code == 0
        stored = LedgerStore(ledger_path).list_all()[0]
        assert stored.amount == 350000
        assert stored.category == "Bills"
        assert stored.description == "Listrik Desember"
        assert stored.date.strftime('%Y-%m-%d') == "2024-12-05"

    def test_type_override_resets_foreign_category(self, runner, ledger_path):
        result = _invoke(runner, ledger_path, 'add', '--offline', '--yes', '--type', 'income', 'bought coffee 25000')

        assert result.exit_code == 0
        stored = LedgerStore(ledger_path).list_all()[0]
        assert stored.type.value == "income"
        assert stored.category == "Other"

    def test_rejects_zero_amount(self, runner, ledger_path):
        result = _invoke(runner, ledger_path, 'add', '--offline', '--yes', 'bought coffee')

        assert result.exit_code == 1
        assert "not saved" in result.output
        assert not ledger_path.exists()

    def test_bad_date(self, runner, ledger_path):
        result = _invoke(runner, ledger_path, 'add', '--offline', '--yes', '--date', 'someday', 'beli kopi 25000')

        assert result.exit_code == 1
        assert not ledger_path.exists()

    def test_declined_confirmation(self, runner, ledger_path):
        result = _invoke(runner, ledger_path, 'add', '--offline', 'beli kopi 25000', input="n\n")

        assert result.exit_code == 0
        assert "Cancelled" in result.output
        assert not ledger_path.exists()

    def test_accepted_confirmation(self, runner, ledger_path):
        result = _invoke(runner, ledger_path, 'add', '--offline', 'beli kopi 25000', input="y\n")

        assert result.exit_code == 0
        assert len(LedgerStore(ledger_path).list_all()) == 1


class TestLedgerCommands:
    """Tests for history, summary and delete."""

    @pytest.fixture
    def filled_ledger(self, ledger_path, sample_transactions):
        store = LedgerStore(ledger_path)
        for txn in sample_transactions:
            store.append(txn)
        return store

    def test_history(self, runner, ledger_path, filled_ledger):
        result = _invoke(runner, ledger_path, 'history')

        assert result.exit_code == 0
        assert "Transport" in result.output
        assert "Salary" in result.output

    def test_history_category_filter(self, runner, ledger_path, filled_ledger):
        result = _invoke(runner, ledger_path, 'history', '--category', 'food')

        assert result.exit_code == 0
        assert "Food" in result.output
        assert "Transport" not in result.output

    def test_history_empty(self, runner, ledger_path):
        result = _invoke(runner, ledger_path, 'history')

        assert result.exit_code == 0
        assert "No transactions found" in result.output

    def test_summary(self, runner, ledger_path, filled_ledger):
        result = _invoke(runner, ledger_path, 'summary', '--period', 'all')

        assert result.exit_code == 0
        assert "Rp 6.000.000" in result.output
        assert "Rp 100.000" in result.output
        assert "Rp 5.900.000" in result.output

    def test_history_with_offset_dates_on_disk(self, runner, ledger_path):
        ledger_path.parent.mkdir(parents=True)
        ledger_path.write_text(json.dumps([
            {'id': 'a', 'type': 'expense', 'amount': 15000, 'category': 'Food',
             'description': 'Beli nasi', 'date': '2024-05-01T10:00:00+07:00'},
            {'id': 'b', 'type': 'income', 'amount': 50000, 'category': 'Gift',
             'description': 'Hadiah', 'date': '2024-05-02T09:00:00'},
        ]), encoding='utf-8')

        assert _invoke(runner, ledger_path, 'history').exit_code == 0
        assert _invoke(runner, ledger_path, 'summary', '--period', 'all').exit_code == 0

    def test_delete(self, runner, ledger_path, filled_ledger):
        result = _invoke(runner, ledger_path, 'delete', 't2')

        assert result.exit_code == 0
        assert [t.id for t in filled_ledger.list_all()] == ["t1", "t3", "t4"]

    def test_delete_unknown(self, runner, ledger_path, filled_ledger):
        result = _invoke(runner, ledger_path, 'delete', 'nope')

        assert result.exit_code == 1
        assert len(filled_ledger.list_all()) == 4

    def test_corrupt_ledger(self, runner, ledger_path):
        ledger_path.parent.mkdir(parents=True)
        ledger_path.write_text("garbage", encoding='utf-8')

        result = _invoke(runner, ledger_path, 'history')
        assert result.exit_code == 1
        assert "Error" in result.output


class TestCheckCommand:
    """Tests for `voice-ledger check`."""

    def test_check_runs(self, runner, ledger_path, monkeypatch):
        from voice_ledger.config import settings
        monkeypatch.setattr(settings, "NLU_PROVIDER", "none")

        result = _invoke(runner, ledger_path, 'check')

        assert result.exit_code == 0
        assert "System check complete" in result.output
