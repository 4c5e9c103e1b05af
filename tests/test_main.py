import json
import sqlite3

import pytest

from database.db_manager import DatabaseManager
from main import main
from utils import app_config


@pytest.fixture
def db_path(tmp_path):
    return str(tmp_path / 'cli.db')


def test_init_seeds_store(db_path, capsys):
    assert main(['--db', db_path, 'init']) == 0
    assert db_path in capsys.readouterr().out

    assert main(['--db', db_path, 'transactions', '--limit', '3']) == 0
    out = capsys.readouterr().out.splitlines()
    assert len(out) == 3
    assert 'New T-shirt' in out[0]


def test_summary_uses_selected_currency(db_path, capsys):
    assert main(['--db', db_path, 'summary', '--date', '2024-07-20']) == 0
    out = capsys.readouterr().out
    assert 'Income:   €4,700.00' in out
    assert 'Food' in out

    assert main(['--db', db_path, 'currency', 'USD']) == 0
    assert main(['--db', db_path, 'summary', '--date', '2024-07-20']) == 0
    assert 'Income:   $4,700.00' in capsys.readouterr().out


def test_add_transaction_and_budget(db_path, capsys):
    assert main(['--db', db_path, '--no-seed', 'init']) == 0
    assert main(['--db', db_path, 'add-budget', 'cat-2', '100']) == 1
    assert 'does not exist' in capsys.readouterr().err

    main(['--db', db_path, 'import', _write_doc(db_path)])
    assert main(['--db', db_path, 'add-transaction', 'Lunch', '12.5', 'c-food',
                 '--date', '2024-07-02']) == 0
    assert main(['--db', db_path, 'add-budget', 'c-food', '100']) == 0
    assert main(['--db', db_path, 'add-budget', 'c-food', '50', '--period', 'weekly']) == 1
    err = capsys.readouterr().err
    assert 'A budget for this category already exists.' in err


def _write_doc(db_path):
    path = db_path + '.json'
    with open(path, 'w', encoding='utf-8') as f:
        json.dump({'categories': [{'id': 'c-food', 'name': 'Food'}]}, f)
    return path


def test_invalid_filter_date_is_an_error(db_path, capsys):
    assert main(['--db', db_path, 'transactions', '--start', 'someday']) == 1
    assert 'Invalid date filter' in capsys.readouterr().err


def test_export_import_and_charts(db_path, tmp_path, capsys):
    export = str(tmp_path / 'out.json')
    assert main(['--db', db_path, 'export', export]) == 0
    assert 'Exported' in capsys.readouterr().out

    other = str(tmp_path / 'other.db')
    assert main(['--db', other, '--no-seed', 'import', export]) == 0
    assert "'transactions': 10" in capsys.readouterr().out

    charts = tmp_path / 'charts'
    assert main(['--db', other, 'charts', str(charts), '--date', '2024-07-20']) == 0
    assert len(list(charts.glob('*.png'))) == 3


def test_store_that_fails_to_open_is_an_error(db_path, capsys, monkeypatch):
    def broken_schema(self, conn):
        raise sqlite3.OperationalError('disk I/O error')

    monkeypatch.setattr(DatabaseManager, '_create_schema', broken_schema)
    assert main(['--db', db_path, 'init']) == 1
    assert 'could not open the store' in capsys.readouterr().err


def test_config_sets_and_resets_db_folder(tmp_path, capsys, monkeypatch):
    monkeypatch.setattr(app_config, 'CONFIG_FILE', tmp_path / 'cfg' / 'config.json')
    folder = tmp_path / 'stores'

    assert main(['config', '--db-folder', str(folder)]) == 0
    assert str(folder) in capsys.readouterr().out
    assert app_config.get_db_folder() == str(folder)

    monkeypatch.chdir(tmp_path)
    assert main(['init']) == 0
    assert (folder / 'budgetbook.db').exists()

    assert main(['config', '--reset-db-folder']) == 0
    assert app_config.get_db_folder() is None
