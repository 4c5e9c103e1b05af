import json

from conftest import add_category


def _document(**overrides):
    data = {
        'exportedAt': '2024-07-31T12:00:00+00:00',
        'settings': [{'key': 'selectedCurrency', 'value': '"GBP"'}],
        'categories': [
            {'id': 'c-food', 'name': 'Food', 'icon': 'Utensils', 'color': 'hsl(173, 58%, 39%)'},
            {'id': 'c-fun', 'name': 'Fun', 'icon': None, 'color': None},
        ],
        'transactions': [
            {'id': 't-1', 'date': '2024-07-15', 'description': 'Groceries',
             'amount': 75.5, 'type': 'expense', 'categoryId': 'c-food'},
            {'id': 't-2', 'date': '2024-07-16', 'description': 'Orphan',
             'amount': 10, 'type': 'expense', 'categoryId': 'c-gone'},
            {'date': '2024-07-17', 'description': 'Cinema',
             'amount': 12, 'type': 'expense', 'category_id': 'c-fun'},
        ],
        'budgets': [
            {'id': 'b-1', 'categoryId': 'c-food', 'limitAmount': 400, 'period': 'monthly'},
            {'id': 'b-2', 'categoryId': 'c-gone', 'limitAmount': 50, 'period': 'monthly'},
            {'id': 'b-3', 'categoryId': 'c-food', 'limitAmount': 10, 'period': 'weekly'},
        ],
    }
    data.update(overrides)
    return data


def test_export_shape(app, food):
    app.transactions.create('Lunch', 10, '2024-07-02', 'expense', food)
    app.budgets.add(food, 400, 'monthly')
    app.settings.set_currency('USD')

    data = app.data.export_json()

    assert set(data) == {'exportedAt', 'settings', 'categories', 'transactions', 'budgets'}
    assert data['categories'] == [
        {'id': food, 'name': 'Food', 'icon': None, 'color': 'hsl(173, 58%, 39%)'}
    ]
    [tx] = data['transactions']
    assert tx['categoryId'] == food
    assert tx['amount'] == 10.0
    assert 'category_name' not in tx
    [budget] = data['budgets']
    assert budget['categoryId'] == food
    assert budget['limitAmount'] == 400.0
    assert {'key': 'selectedCurrency', 'value': '"USD"'} in data['settings']


def test_import_replaces_data_and_skips_unknown_categories(app, food):
    app.transactions.create('Old lunch', 10, '2024-07-02', 'expense', food)

    result = app.data.import_json(_document())

    assert result.success
    assert result.value == {'settings': 1, 'categories': 2, 'transactions': 2, 'budgets': 1}
    assert result.count == 6

    assert sorted(c.id for c in app.categories.get_all()) == ['c-food', 'c-fun']
    assert sorted(t.description for t in app.transactions.search()) == ['Cinema', 'Groceries']
    [budget] = app.budgets.get_all()
    assert budget.id == 'b-1'
    assert budget.limit_amount == 400.0
    assert app.settings.get_currency() == 'GBP'


def test_import_generates_missing_ids(app):
    app.data.import_json(_document())
    cinema = app.transactions.search(search_term='Cinema')[0]
    assert len(cinema.id) == 36


def test_missing_sections_are_left_untouched(app, food):
    app.transactions.create('Lunch', 10, '2024-07-02', 'expense', food)

    result = app.data.import_json({'settings': [{'key': 'theme', 'value': '"dark"'}]})

    assert result.success
    assert result.value == {'settings': 1}
    assert [t.description for t in app.transactions.search()] == ['Lunch']


def test_non_object_document_is_rejected(app):
    result = app.data.import_json(['not', 'an', 'object'])
    assert not result.success


def test_failed_import_leaves_store_unchanged(app, food, monkeypatch):
    app.transactions.create('Lunch', 10, '2024-07-02', 'expense', food)

    def broken_import(records, commit=True):
        from models.result import ActionResult
        return ActionResult.fail('Failed to import budgets.')

    monkeypatch.setattr(app.budgets, 'import_all', broken_import)

    result = app.data.import_json(_document())

    assert not result.success
    assert [c.id for c in app.categories.get_all()] == [food]
    assert [t.description for t in app.transactions.search()] == ['Lunch']
    assert app.settings.get_currency() == 'EUR'


def test_file_round_trip(app, food, tmp_path):
    add_category(app, 'cat-9', 'Personal Care')
    app.transactions.create('Haircut', 25, '2024-07-05', 'expense', 'cat-9')
    path = tmp_path / 'export.json'

    exported = app.data.export_to_file(str(path))
    assert exported.success
    # two categories and one transaction, no settings on an unseeded store
    assert exported.count == 3
    assert json.loads(path.read_text())['transactions'][0]['description'] == 'Haircut'

    app.categories.delete('cat-9')
    imported = app.data.import_file(str(path))
    assert imported.success
    assert [t.description for t in app.transactions.search()] == ['Haircut']


def test_import_file_errors(app, tmp_path):
    assert not app.data.import_file(str(tmp_path / 'missing.json')).success

    bad = tmp_path / 'bad.json'
    bad.write_text('{not json')
    result = app.data.import_file(str(bad))
    assert not result.success
    assert result.message == 'Import file is not valid JSON.'


def test_storage_failure_mid_import_rolls_back_everything(app, food):
    app.transactions.create('Lunch', 10, '2024-07-02', 'expense', food)
    app.budgets.add(food, 400, 'monthly')
    conn = app.db.get_connection()
    conn.execute(
        "CREATE TEMP TRIGGER refuse_budgets BEFORE INSERT ON budgets "
        "BEGIN SELECT RAISE(ABORT, 'budget insert refused'); END"
    )

    result = app.data.import_json(_document())

    assert not result.success
    assert result.message == 'Failed to import budgets.'
    assert [c.id for c in app.categories.get_all()] == [food]
    assert [t.description for t in app.transactions.search()] == ['Lunch']
    assert [b.limit_amount for b in app.budgets.get_all()] == [400.0]
    assert app.settings.get_currency() == 'EUR'
