def test_create_and_list_sorted_by_name(app):
    assert app.categories.create('Travel', 'Plane', '#123456').success
    assert app.categories.create('  Books ').success

    categories = app.categories.get_all()
    assert [c.name for c in categories] == ['Books', 'Travel']
    assert categories[0].icon is None
    assert categories[1].color == '#123456'


def test_empty_name_is_rejected(app):
    for name in ('', '   ', None):
        result = app.categories.create(name)
        assert not result.success
        assert result.message == 'Category name cannot be empty.'
    assert app.categories.get_all() == []


def test_update(app, food):
    result = app.categories.update(food, 'Groceries', 'Cart', '#00ff00')
    assert result.success
    assert app.categories.get_by_id(food).name == 'Groceries'


def test_update_of_missing_category_fails(app):
    result = app.categories.update('cat-404', 'Ghost')
    assert not result.success
    assert result.message == 'Category not found.'


def test_delete_cascades_to_transactions_and_budget(app, food, transport):
    app.transactions.create('Lunch', 10, '2024-07-02', 'expense', food)
    app.transactions.create('Taxi', 20, '2024-07-02', 'expense', transport)
    app.budgets.add(food, 400, 'monthly')

    assert app.categories.delete(food).success

    assert app.categories.get_by_id(food) is None
    assert [t.description for t in app.transactions.search()] == ['Taxi']
    assert app.budgets.get_all() == []


def test_delete_of_missing_category_succeeds(app):
    assert app.categories.delete('cat-404').success
