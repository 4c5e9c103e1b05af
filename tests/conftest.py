"""
Shared pytest fixtures: a throwaway SQLite store per test and the wired services.
"""

import os
import sys

import pytest

# Ensure the project root is on sys.path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from database.db_manager import DatabaseManager
from main import build_app
from models.category import Category


@pytest.fixture
def db(tmp_path):
    """Empty store with the schema created but no sample data."""
    manager = DatabaseManager(str(tmp_path / 'test.db'))
    manager.initialize(seed=False)
    yield manager
    manager.close()


@pytest.fixture
def seeded_db(tmp_path):
    manager = DatabaseManager(str(tmp_path / 'seeded.db'))
    manager.initialize(seed=True)
    yield manager
    manager.close()


@pytest.fixture
def app(db):
    return build_app(db)


@pytest.fixture
def seeded_app(seeded_db):
    return build_app(seeded_db)


def add_category(app, category_id, name, color=None):
    """Insert a category with a fixed id."""
    app.categories._dao.insert(Category(id=category_id, name=name, icon=None, color=color))
    app.db.commit()


@pytest.fixture
def food(app):
    add_category(app, 'cat-2', 'Food', 'hsl(173, 58%, 39%)')
    return 'cat-2'


@pytest.fixture
def transport(app):
    add_category(app, 'cat-3', 'Transportation', '#274754')
    return 'cat-3'
