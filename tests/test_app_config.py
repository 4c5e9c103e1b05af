import json

from utils.app_config import (
    get_db_folder,
    get_log_level,
    load_config,
    save_config,
    set_db_folder,
)


def test_missing_config_is_empty(tmp_path):
    assert load_config(tmp_path / 'nope.json') == {}
    assert get_db_folder(tmp_path / 'nope.json') is None
    assert get_log_level(tmp_path / 'nope.json') == 'WARNING'


def test_corrupt_config_is_ignored(tmp_path):
    path = tmp_path / 'config.json'
    path.write_text('{broken')
    assert load_config(path) == {}

    path.write_text('[1, 2]')
    assert load_config(path) == {}


def test_save_creates_folder_and_round_trips(tmp_path):
    path = tmp_path / 'sub' / 'config.json'
    save_config({'log_level': 'debug'}, path)
    assert json.loads(path.read_text()) == {'log_level': 'debug'}
    assert get_log_level(path) == 'DEBUG'
    assert not path.with_suffix('.tmp').exists()


def test_invalid_log_level_falls_back(tmp_path):
    path = tmp_path / 'config.json'
    save_config({'log_level': 'chatty'}, path)
    assert get_log_level(path) == 'WARNING'


def test_db_folder_set_and_clear(tmp_path):
    path = tmp_path / 'config.json'
    save_config({'log_level': 'INFO'}, path)

    set_db_folder('/data/budget', path)
    assert get_db_folder(path) == '/data/budget'
    assert load_config(path)['log_level'] == 'INFO'

    set_db_folder(None, path)
    assert get_db_folder(path) is None
