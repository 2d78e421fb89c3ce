import json

import pytest

from spellborn_launcher.models import Game, Latest, ModelError, Update, parse_updates


def test_latest_from_dict_reads_all_fields():
    latest = Latest.from_dict(
        {"version": "1.0.0", "file": "game.zip", "checksum": "abc123", "server": "test-server"}
    )
    assert latest == Latest(version="1.0.0", file="game.zip", checksum="abc123", server="test-server")


def test_latest_round_trip_through_json():
    latest = Latest(version="1.0.0", file="game.zip", checksum="abc123", server="test-server")
    assert Latest.from_dict(json.loads(json.dumps(latest.to_dict()))) == latest


def test_latest_missing_keys_default_to_empty():
    assert Latest.from_dict({"version": "1.0.0"}) == Latest(version="1.0.0")


def test_latest_rejects_non_object():
    with pytest.raises(ModelError):
        Latest.from_dict(["1.0.0"])


def test_update_to_dict_uses_wire_names():
    update = Update(applies_to="1.0.0", version="1.0.1", file="patch.zip", enabled=True)
    data = update.to_dict()
    assert data["applies_to"] == "1.0.0"
    assert data["enabled"] is True
    assert set(data) == {"applies_to", "version", "file", "patchnotes", "checksum", "server", "enabled"}


def test_update_round_trip():
    update = Update("1.0.0", "1.0.1", "patch.zip", "fixes", "abc123", "test-server", True)
    assert Update.from_dict(update.to_dict()) == update


def test_update_rejects_wrong_type():
    with pytest.raises(ModelError):
        Update.from_dict({"enabled": "yes"})


def test_game_defaults_when_flags_absent():
    game = Game.from_dict({"path": "test/path", "version": "1.0.0"})
    assert game.keep_downloads is False
    assert game.no_launch is False
    assert game.version == "1.0.0"


def test_game_round_trip_with_flags():
    game = Game(path="test/path", version="1.0.0", keep_downloads=True, no_launch=True)
    assert Game.from_dict(json.loads(json.dumps(game.to_dict()))) == game


def test_game_null_values_are_zero_values():
    assert Game.from_dict({"version": None, "keep_downloads": None}) == Game()


def test_game_from_none_is_empty():
    assert Game.from_dict(None) == Game()


def test_game_rejects_numeric_version():
    with pytest.raises(ModelError):
        Game.from_dict({"version": 1})


def test_parse_updates_unwraps_entries_in_order():
    document = [
        {"update": {"applies_to": "1.0.0", "version": "1.0.1", "file": "a.zip"}},
        {"update": {"applies_to": "1.0.1", "version": "1.0.2", "file": "b.zip"}},
    ]
    updates = parse_updates(document)
    assert [u.version for u in updates] == ["1.0.1", "1.0.2"]
    assert updates[0].applies_to == "1.0.0"


def test_parse_updates_entry_without_update_key_is_empty():
    assert parse_updates([{}]) == [Update()]


def test_parse_updates_none_is_empty_list():
    assert parse_updates(None) == []


def test_parse_updates_rejects_object():
    with pytest.raises(ModelError):
        parse_updates({"update": {}})