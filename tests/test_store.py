"""Tests for session serialization and the session stores."""

import json

import pytest

from c4service.board import Board, Token
from c4service.errors import SessionLoadError, UnknownSessionError
from c4service.store import FileSessionStore, MemorySessionStore, Session
from c4service.strategy import Strategy


def make_session() -> Session:
    board = Board()
    board.apply_move(3, Token.PLAYER)
    board.apply_move(3, Token.OPPONENT)
    return Session(strategy=Strategy.SMART, board=board)


class TestSessionRecord:
    def test_record_layout(self):
        record = make_session().to_dict()
        assert set(record) == {"strategy", "grid", "winningCoords"}
        assert record["strategy"] == "Smart"
        assert record["grid"][5][3] == "1"
        assert record["grid"][4][3] == "2"

    def test_strategy_name_is_case_insensitive(self):
        record = make_session().to_dict()
        record["strategy"] = "random"
        assert Session.from_dict(record).strategy is Strategy.RANDOM

    @pytest.mark.parametrize(
        "record",
        [
            {"grid": []},
            {"strategy": "Smart"},
            {"strategy": "Clever", "grid": Board().to_snapshot()["grid"]},
            {"strategy": "Smart", "grid": Board().to_snapshot()["grid"], "winningCoords": ["a", "b"]},
            ["not", "a", "dict"],
        ],
    )
    def test_bad_records(self, record):
        with pytest.raises(SessionLoadError):
            Session.from_dict(record)

    def test_default_board_is_fresh(self):
        first = Session(strategy=Strategy.RANDOM)
        second = Session(strategy=Strategy.RANDOM)
        assert first.board is not second.board


class TestMemoryStore:
    def test_save_and_load(self):
        store = MemorySessionStore()
        store.save("abc", make_session())
        assert store.exists("abc")
        loaded = store.load("abc")
        assert loaded.strategy is Strategy.SMART
        assert loaded.board.token_count == 2

    def test_loads_are_independent(self):
        store = MemorySessionStore()
        store.save("abc", make_session())
        store.load("abc").board.apply_move(0, Token.PLAYER)
        assert store.load("abc").board.token_count == 2

    def test_unknown(self):
        store = MemorySessionStore()
        assert not store.exists("nope")
        with pytest.raises(UnknownSessionError):
            store.load("nope")

    def test_delete(self):
        store = MemorySessionStore()
        store.save("abc", make_session())
        store.delete("abc")
        store.delete("abc")
        assert not store.exists("abc")


class TestFileStore:
    def test_save_writes_json_file(self, tmp_path):
        store = FileSessionStore(tmp_path / "games")
        store.save("a1b2", make_session())
        path = tmp_path / "games" / "a1b2.txt"
        assert path.is_file()
        data = json.loads(path.read_text())
        assert data["strategy"] == "Smart"
        assert data["winningCoords"] == []

    def test_round_trip(self, tmp_path):
        store = FileSessionStore(tmp_path)
        store.save("a1b2", make_session())
        loaded = store.load("a1b2")
        assert loaded.board.to_snapshot() == make_session().board.to_snapshot()

    def test_delete(self, tmp_path):
        store = FileSessionStore(tmp_path)
        store.save("a1b2", make_session())
        store.delete("a1b2")
        assert not (tmp_path / "a1b2.txt").exists()
        assert not store.exists("a1b2")

    def test_unknown(self, tmp_path):
        store = FileSessionStore(tmp_path)
        with pytest.raises(UnknownSessionError):
            store.load("missing")

    def test_path_like_ids_are_unknown(self, tmp_path):
        store = FileSessionStore(tmp_path)
        assert not store.exists("../etc/passwd")
        with pytest.raises(UnknownSessionError):
            store.load("../secret")

    def test_corrupt_file(self, tmp_path):
        (tmp_path / "bad1.txt").write_text("{not json")
        store = FileSessionStore(tmp_path)
        assert store.exists("bad1")
        with pytest.raises(SessionLoadError):
            store.load("bad1")
