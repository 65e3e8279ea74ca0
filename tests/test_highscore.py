from __future__ import annotations

import json
import logging

from tetris_guideline.highscore import (
    HIGH_SCORE_KEY,
    JsonHighScoreStore,
    MemoryHighScoreStore,
)
from tetris_guideline.session import GameSession, Intent


def test_missing_file_means_no_high_score(tmp_path) -> None:
    store = JsonHighScoreStore(tmp_path / "missing.json")
    assert store.load() == 0


def test_round_trip(tmp_path) -> None:
    path = tmp_path / "scores.json"
    store = JsonHighScoreStore(path)
    store.save(1500)
    assert json.loads(path.read_text()) == {HIGH_SCORE_KEY: 1500}
    assert JsonHighScoreStore(path).load() == 1500


def test_save_keeps_unrelated_keys(tmp_path) -> None:
    path = tmp_path / "scores.json"
    path.write_text(json.dumps({"volume": 3}))
    JsonHighScoreStore(path).save(10)
    assert json.loads(path.read_text()) == {"volume": 3, HIGH_SCORE_KEY: 10}


def test_corrupt_file_is_treated_as_zero(tmp_path, caplog) -> None:
    path = tmp_path / "scores.json"
    path.write_text("{not json")
    with caplog.at_level(logging.WARNING, logger="tetris_guideline.highscore"):
        assert JsonHighScoreStore(path).load() == 0
    assert "unreadable" in caplog.text


def test_non_integer_value_is_treated_as_zero(tmp_path) -> None:
    path = tmp_path / "scores.json"
    path.write_text(json.dumps({HIGH_SCORE_KEY: "lots"}))
    assert JsonHighScoreStore(path).load() == 0


def test_infinite_value_is_treated_as_zero(tmp_path) -> None:
    path = tmp_path / "scores.json"
    path.write_text('{"' + HIGH_SCORE_KEY + '": 1e999}')
    assert JsonHighScoreStore(path).load() == 0
    session = GameSession(store=JsonHighScoreStore(path))
    assert session.high_score == 0


def test_unwritable_path_is_swallowed(tmp_path, caplog) -> None:
    # A directory where the file should be makes the write fail.
    path = tmp_path / "scores.json"
    path.mkdir()
    store = JsonHighScoreStore(path)
    with caplog.at_level(logging.WARNING, logger="tetris_guideline.highscore"):
        store.save(99)
    assert "Could not save" in caplog.text


def test_session_loads_and_saves_high_score() -> None:
    store = MemoryHighScoreStore(30)
    session = GameSession(store=store, deterministic_bag=True)
    assert session.high_score == 30
    session.press(Intent.HARD_DROP)
    assert session.score == 42
    assert session.high_score == 42
    assert store.value == 42


def test_session_saves_on_game_over() -> None:
    store = MemoryHighScoreStore(1000)
    session = GameSession(store=store, deterministic_bag=True)
    session.state.board.set_cell(0, 3, 1)
    session.press(Intent.HARD_DROP)
    assert session.game_over
    assert store.saves == 1
    assert store.value == 1000
