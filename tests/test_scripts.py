"""Tests for the tally and deal scripts."""

import io
import json
import logging

import numpy as np
import pytest
from rich.console import Console

from poker_hands.engine.showdown import Outcome, ShowdownResult, TallyStats, parse_record
from poker_hands.scripts.deal import deal_record, deal_records
from poker_hands.scripts.deal import main as deal_main
from poker_hands.scripts.tally import (
    DEFAULT_INPUT,
    ResultsWriteError,
    TallyConfig,
    build_summary_table,
    describe_result,
    parse_args,
    run,
)
from poker_hands.scripts.tally import main as tally_main


RECORDS = [
    "5H 5C 6S 7S KD 2C 3S 8S 8D TD",
    "5D 8C 9S JS AC 2C 5C 7D 8S QH",
    "KH KD 4C 4S 9H KH KD 4C 4S 9H",
    "5H 5C 6S 7S KD 2C 3S 8S 8D 1D",
]


def make_console() -> tuple[Console, io.StringIO]:
    buffer = io.StringIO()
    return Console(file=buffer, width=200, color_system=None), buffer


@pytest.fixture
def record_file(tmp_path):
    path = tmp_path / "poker_hands.txt"
    path.write_text("\n".join(RECORDS) + "\n", encoding="utf-8")
    return path


class TestTallyConfig:
    """Tests for argument parsing."""

    def test_defaults(self):
        config = parse_args([])
        assert config == TallyConfig()
        assert config.input_path == DEFAULT_INPUT

    def test_flags(self):
        config = parse_args(["hands.txt", "--fail-fast", "-q", "--json", "out.json"])
        assert config.input_path == "hands.txt"
        assert config.fail_fast
        assert config.quiet
        assert not config.verbose
        assert config.json_path == "out.json"


class TestDescribeResult:
    """Tests for per-record report lines."""

    def test_player_one(self):
        stats = TallyStats(player_one_wins=4)
        result = ShowdownResult(line_number=1, line="", outcome=Outcome.PLAYER_ONE)
        assert describe_result(result, stats) == "Player 1 wins (Total: 4)"

    def test_player_two(self):
        stats = TallyStats(player_two_wins=2)
        result = ShowdownResult(line_number=1, line="", outcome=Outcome.PLAYER_TWO)
        assert describe_result(result, stats) == "Player 2 wins (Total: 2)"

    def test_tie_and_error_differ(self):
        stats = TallyStats()
        tie = ShowdownResult(line_number=3, line="x", outcome=Outcome.TIE)
        error = ShowdownResult(line_number=3, line="x", outcome=Outcome.ERROR, error="bad")
        assert describe_result(tie, stats) == "Tie: x"
        assert describe_result(error, stats) == "Error on line 3: bad"


class TestTallyRun:
    """Tests for running a tally end to end."""

    def test_run_prints_progress_and_summary(self, record_file):
        console, buffer = make_console()
        stats = run(TallyConfig(input_path=str(record_file)), console=console)

        output = buffer.getvalue()
        assert f"Processing: {RECORDS[0]}" in output
        assert "Player 2 wins (Total: 1)" in output
        assert "Player 1 wins (Total: 1)" in output
        assert f"Tie: {RECORDS[2]}" in output
        assert "Error on line 4" in output
        assert "Player 1 won 1 times" in output
        assert stats.ties == 1
        assert stats.errors == 1

    def test_run_quiet(self, record_file):
        console, buffer = make_console()
        run(TallyConfig(input_path=str(record_file), quiet=True), console=console)
        output = buffer.getvalue()
        assert "Processing:" not in output
        assert "Final Results" in output

    def test_run_writes_json(self, record_file, tmp_path):
        json_path = tmp_path / "results.json"
        console, _ = make_console()
        run(
            TallyConfig(input_path=str(record_file), quiet=True, json_path=str(json_path)),
            console=console,
        )
        data = json.loads(json_path.read_text(encoding="utf-8"))
        assert data["results"]["player_one_wins"] == 1
        assert data["results"]["player_two_wins"] == 1
        assert data["results"]["ties"] == 1
        assert data["results"]["errors"] == 1
        assert data["config"]["input_path"] == str(record_file)

    def test_summary_table_rows(self, record_file):
        console, buffer = make_console()
        stats = run(TallyConfig(input_path=str(record_file), quiet=True), console=console)
        table = build_summary_table(stats)
        assert len(table.columns) == 3
        console.print(table)
        assert "Two Pair" in buffer.getvalue()

    def test_main_success(self, record_file):
        assert tally_main([str(record_file), "--quiet"]) == 0

    def test_main_missing_file(self, tmp_path, capsys):
        assert tally_main([str(tmp_path / "missing.txt")]) == 1
        assert "Failed to open file" in capsys.readouterr().err

    def test_main_undecodable_record(self, tmp_path, capsys):
        path = tmp_path / "hands.txt"
        path.write_bytes(
            RECORDS[0].encode("utf-8") + b"\n5H 5C 6S 7S KD 2C 3S 8S 8D \xffD\n"
        )
        assert tally_main([str(path), "--quiet"]) == 0
        assert "Errors: 1 (lines 2)" in capsys.readouterr().out

    def test_main_json_write_failure(self, record_file, tmp_path, capsys):
        json_path = tmp_path / "missing_dir" / "results.json"
        assert tally_main([str(record_file), "--quiet", "--json", str(json_path)]) == 1
        err = capsys.readouterr().err
        assert "Failed to write results" in err
        assert "Failed to open file" not in err

    def test_run_json_write_failure_raises(self, record_file, tmp_path):
        console, _ = make_console()
        config = TallyConfig(
            input_path=str(record_file),
            quiet=True,
            json_path=str(tmp_path / "missing_dir" / "results.json"),
        )
        with pytest.raises(ResultsWriteError):
            run(config, console=console)

    def test_main_fail_fast(self, record_file, capsys):
        assert tally_main([str(record_file), "--fail-fast", "--quiet"]) == 1
        assert "line 4" in capsys.readouterr().err


class TestDeal:
    """Tests for the record dealer."""

    def test_deal_records_parse(self):
        for line in deal_records(50, seed=7):
            hand_one, hand_two = parse_record(line)
            assert len(set(hand_one) | set(hand_two)) == 10

    def test_deal_deterministic_with_seed(self):
        assert deal_records(20, seed=123) == deal_records(20, seed=123)
        assert deal_records(20, seed=123) != deal_records(20, seed=124)

    def test_deal_record_uses_generator(self):
        rng = np.random.default_rng(0)
        assert len(deal_record(rng).split()) == 10

    def test_deal_negative_count(self):
        with pytest.raises(ValueError):
            deal_records(-1)

    def test_deal_main_writes_file(self, tmp_path):
        path = tmp_path / "dealt.txt"
        assert deal_main(["-n", "12", "--seed", "5", "--output", str(path)]) == 0
        lines = path.read_text(encoding="utf-8").splitlines()
        assert len(lines) == 12
        assert lines == deal_records(12, seed=5)

    def test_deal_main_verbose_logs_seed(self, tmp_path, caplog):
        path = tmp_path / "dealt.txt"
        with caplog.at_level(logging.INFO, logger="poker_hands.scripts.deal"):
            assert deal_main(["-n", "3", "--seed", "11", "-v", "--output", str(path)]) == 0
        assert "Dealing 3 records with seed 11" in caplog.text

    def test_deal_then_tally(self, tmp_path):
        path = tmp_path / "dealt.txt"
        deal_main(["-n", "40", "--seed", "9", "--output", str(path)])
        console, _ = make_console()
        stats = run(TallyConfig(input_path=str(path), quiet=True), console=console)
        assert stats.total == 40
        assert stats.errors == 0
