"""
Tests for command line parsing and the entry point.
"""

import socket

import pytest

from cli import USAGE, ConfigurationError, main, parse_args


class TestParseArgs:
    def test_defaults(self):
        config = parse_args([])
        assert config.strategy == "up"
        assert config.games == 1
        assert not config.verbose
        assert not config.average
        assert config.server is None

    def test_flags(self):
        config = parse_args(["-v", "--average", "--highscore", "--lr"])
        assert config.verbose
        assert config.average
        assert config.games is None
        assert config.strategy == "lr"

    def test_options_are_read_right_to_left(self):
        # the leftmost strategy flag is read last and wins
        assert parse_args(["--score", "--lr"]).strategy == "score"
        assert parse_args(["--lr", "--up"]).strategy == "lr"

    def test_value_options(self):
        config = parse_args(["--server", "localhost:9000", "--games", "5", "--seed", "3"])
        assert config.server == "localhost:9000"
        assert config.games == 5
        assert config.seed == 3

    def test_timeout(self):
        assert parse_args([]).timeout is None
        assert parse_args(["--server", "localhost:9000", "--timeout", "2.5"]).timeout == 2.5

    def test_highscore_overrides_games(self):
        assert parse_args(["--games", "5", "--highscore"]).games is None

    @pytest.mark.parametrize("args, code", [
        (["-h"], 0),
        (["--up", "-h"], 1),
        (["--bogus"], 1),
        (["--bogus", "-v"], 1),
        (["-v", "--bogus"], 2),
        (["--games", "many"], 1),
        (["--games", "0"], 1),
        (["--timeout", "soon"], 1),
        (["--timeout", "0"], 1),
        (["--timeout", "-1"], 1),
    ])
    def test_exit_codes(self, args, code):
        with pytest.raises(ConfigurationError) as info:
            parse_args(args)
        assert info.value.exit_code == code


class TestMain:
    def test_unknown_option_prints_usage(self, capsys):
        assert main(["-v", "--nope"]) == 2

        out = capsys.readouterr().out
        assert "unknown option --nope" in out
        assert USAGE in out

    def test_help(self, capsys):
        assert main(["-h"]) == 0
        assert capsys.readouterr().out.strip() == USAGE

    def test_plays_games(self, capsys):
        assert main(["--score", "--games", "2", "--seed", "5"]) == 0
        assert "score " in capsys.readouterr().out

    def test_unreachable_server(self, capsys):
        spare = socket.socket()
        spare.bind(("127.0.0.1", 0))
        port = spare.getsockname()[1]
        spare.close()

        assert main(["--server", f"127.0.0.1:{port}"]) == 1
        assert "Cannot connect" in capsys.readouterr().out
