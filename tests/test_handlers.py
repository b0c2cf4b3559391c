from gameboard.handlers.games import render_game
from gameboard.handlers.leaderboard import parse_score_args, render_leaderboard
from gameboard.services.games import GameRecord
from gameboard.services.leaderboard import LeaderboardEntry


def test_render_leaderboard_ranks_by_score_for_display():
    entries = [
        LeaderboardEntry("Low", 1),
        LeaderboardEntry("High", 30),
        LeaderboardEntry("Mid", 12.5),
        LeaderboardEntry("Tie", 1),
    ]

    lines = render_leaderboard(entries).splitlines()[2:]

    assert lines == [
        "🥇 High — <b>30</b> pts",
        "🥈 Mid — <b>12.5</b> pts",
        "🥉 Low — <b>1</b> pts",
        "4. Tie — <b>1</b> pts",
    ]


def test_render_leaderboard_escapes_and_highlights():
    text = render_leaderboard([LeaderboardEntry("<Ann>", 3)], highlight="<Ann>")
    assert "&lt;Ann&gt;" in text
    assert text.endswith("⬅️")


def test_render_empty_leaderboard():
    assert "No scores yet" in render_leaderboard([])


def test_parse_score_args():
    assert parse_score_args("Ann Lee 5") == ("Ann Lee", "5")
    assert parse_score_args("  Bob   -2 ") == ("Bob", "-2")
    assert parse_score_args("Bob") is None
    assert parse_score_args(None) is None


def test_render_game_skips_empty_parts():
    game = GameRecord(
        week_start="2026-10-12",
        title="Caption <This>",
        prompt="Write a caption",
        instructions="",
        input_placeholder="",
    )

    text = render_game(game)

    assert "Caption &lt;This&gt;" in text
    assert "2026-10-12" in text
    assert "📝" not in text
    assert "✏️" not in text
