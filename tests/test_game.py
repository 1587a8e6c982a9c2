"""Unit tests for the ImpossibleXO game loop."""

import io
import random

import pytest

from impossiblexo.board import Mark
from impossiblexo.console import CommandLineConsole
from impossiblexo.game import Game
from impossiblexo.players import DumbComputer, Human, ImpossibleComputer


def scripted_console(*answers):
    replies = iter(answers)
    output = io.StringIO()
    console = CommandLineConsole(input_func=lambda prompt: next(replies), output=output)
    return console, output


def test_new_game_is_not_over():
    game = Game(players=[Human(Mark.X), Human(Mark.O)])
    assert not game.over()
    assert game.winner() is None
    assert not game.drawn()
    assert game.current_player.mark is Mark.X


def test_play_rotates_players():
    game = Game(players=[Human(Mark.X), Human(Mark.O)])
    game.play(4)
    assert game.board.spaces[4] is Mark.X
    assert game.current_player.mark is Mark.O


def test_play_rejects_taken_space():
    game = Game(players=[Human(Mark.X), Human(Mark.O)])
    game.play(4)
    with pytest.raises(ValueError):
        game.play(4)
    assert game.current_player.mark is Mark.O


def test_play_rejects_moves_after_win():
    game = Game(players=[Human(Mark.X), Human(Mark.O)])
    for space in (0, 3, 1, 4, 2):
        game.play(space)
    assert game.over()
    assert game.winner() is Mark.X
    with pytest.raises(ValueError):
        game.play(8)


def test_play_turn_returns_the_marked_space():
    computer = DumbComputer(Mark.X, rng=random.Random(1))
    game = Game(players=[computer, Human(Mark.O)])
    space = game.play_turn()
    assert game.board.spaces[space] is Mark.X
    assert game.current_player.mark is Mark.O


def test_set_players_uses_console_choice():
    console, _ = scripted_console("3")
    game = Game(console, depth_limit=4)

    game.set_players()

    human, computer = game.players
    assert isinstance(human, Human) and human.mark is Mark.X
    assert isinstance(computer, ImpossibleComputer) and computer.mark is Mark.O
    assert computer.minimax.depth_limit == 4
    assert all(player.console is console for player in game.players)
    assert console.players == game.players


def test_run_human_against_human():
    console, output = scripted_console("1", "1", "4", "2", "5", "3")
    game = Game(console)

    game.run()

    assert game.winner() is Mark.X
    assert game.board.spaces_with_mark(Mark.X) == [0, 1, 2]
    assert game.board.spaces_with_mark(Mark.O) == [3, 4]
    assert "X wins! (Human)" in output.getvalue()


def test_run_against_impossible_computer():
    # The human tries every space in order; taken ones are asked again.
    console, output = scripted_console("3", *(str(n) for n in range(1, 10)))
    game = Game(console, depth_limit=9)

    game.run()

    assert game.winner() in (Mark.O, None)
    assert "X wins!" not in output.getvalue()


def test_run_requires_console():
    with pytest.raises(RuntimeError):
        Game().run()
