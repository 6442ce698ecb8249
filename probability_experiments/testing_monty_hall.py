import numpy as np
import pandas as pd
import pytest

from probability_experiments.monty_hall_problem import (
    CAR, GOAT, DOORS, STRATEGIES, OUTCOMES,
    MontyHallProblem, contingency_table, proportion_table, win_rates,
)


@pytest.fixture
def mhp():
    return MontyHallProblem(random_state=42)


def make_game(*labels):
    game = np.array(labels)
    game.setflags(write=False)
    return game


# Door assignment and first pick

def test_create_game_has_one_car_and_two_goats(mhp):
    for _ in range(200):
        game = mhp.create_game()
        assert len(game) == 3
        assert np.sum(game == CAR) == 1
        assert np.sum(game == GOAT) == 2


def test_create_game_is_read_only(mhp):
    game = mhp.create_game()
    with pytest.raises(ValueError):
        game[0] = CAR


def test_doors_are_read_only():
    with pytest.raises(ValueError):
        DOORS[0] = 3


def test_create_game_puts_the_car_everywhere(mhp):
    car_doors = {int(np.argmax(mhp.create_game() == CAR)) + 1 for _ in range(300)}
    assert car_doors == {1, 2, 3}


def test_select_door_is_a_valid_door(mhp):
    picks = [mhp.select_door() for _ in range(300)]
    assert set(picks) == {1, 2, 3}
    assert all(isinstance(pick, int) for pick in picks)


# Host opening a door

def test_open_goat_door_never_opens_car_or_goat_pick(mhp):
    for _ in range(300):
        game = mhp.create_game()
        a_pick = mhp.select_door()
        opened_door = mhp.open_goat_door(game, a_pick)
        assert game[opened_door - 1] == GOAT
        if game[a_pick - 1] == GOAT:
            assert opened_door != a_pick


def test_open_goat_door_single_candidate():
    game = make_game(GOAT, GOAT, CAR)
    for seed in range(20):
        assert MontyHallProblem(random_state=seed).open_goat_door(game, 1) == 2


def test_open_goat_door_picks_either_goat_when_on_car():
    game = make_game(CAR, GOAT, GOAT)
    mhp = MontyHallProblem(random_state=3)
    opened = [mhp.open_goat_door(game, 1) for _ in range(200)]
    assert set(opened) == {2, 3}
    assert 0.35 < opened.count(2) / len(opened) < 0.65


def test_open_goat_door_accepts_plain_lists(mhp):
    assert mhp.open_goat_door([GOAT, CAR, GOAT], 3) == 1


def test_open_goat_door_rejects_unknown_door(mhp):
    with pytest.raises(ValueError):
        mhp.open_goat_door(make_game(CAR, GOAT, GOAT), 4)


@pytest.mark.parametrize("a_pick", [1.0, 2.5, True, "1"])
def test_open_goat_door_rejects_non_integer_door(mhp, a_pick):
    with pytest.raises(ValueError):
        mhp.open_goat_door(make_game(GOAT, GOAT, CAR), a_pick)


@pytest.mark.parametrize("game", [
    [GOAT, GOAT, GOAT],
    [CAR, CAR, GOAT],
    [CAR, GOAT],
    [CAR, GOAT, GOAT, GOAT],
])
def test_open_goat_door_rejects_malformed_game(mhp, game):
    with pytest.raises(ValueError):
        mhp.open_goat_door(game, 1)


# Stay or switch

@pytest.mark.parametrize("opened_door, a_pick, switch_to", [
    (2, 1, 3), (3, 1, 2), (1, 2, 3), (3, 2, 1), (1, 3, 2), (2, 3, 1),
])
def test_change_door(opened_door, a_pick, switch_to):
    assert MontyHallProblem.change_door(True, opened_door, a_pick) == a_pick
    assert MontyHallProblem.change_door(False, opened_door, a_pick) == switch_to


def test_change_door_rejects_unknown_door():
    with pytest.raises(ValueError):
        MontyHallProblem.change_door(False, 0, 1)
    with pytest.raises(ValueError):
        MontyHallProblem.change_door(True, 2.0, 1)


@pytest.mark.parametrize("stay", [True, False])
@pytest.mark.parametrize("door", [1, 2, 3])
def test_change_door_rejects_opened_pick(stay, door):
    with pytest.raises(ValueError):
        MontyHallProblem.change_door(stay, door, door)


# Winner

def test_determine_winner():
    game = make_game(GOAT, CAR, GOAT)
    assert MontyHallProblem.determine_winner(2, game) == "WIN"
    assert MontyHallProblem.determine_winner(1, game) == "LOSE"
    assert MontyHallProblem.determine_winner(3, game) == "LOSE"


def test_determine_winner_rejects_malformed_game():
    with pytest.raises(ValueError):
        MontyHallProblem.determine_winner(1, [GOAT, GOAT, GOAT])


def test_determine_winner_is_repeatable():
    game = make_game(GOAT, GOAT, CAR)
    for door in DOORS:
        assert MontyHallProblem.determine_winner(door, game) == MontyHallProblem.determine_winner(door, game)


def test_car_behind_third_door_first_pick():
    mhp = MontyHallProblem(random_state=0)
    game = make_game(GOAT, GOAT, CAR)
    opened_door = mhp.open_goat_door(game, 1)
    assert opened_door == 2

    final_pick_stay = mhp.change_door(True, opened_door, 1)
    final_pick_switch = mhp.change_door(False, opened_door, 1)
    assert final_pick_stay == 1
    assert final_pick_switch == 3
    assert mhp.determine_winner(final_pick_stay, game) == "LOSE"
    assert mhp.determine_winner(final_pick_switch, game) == "WIN"


def test_car_behind_first_door_first_pick():
    mhp = MontyHallProblem(random_state=0)
    game = make_game(CAR, GOAT, GOAT)
    opened_door = mhp.open_goat_door(game, 1)
    assert opened_door in (2, 3)

    final_pick_switch = mhp.change_door(False, opened_door, 1)
    assert final_pick_switch == ({2, 3} - {opened_door}).pop()
    assert mhp.determine_winner(mhp.change_door(True, opened_door, 1), game) == "WIN"
    assert mhp.determine_winner(final_pick_switch, game) == "LOSE"


# One game

def test_play_game_returns_one_row_per_strategy(mhp):
    game_results = mhp.play_game()
    assert list(game_results.columns) == ["strategy", "outcome"]
    assert list(game_results["strategy"]) == list(STRATEGIES)
    assert set(game_results["outcome"]) <= set(OUTCOMES)


def test_play_game_strategies_share_the_same_game(mhp):
    # Exactly one of stay and switch wins on the same game
    for _ in range(200):
        outcomes = mhp.play_game()["outcome"].tolist()
        assert sorted(outcomes) == ["LOSE", "WIN"]


# Many games

def test_play_n_games_shape(mhp, capsys):
    results_df = mhp.play_n_games(n=25)
    assert len(results_df) == 50
    assert (results_df["strategy"].value_counts() == 25).all()
    assert list(results_df.index) == list(range(50))

    printed = capsys.readouterr().out
    assert "stay" in printed and "switch" in printed
    assert "WIN" in printed and "LOSE" in printed


def test_play_n_games_default_is_100(mhp):
    assert len(mhp.play_n_games()) == 200


def test_play_n_games_zero(mhp, capsys):
    results_df = mhp.play_n_games(n=0)
    assert results_df.empty
    assert list(results_df.columns) == ["strategy", "outcome"]
    assert "Empty DataFrame" in capsys.readouterr().out


def test_play_n_games_zero_keeps_column_types(mhp):
    empty = mhp.play_n_games(n=0)
    played = mhp.play_n_games(n=2)
    pd.testing.assert_series_equal(empty.dtypes, played.dtypes)


def test_play_n_games_rejects_negative(mhp):
    with pytest.raises(ValueError):
        mhp.play_n_games(n=-1)


@pytest.mark.parametrize("n", [2.5, "10", True])
def test_play_n_games_rejects_non_integer(mhp, n):
    with pytest.raises(TypeError):
        mhp.play_n_games(n=n)


def test_same_seed_same_results():
    first = MontyHallProblem(random_state=11).play_n_games(n=50)
    second = MontyHallProblem(random_state=11).play_n_games(n=50)
    pd.testing.assert_frame_equal(first, second)


def test_generator_can_be_injected():
    rng = np.random.default_rng(5)
    mhp = MontyHallProblem(random_state=rng)
    assert mhp.rng is rng


def test_switching_wins_two_thirds_of_the_time():
    results_df = MontyHallProblem(random_state=2024).play_n_games(n=10000)
    rates = win_rates(results_df)
    assert rates["stay"] == pytest.approx(1 / 3, abs=0.05)
    assert rates["switch"] == pytest.approx(2 / 3, abs=0.05)


# Tables

def test_contingency_table_keeps_missing_cells():
    results_df = pd.DataFrame({"strategy": ["stay", "switch", "stay", "switch"],
                               "outcome": ["LOSE", "WIN", "LOSE", "WIN"]})
    counts = contingency_table(results_df)
    assert list(counts.index) == list(STRATEGIES)
    assert list(counts.columns) == list(OUTCOMES)
    assert counts.loc["stay", "LOSE"] == 2
    assert counts.loc["stay", "WIN"] == 0
    assert counts.loc["switch", "WIN"] == 2


def test_proportion_table_rows_sum_to_one():
    results_df = pd.DataFrame({"strategy": ["stay", "switch"] * 3,
                               "outcome": ["WIN", "LOSE", "LOSE", "WIN", "LOSE", "WIN"]})
    shares = proportion_table(results_df)
    assert np.allclose(shares.sum(axis=1), 1)
    assert shares.loc["stay", "WIN"] == 0.33
    assert shares.loc["stay", "LOSE"] == 0.67
    assert shares.loc["switch", "WIN"] == 0.67
    assert win_rates(results_df)["switch"] == pytest.approx(2 / 3)


def test_tables_on_empty_results():
    empty = pd.DataFrame({"strategy": pd.Series(dtype=object),
                          "outcome": pd.Series(dtype=object)})
    assert (contingency_table(empty).to_numpy() == 0).all()
    assert proportion_table(empty).empty
    assert list(proportion_table(empty).columns) == list(OUTCOMES)
    assert win_rates(empty).empty
