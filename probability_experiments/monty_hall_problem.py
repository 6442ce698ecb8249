# Monty hall problem
import numpy as np
import pandas as pd

CAR = "car"
GOAT = "goat"
DOORS = np.array([1, 2, 3])  # door numbers as announced on the show
DOORS.setflags(write=False)
STRATEGIES = ("stay", "switch")
OUTCOMES = ("LOSE", "WIN")


class MontyHallProblem:
    """Three doors, one car and two goats.

    The contestant picks a door, the host opens a goat door, and the contestant
    either stays with the first pick or switches to the other closed door. Both
    strategies are played against the same game, so every trial is a paired
    comparison.
    """

    def __init__(self,
                 random_state=None  # Seed or numpy Generator, None for fresh entropy
                 ):
        self.random_state = random_state
        self.rng = np.random.default_rng(random_state)

    @staticmethod
    def _check_door(door):
        if isinstance(door, bool) or not isinstance(door, (int, np.integer)) or door not in DOORS:
            raise ValueError(f"door must be one of {DOORS.tolist()}, got {door!r}")

    @staticmethod
    def _check_game(game):
        game = np.asarray(game)
        if game.shape != DOORS.shape or np.sum(game == CAR) != 1 or np.sum(game == GOAT) != 2:
            raise ValueError(f"game must hold one car and two goats, got {game.tolist()!r}")
        return game

    def create_game(self):
        # Two goats and a car, shuffled behind the doors
        a_game = self.rng.permutation(np.array([GOAT, GOAT, CAR]))
        a_game.setflags(write=False)
        return a_game

    def select_door(self):
        a_pick = self.rng.choice(DOORS)
        return int(a_pick)

    def open_goat_door(self, game, a_pick):
        self._check_door(a_pick)
        game = self._check_game(game)
        if game[a_pick - 1] == CAR:
            # Contestant is on the car, the host can open either goat
            goat_doors = DOORS[game != CAR]
            opened_door = self.rng.choice(goat_doors)
        else:
            # Only one goat door is left for the host
            opened_door = DOORS[(game != CAR) & (DOORS != a_pick)][0]
        return int(opened_door)

    @staticmethod
    def change_door(stay, opened_door, a_pick):
        MontyHallProblem._check_door(opened_door)
        MontyHallProblem._check_door(a_pick)
        if opened_door == a_pick:
            raise ValueError(f"the host cannot open the picked door {a_pick}")
        if stay:
            final_pick = a_pick
        else:
            final_pick = DOORS[(DOORS != opened_door) & (DOORS != a_pick)][0]
        return int(final_pick)

    @staticmethod
    def determine_winner(final_pick, game):
        MontyHallProblem._check_door(final_pick)
        if MontyHallProblem._check_game(game)[final_pick - 1] == CAR:
            return "WIN"
        return "LOSE"

    def play_game(self):
        new_game = self.create_game()
        first_pick = self.select_door()
        opened_door = self.open_goat_door(new_game, first_pick)

        final_pick_stay = self.change_door(True, opened_door, first_pick)
        final_pick_switch = self.change_door(False, opened_door, first_pick)

        outcome_stay = self.determine_winner(final_pick_stay, new_game)
        outcome_switch = self.determine_winner(final_pick_switch, new_game)

        return _results_frame([outcome_stay, outcome_switch])

    def play_n_games(self, n=100):
        """Play ``n`` paired games and print the share of wins and losses per strategy.

        Returns the raw results, two rows (stay and switch) per game. ``n=0``
        gives an empty frame and an empty table; a negative ``n`` is rejected.
        """
        if isinstance(n, bool) or not isinstance(n, (int, np.integer)):
            raise TypeError(f"n must be an integer, got {type(n).__name__}")
        if n < 0:
            raise ValueError(f"n must be non-negative, got {n}")

        results_list = [self.play_game() for _ in range(n)]
        if results_list:
            results_df = pd.concat(results_list, ignore_index=True)
        else:
            # Same column types as a played game, just no rows
            results_df = _results_frame(list(OUTCOMES)).iloc[0:0]

        print(proportion_table(results_df))
        return results_df


def _results_frame(outcomes):
    return pd.DataFrame({"strategy": list(STRATEGIES),
                         "outcome": outcomes})


def contingency_table(results):
    if results.empty:
        counts = pd.DataFrame(0, index=list(STRATEGIES), columns=list(OUTCOMES))
    else:
        counts = pd.crosstab(results["strategy"], results["outcome"])
        # Keep both rows and both columns even if a cell never showed up
        counts = counts.reindex(index=list(STRATEGIES), columns=list(OUTCOMES), fill_value=0)
    return counts.rename_axis(index="strategy", columns="outcome")


def _row_shares(results):
    counts = contingency_table(results)
    if results.empty:
        return counts.iloc[0:0].astype(float)
    return counts.div(counts.sum(axis=1), axis=0)


def proportion_table(results, decimals=2):
    """Row proportions of the strategy x outcome table, rounded for display."""
    return _row_shares(results).round(decimals)


def win_rates(results):
    return _row_shares(results)["WIN"]


if __name__ == "__main__":
    mhp = MontyHallProblem()
    mhp.play_n_games(n=100)
