"""Tests for the dictionary MDP and its conversion to TabularMDP."""

import pytest

from .mdp import MDP, mdp_check_distributions
from .tabular import TabularMDP
from .errors import MDPValidationError, DistributionNotNormalizedError
from .test_tabular import create_mdp


def weather_mdp():
    states = ["sun", "rain"]
    actions = {"sun": ["walk", "drive"], "rain": ["drive", "walk"]}
    P = {
        ("sun", "walk"): {"sun": 0.9, "rain": 0.1},
        ("sun", "drive"): {"sun": 0.5, "rain": 0.5},
        ("rain", "drive"): {"rain": 1.0},
        ("rain", "walk"): {"sun": 0.3, "rain": 0.7},
    }
    return MDP(states, actions, P)


def weather_reward(s, a, s2):
    return 1.0 if s2 == "sun" else -1.0


class TestDictionaryMDP:

    def test_enabled_pairs(self):
        assert weather_mdp().enabled_pairs() == [
            ("sun", "walk"), ("sun", "drive"), ("rain", "drive"), ("rain", "walk"),
        ]

    def test_check_distributions_ok(self):
        assert mdp_check_distributions(weather_mdp()) == []

    def test_check_distributions_reports_bad_pairs(self):
        mdp = weather_mdp()
        mdp.P[("rain", "walk")] = {"sun": 0.3, "rain": 0.8}
        del mdp.P[("sun", "drive")]
        assert mdp_check_distributions(mdp) == [("sun", "drive"), ("rain", "walk")]


class TestFromMDP:

    def test_indexing(self):
        model = TabularMDP.from_mdp(weather_mdp(), weather_reward, 0.9)
        assert model.state_count == 2
        assert model.action_count == 2
        assert model.discount_factor == 0.9
        # actions in first-seen order: walk = 0, drive = 1
        assert model.transition_probability(0, 0, 1) == 0.1
        assert model.transition_probability(1, 1, 0) == 0.0
        assert model.transition_probability(1, 0, 0) == 0.3
        assert model.reward(1, 0, 0) == 1.0
        assert model.reward(0, 1, 1) == -1.0

    def test_default_reward_is_zero(self):
        model = TabularMDP.from_mdp(weather_mdp())
        assert model.rewards.sum() == 0.0
        assert model.discount_factor == 1.0

    def test_missing_action(self):
        mdp = weather_mdp()
        mdp.actions["rain"] = ["drive"]
        with pytest.raises(MDPValidationError, match="walk"):
            TabularMDP.from_mdp(mdp)

    def test_unknown_successor(self):
        mdp = weather_mdp()
        mdp.P[("sun", "walk")] = {"sun": 0.9, "snow": 0.1}
        with pytest.raises(MDPValidationError, match="snow"):
            TabularMDP.from_mdp(mdp)

    def test_not_normalized(self):
        mdp = weather_mdp()
        mdp.P[("sun", "drive")] = {"sun": 0.5}
        with pytest.raises(DistributionNotNormalizedError) as exc:
            TabularMDP.from_mdp(mdp)
        assert (exc.value.state, exc.value.action) == (0, 1)


class TestToMDP:

    def test_nonzero_successors(self):
        mdp = create_mdp().to_mdp()
        assert mdp.states == [0, 1]
        assert mdp.actions == {0: [0, 1, 2], 1: [0, 1, 2]}
        assert mdp.P[(0, 2)] == {1: 1.0}
        assert mdp.P[(1, 1)] == {0: 0.3, 1: 0.7}

    def test_round_trip(self):
        model = create_mdp()
        rebuilt = TabularMDP.from_mdp(model.to_mdp(), model.reward, model.discount_factor)
        assert rebuilt == model
