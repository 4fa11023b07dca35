"""
Tests for the agent classes driving seats at a real table.
"""

import random

import pytest
from pokertable.agents import CallAgent, HumanAgent, Personality, PolicyAgent
from pokertable.agents.policy import Decision
from pokertable.core.game import TexasHoldemGame
from pokertable.core.rules import ActionType, GamePhase, HAND_OVER_PHASES


def play_hand(game, agents):
    """Let each seat's agent act until the hand is over."""
    while game.is_hand_running():
        agent = agents[game.active_player_index]
        result = agent.take_turn(game)
        assert result.success, result.message


class TestCallAgent:

    def test_calls_then_checks(self, four_player_game):
        game = four_player_game
        agent = CallAgent(3)
        decision = agent.act(game.snapshot())
        assert decision == Decision(ActionType.CALL, 20)

    def test_call_agents_reach_showdown(self, four_player_game):
        agents = {i: CallAgent(i) for i in range(4)}
        play_hand(four_player_game, agents)
        assert four_player_game.phase == GamePhase.SHOWDOWN
        assert four_player_game.winner_info.pot == 80


class TestPolicyAgent:

    def test_default_personality(self):
        agent = PolicyAgent(2)
        assert agent.personality == Personality.unpredictable()
        assert agent.name == "Unpredictable-2"

    def test_take_turn_applies_decision(self, four_player_game):
        agent = PolicyAgent(3, Personality.tight_aggressive(), rng=random.Random(4))
        result = agent.take_turn(four_player_game)
        assert result.success
        assert len(agent.recent_decisions) == 1
        assert four_player_game.active_player_index != 3 or not four_player_game.is_hand_running()

    def test_take_turn_out_of_turn_is_rejected(self, four_player_game):
        agent = PolicyAgent(0, rng=random.Random(4))
        result = agent.take_turn(four_player_game)
        assert not result.success

    def test_recent_decisions_bounded(self, four_player_game):
        agent = PolicyAgent(3, rng=random.Random(4))
        snapshot = four_player_game.snapshot()
        for _ in range(8):
            agent.act(snapshot)
        assert len(agent.recent_decisions) == PolicyAgent.HISTORY_SIZE
        agent.reset()
        assert len(agent.recent_decisions) == 0

    @pytest.mark.parametrize("seed", [3, 17])
    def test_policy_table_conserves_chips(self, seed):
        rng = random.Random(seed)
        styles = [
            Personality.tight_passive(),
            Personality.tight_aggressive(),
            Personality.loose_aggressive(),
            Personality.unpredictable(),
        ]
        agents = {i: PolicyAgent(i, styles[i], rng=rng) for i in range(4)}
        game = TexasHoldemGame(rng=rng)
        game.init_game(4)

        for _ in range(30):
            play_hand(game, agents)
            assert game.phase in HAND_OVER_PHASES
            assert game.total_chips == 4000
            if not game.start_new_hand():
                break


class TestHumanAgent:

    def test_human_agent_does_not_act(self, four_player_game):
        agent = HumanAgent(0)
        assert agent.name == "Human-0"
        with pytest.raises(NotImplementedError):
            agent.act(four_player_game.snapshot())
