"""
Tests for agents and the TD decision policy.
"""

import pytest

from conftest import ScriptedBoard
from threes_td import (
    Agent,
    AgentConfig,
    BottomSlider,
    EpisodeTrainer,
    GreedySlider,
    Network,
    RandomSlider,
    TDSlider,
    TrainerStateError,
)

ZEROS = [0] * 16
ONE_AT_0 = [1] + [0] * 15


def td_slider(patterns=((0, 1, 2),), alpha=0.1):
    net = Network(patterns)
    slider = TDSlider(net, EpisodeTrainer(net, alpha))
    slider.open_episode()
    return slider


class TestBaseAgent:
    def test_null_action(self, zero_board):
        assert not Agent().take_action(zero_board)

    def test_name_and_role(self):
        agent = Agent(AgentConfig(name="me", role="tester"))
        assert agent.name == "me"
        assert agent.role == "tester"

    def test_variant_defaults(self):
        assert TDSlider(Network([(0, 1)]), EpisodeTrainer(Network([(0, 1)]), 0.0)).name == "TD"
        assert GreedySlider().role == "slider"
        assert GreedySlider(AgentConfig(name="g2")).name == "g2"


class TestTDSlider:
    def test_prefers_higher_afterstate_value(self):
        slider = td_slider()
        # ONE_AT_0 feeds slot 1 in two views, slot 0 in the other six
        slider.network[0][1] = 5.0
        board = ScriptedBoard(ZEROS, {0: (4, ZEROS), 2: (1, ONE_AT_0), 3: (4, ZEROS)})
        action = slider.take_action(board)
        assert action.kind == "slide"
        assert action.op == 2

        (t,) = slider.trainer.trajectory
        assert t.op == 2
        assert t.reward == 1
        assert t.value == pytest.approx(1 + 10.0)
        assert t.after == ScriptedBoard(ONE_AT_0)
        assert t.before == board

    def test_ties_go_to_first_op(self):
        slider = td_slider()
        board = ScriptedBoard(ZEROS, {1: (4, ZEROS), 3: (4, ZEROS)})
        assert slider.take_action(board).op == 1

    def test_skips_illegal(self):
        slider = td_slider()
        board = ScriptedBoard(ZEROS, {3: (0, ZEROS)})
        assert slider.take_action(board).op == 3

    def test_no_legal_move(self, zero_board):
        slider = td_slider()
        assert not slider.take_action(zero_board)
        assert len(slider.trainer) == 0

    def test_does_not_touch_input_board(self):
        slider = td_slider()
        board = ScriptedBoard(ZEROS, {0: (2, ONE_AT_0)})
        slider.take_action(board)
        assert board == ScriptedBoard(ZEROS)

    def test_close_episode_learns(self):
        slider = td_slider(alpha=0.5)
        board = ScriptedBoard(ZEROS, {0: (2, ONE_AT_0)})
        slider.take_action(board)
        slider.take_action(board)
        slider.close_episode()
        assert len(slider.trainer) == 0
        assert slider.network[0].value.any()

    def test_requires_open_episode(self):
        net = Network([(0, 1)])
        slider = TDSlider(net, EpisodeTrainer(net, 0.1))
        board = ScriptedBoard(ZEROS, {0: (2, ZEROS)})
        with pytest.raises(TrainerStateError):
            slider.take_action(board)

    def test_from_config_loads_weights(self, tmp_path):
        path = tmp_path / "w.bin"
        source = Network([(0, 1, 2)])
        source[0][0] = 1.25
        source.save(path)

        config = AgentConfig.from_args(f"alpha=0.2 load={path}")
        slider = TDSlider.from_config(config, patterns=[(0, 1, 2)])
        assert slider.trainer.alpha == pytest.approx(0.2)
        assert slider.network[0][0] == 1.25
        assert slider.trainer.network is slider.network

    def test_save(self, tmp_path):
        path = tmp_path / "out.bin"
        slider = TDSlider.from_config(AgentConfig(save_path=path), patterns=[(0, 1)])
        slider.network[0][3] = 0.5
        slider.save()

        restored = Network([(0, 1)])
        restored.load(path)
        assert restored[0][3] == 0.5

    def test_save_without_path_is_noop(self, tmp_path):
        slider = TDSlider.from_config(AgentConfig(), patterns=[(0, 1)])
        slider.save()
        assert list(tmp_path.iterdir()) == []


class TestRandomSlider:
    def test_only_legal_move(self):
        board = ScriptedBoard(ZEROS, {2: (0, ZEROS)})
        slider = RandomSlider(AgentConfig(seed=1))
        for _ in range(10):
            assert slider.take_action(board).op == 2

    def test_no_legal_move(self, zero_board):
        assert not RandomSlider(AgentConfig(seed=1)).take_action(zero_board)

    def test_seeded(self):
        board = ScriptedBoard(ZEROS, {op: (0, ZEROS) for op in range(4)})
        a = RandomSlider(AgentConfig(seed=3))
        b = RandomSlider(AgentConfig(seed=3))
        assert [a.take_action(board).op for _ in range(20)] == [b.take_action(board).op for _ in range(20)]


class TestGreedySlider:
    def test_max_reward(self):
        board = ScriptedBoard(ZEROS, {0: (1, ZEROS), 2: (6, ZEROS), 3: (3, ZEROS)})
        assert GreedySlider().take_action(board).op == 2

    def test_zero_reward_still_legal(self):
        board = ScriptedBoard(ZEROS, {3: (0, ZEROS)})
        assert GreedySlider().take_action(board).op == 3

    def test_ties(self):
        board = ScriptedBoard(ZEROS, {1: (2, ZEROS), 2: (2, ZEROS)})
        assert GreedySlider().take_action(board).op == 1

    def test_no_legal_move(self, zero_board):
        assert not GreedySlider().take_action(zero_board)


class TestBottomSlider:
    def test_avoids_op_zero(self):
        board = ScriptedBoard(ZEROS, {0: (10, ZEROS), 1: (1, ZEROS), 2: (5, ZEROS)})
        assert BottomSlider().take_action(board).op == 2

    def test_falls_back_to_op_zero(self):
        board = ScriptedBoard(ZEROS, {0: (10, ZEROS)})
        assert BottomSlider().take_action(board).op == 0

    def test_no_legal_move(self, zero_board):
        assert not BottomSlider().take_action(zero_board)
