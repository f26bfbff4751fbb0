import numpy as np

from puyo_chain_rl.game import (
    Field,
    ScoringRules,
    SettlePhase,
    Settlement,
    format_field,
    resolve_chain,
)


def _column_run_field():
    return Field.from_strings([
        "......",
        "......",
        "......",
        "......",
        "......",
        "......",
        "......",
        "......",
        "...R..",
        "...R..",
        "...R..",
        "...R..",
    ])


def test_single_vertical_run_scores_forty():
    field = _column_run_field()
    result = resolve_chain(field)
    assert result.score == 40
    assert result.chains == 1
    assert result.cleared == 4
    assert field.count_filled() == 0


def test_simultaneous_groups_score_in_one_step():
    field = Field.from_strings([
        "......",
        "......",
        "RR..BB",
        "RR.BBB",
    ])
    result = resolve_chain(field)
    assert result.score == 90
    assert result.chains == 1
    assert len(result.steps) == 1
    assert sorted(len(g) for g in result.steps[0].groups) == [4, 5]


def test_second_chain_uses_multiplier_two():
    # Clearing the reds drops the top blue onto three blues below it.
    field = Field.from_strings([
        "B.....",
        "R.....",
        "R.....",
        "R.....",
        "RBBB..",
    ])
    result = resolve_chain(field)
    assert [s.chain for s in result.steps] == [1, 2]
    assert result.steps[0].gained == 4 * 1 * 10
    assert result.steps[1].gained == 4 * 2 * 10
    assert result.score == 120
    assert field.count_filled() == 0


def test_three_chain_accumulates():
    field = Field.from_strings([
        "G.....",
        "B.....",
        "R.....",
        "R.....",
        "R.....",
        "RBBB..",
        "GGGY..",
    ])
    result = resolve_chain(field)
    assert result.chains == 3
    assert result.score == 4 * 10 + 4 * 20 + 4 * 30


def test_resolution_is_idempotent_at_fixpoint():
    field = Field.from_strings([
        "......",
        "RB....",
        "RBG...",
        "BRGY..",
    ])
    snapshot = field.clone_state()
    for _ in range(3):
        result = resolve_chain(field)
        assert result.score == 0
        assert result.chains == 0
        assert np.array_equal(field.cells, snapshot)


def test_cells_above_cleared_group_fall():
    field = Field.from_strings([
        "Y.....",
        "G.....",
        "RRRR..",
    ])
    resolve_chain(field)
    assert format_field(field) == "\n".join([
        "......",
        "Y.....",
        "G.....",
    ])


def test_phases_step_through_erase_and_compact():
    field = _column_run_field()
    settlement = Settlement(field)
    assert settlement.phase is SettlePhase.FIND
    assert settlement.advance() is SettlePhase.ERASE
    assert len(settlement.erasing) == 1
    assert field.count_filled() == 4
    assert settlement.advance() is SettlePhase.COMPACT
    assert settlement.erasing == ()
    assert field.count_filled() == 0
    assert settlement.result.score == 40
    assert settlement.advance() is SettlePhase.FIND
    assert settlement.advance() is SettlePhase.DONE
    assert settlement.done


def test_custom_rules_and_threshold():
    field = Field.from_strings(["RRR..."])
    result = resolve_chain(field, ScoringRules(points_per_cell=5), min_group_size=3)
    assert result.score == 15
