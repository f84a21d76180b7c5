import pytest
from packages.engine import Feedback, Word, apply_feedback
from packages.harness import GameSession, run_case
from packages.minimax import Solver
from packages.oracles import OracleError, create_oracle

W = Word.from_text
DISJOINT = [W("AAAAA"), W("BBBBB"), W("CCCCC")]


def test_run_case_standard_smoke():
    solver = Solver(DISJOINT)
    r = run_case(create_oracle("standard"), solver.best_guess, DISJOINT, secret=W("CCCCC"))
    assert "success" in r and "history" in r
    assert r["success"] is True
    assert r["history"][-1] == ("CCCCC", "GGGGG")


def test_run_case_absurd_takes_value_plus_one_guesses():
    solver = Solver(DISJOINT)
    value = solver.run()
    r = run_case(create_oracle("absurd"), solver.best_guess, DISJOINT, solver=solver)
    assert r["success"] is True
    assert r["guesses"] == value + 1
    assert [p for _, p in r["history"]] == ["-----", "-----", "GGGGG"]


def test_run_case_respects_turn_budget():
    solver = Solver(DISJOINT)
    r = run_case(create_oracle("absurd"), solver.best_guess, DISJOINT, max_turns=1)
    assert r["success"] is False
    assert r["guesses"] == 1


def test_session_tracks_possible_words():
    oracle = create_oracle("standard")
    oracle.reset(words=DISJOINT, secret=W("BBBBB"))
    session = GameSession(oracle, DISJOINT)
    assert session.submit(W("AAAAA")).to_pattern() == "-----"
    assert session.candidates() == [W("BBBBB"), W("CCCCC")]
    assert session.possible() == W("BBBBB")
    assert not session.solved
    session.submit(W("BBBBB"))
    assert session.solved


def test_session_surfaces_oracle_errors():
    oracle = create_oracle("standard")
    oracle.reset(words=DISJOINT, secret=W("BBBBB"))
    session = GameSession(oracle, DISJOINT)
    session.state = apply_feedback(session.state, W("AAAAA"), Feedback.solved())
    before = session.state
    with pytest.raises(OracleError):
        session.submit(W("BBBBB"))
    assert session.state == before
    assert session.history == []
