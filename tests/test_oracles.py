import pytest
from packages.engine import Feedback, KnowledgeState, Word, apply_feedback
from packages.minimax import Solver
from packages.oracles import OracleError, create_oracle, get_oracle_ids

W = Word.from_text
WORDS = [W("ABIDE"), W("ABASE"), W("BEACH")]


def test_registry_lists_both_oracles():
    assert get_oracle_ids() == ["absurd", "standard"]
    with pytest.raises(ValueError):
        create_oracle("nope")


def test_standard_oracle_scores_against_its_secret():
    oracle = create_oracle("standard")
    oracle.reset(words=WORDS, secret=W("ABASE"))
    fb = oracle.respond(KnowledgeState.empty(), W("ABIDE"))
    assert fb.to_pattern() == "GG--G"


def test_standard_oracle_secret_is_seeded():
    a, b = create_oracle("standard"), create_oracle("standard")
    a.reset(words=WORDS, seed=11)
    b.reset(words=WORDS, seed=11)
    assert a.secret == b.secret and a.secret in WORDS


def test_standard_oracle_detects_inconsistent_state():
    oracle = create_oracle("standard")
    oracle.reset(words=WORDS, secret=W("BEACH"))
    state = apply_feedback(KnowledgeState.empty(), W("ABIDE"), Feedback.solved())
    with pytest.raises(OracleError):
        oracle.respond(state, W("ABASE"))


def test_absurd_oracle_prefers_fewer_exact_marks_on_ties():
    oracle = create_oracle("absurd")
    oracle.reset(words=[W("AAAAA"), W("BBBBB")])
    # both "-----" and "GGGGG" leave one word; the miss is chosen
    assert oracle.respond(KnowledgeState.empty(), W("AAAAA")) == Feedback.first()


def test_absurd_oracle_keeps_the_most_words_alive():
    oracle = create_oracle("absurd")
    lst = [W("AAAAA"), W("BBBBB"), W("CCCCC")]
    oracle.reset(words=lst)
    fb = oracle.respond(KnowledgeState.empty(), W("AAAAA"))
    nxt = apply_feedback(KnowledgeState.empty(), W("AAAAA"), fb)
    assert fb == Feedback.first()
    assert nxt is not None


def test_absurd_oracle_with_solver_uses_solver_ranks():
    lst = [W("AAAAA"), W("BBBBB"), W("CCCCC")]
    solver = Solver(lst)
    solver.run()
    oracle = create_oracle("absurd")
    oracle.reset(words=lst, solver=solver)
    assert oracle.respond(KnowledgeState.empty(), W("AAAAA")) == Feedback.first()

    # repeating a guess that was already answered with a miss: the same miss
    after = apply_feedback(KnowledgeState.empty(), W("AAAAA"), Feedback.first())
    assert oracle.respond(after, W("AAAAA")) == Feedback.first()


def test_absurd_oracle_without_candidates_raises():
    oracle = create_oracle("absurd")
    oracle.reset(words=[W("AAAAA"), W("BBBBB")])
    dead = apply_feedback(KnowledgeState.empty(), W("AAAAA"), Feedback.from_pattern("G----"))
    with pytest.raises(OracleError):
        oracle.respond(dead, W("BBBBB"))
