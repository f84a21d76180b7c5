import pytest
from packages.engine import (
    Feedback, KnowledgeState, NO_SOLUTION, PENDING, Word, all_feedbacks,
    apply_feedback, filter_candidates, score,
)
from packages.minimax import Solver, SolverStalled, new_solver

W = Word.from_text


def words(*texts):
    return [W(t) for t in texts]


def test_two_disjoint_words_take_one_guess():
    solver = Solver(words("AAAAA", "BBBBB"))
    assert solver.run() == 1
    assert solver.player_value(KnowledgeState.empty()) == 1


def test_three_word_list_is_separated_by_one_guess():
    lst = words("ABIDE", "ABASE", "BEACH")
    solver = Solver(lst)
    assert solver.run() == 1
    assert solver.server_cache[(KnowledgeState.empty(), W("ABIDE"))] == 1
    assert solver.best_guess(KnowledgeState.empty()) == W("ABIDE")


def test_three_disjoint_words_need_two_guesses():
    solver = Solver(words("AAAAA", "BBBBB", "CCCCC"))
    assert solver.run() == 2

    # value of the state reached after the adversary's "all absent" answer
    after = apply_feedback(KnowledgeState.empty(), W("AAAAA"), Feedback.first())
    assert solver.player_cache[after] == 1
    # repeating the same guess there cannot make progress
    assert solver.server_cache[(after, W("AAAAA"))] == NO_SOLUTION
    assert solver.best_guess(after) == W("BBBBB")


def test_single_word_is_already_known():
    solver = Solver(words("CRANE"))
    assert solver.run() == 0
    assert solver.rounds == 0
    assert solver.best_guess(KnowledgeState.empty()) == W("CRANE")


def test_state_without_candidates_has_no_solution():
    solver = Solver(words("AAAAA", "BBBBB"))
    dead = apply_feedback(KnowledgeState.empty(), W("AAAAA"), Feedback.from_pattern("G----"))
    assert dead is not None
    assert solver.player_value(dead) == NO_SOLUTION
    assert solver.best_guess(dead) is None


def test_resolved_guess_is_a_zero_cost_leaf():
    solver = Solver(words("ABIDE", "ABASE", "BEACH"))
    solved = apply_feedback(KnowledgeState.empty(), W("ABASE"), Feedback.solved())
    assert solver.server_value(solved, W("ABASE")) == 0


def test_guess_leaving_state_unchanged_is_useless():
    solver = Solver(words("AAAAA", "BBBBB", "CCCCC"))
    after = apply_feedback(KnowledgeState.empty(), W("AAAAA"), Feedback.first())
    assert solver.server_value(after, W("AAAAA")) == NO_SOLUTION


def test_first_attempt_is_pending_without_recursing():
    solver = Solver(words("AAAAA", "BBBBB", "CCCCC"))
    root = KnowledgeState.empty()
    assert solver.player_value(root) == PENDING
    assert root not in solver.player_cache
    assert solver.pending_work() == (0, 3)


def test_second_run_uses_cached_tables():
    solver = Solver(words("AAAAA", "BBBBB", "CCCCC"))
    assert solver.run() == 2
    rounds = solver.rounds
    assert solver.run() == 2
    assert solver.rounds == rounds


def test_round_callback_sees_every_round():
    seen = []
    solver = Solver(words("AAAAA", "BBBBB", "CCCCC"), on_round=seen.append)
    solver.run()
    assert [s.round for s in seen] == list(range(1, solver.rounds + 1))
    assert seen[-1].player_queue == 0 and seen[-1].server_queue == 0


def test_opening_ranks_cover_every_word():
    solver = Solver(words("AAAAA", "BBBBB", "CCCCC"))
    ranks = dict(solver.opening_ranks())
    assert ranks == {W("AAAAA"): 2, W("BBBBB"): 2, W("CCCCC"): 2}


def test_stalled_fixpoint_raises(monkeypatch):
    solver = Solver(words("AAAAA", "BBBBB"))
    monkeypatch.setattr(solver, "_server_decide", lambda state, word: PENDING)
    with pytest.raises(SolverStalled):
        solver.run()


def test_round_limit_raises():
    solver = Solver(words("AAAAA", "BBBBB", "CCCCC"), max_rounds=1)
    with pytest.raises(SolverStalled):
        solver.run()


def test_empty_word_list_is_rejected():
    with pytest.raises(ValueError):
        Solver([])


def test_independent_solvers_do_not_share_tables():
    a = new_solver(words("AAAAA", "BBBBB"))
    b = new_solver(words("AAAAA", "BBBBB", "CCCCC"))
    assert a.run() == 1
    assert b.run() == 2
    assert a.player_cache is not b.player_cache


def test_candidates_filter_the_fixed_list():
    solver = Solver(words("CRANE", "LEVEL", "BELLE", "EERIE"))
    assert solver.candidates(KnowledgeState.empty()) == words("CRANE", "LEVEL", "BELLE", "EERIE")
    after = apply_feedback(KnowledgeState.empty(), W("BELLE"), score(W("LEVEL"), W("BELLE")))
    assert solver.candidates(after) == words("LEVEL")


def reference_minimax(lst):
    """Plain memoized recursion over the same rules as the round-based solver."""
    memo = {}

    def player(state):
        if state in memo:
            return memo[state]
        cands = filter_candidates(lst, state)
        if not cands:
            value = None
        elif len(cands) == 1:
            value = 0
        else:
            finite = [v for v in (server(state, w) for w in lst) if v is not None]
            value = min(finite) if finite else None
        memo[state] = value
        return value

    def server(state, guess):
        if state.final() == guess:
            return 0
        worst = None
        for fb in all_feedbacks():
            nxt = apply_feedback(state, guess, fb)
            if nxt is None:
                continue
            if nxt == state:
                return None
            v = player(nxt)
            if v is not None and (worst is None or v + 1 > worst):
                worst = v + 1
        return worst

    return player, server


@pytest.mark.parametrize("texts", [
    ("CRANE", "LEVEL", "BELLE", "EERIE"),
    ("ABIDE", "ABASE", "BEACH", "ABBEY"),
    ("AAAAA", "BBBBB", "CCCCC", "DDDDD"),
])
def test_round_based_values_match_plain_recursion(texts):
    lst = words(*texts)
    player, server = reference_minimax(lst)
    root = KnowledgeState.empty()

    solver = Solver(lst)
    assert solver.run() == player(root)
    for w, rank in solver.opening_ranks():
        expected = server(root, w)
        assert rank == (NO_SOLUTION if expected is None else expected)
