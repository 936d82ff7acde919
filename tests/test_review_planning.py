import pytest

from catalog_match.services.errors import InvalidTransitionError
from catalog_match.services.review import MatchState, derive_offer_state, plan_approval, plan_rejection


def _m(pk: int, status: str, score: float) -> MatchState:
    return MatchState(pk=pk, status=status, score=score)


class TestDeriveOfferState:
    def test_approved_wins(self):
        matches = [_m(1, "rejected", 0.9), _m(2, "approved", 0.4)]
        assert derive_offer_state(matches, current_best=None) == ("matched", 2)

    def test_keeps_open_provisional_pointer(self):
        matches = [_m(1, "candidate", 0.9), _m(2, "candidate", 0.4)]
        assert derive_offer_state(matches, current_best=2) == ("needs_review", 2)

    def test_repoints_to_best_remaining_candidate(self):
        matches = [_m(1, "rejected", 0.9), _m(2, "candidate", 0.4), _m(3, "candidate", 0.4)]
        assert derive_offer_state(matches, current_best=1) == ("needs_review", 2)

    def test_no_candidates_left(self):
        matches = [_m(1, "rejected", 0.9)]
        assert derive_offer_state(matches, current_best=1) == ("new", None)
        assert derive_offer_state([], current_best=None) == ("new", None)


class TestPlanApproval:
    def test_cascades_rejection_to_open_siblings(self):
        matches = [_m(1, "candidate", 0.5), _m(2, "candidate", 0.8), _m(3, "candidate", 0.3)]
        plan = plan_approval(matches, 1, current_best=2)
        assert plan.match_statuses == {1: "approved", 2: "rejected", 3: "rejected"}
        assert plan.cascade_rejected == [2, 3]
        assert plan.offer_status == "matched"
        assert plan.best_match_pk == 1

    def test_reapprove_is_noop(self):
        matches = [_m(1, "approved", 0.5), _m(2, "rejected", 0.8)]
        plan = plan_approval(matches, 1, current_best=1)
        assert plan.match_statuses == {1: "approved", 2: "rejected"}
        assert plan.cascade_rejected == []
        assert plan.offer_status == "matched"

    def test_rejected_match_cannot_be_approved(self):
        matches = [_m(1, "rejected", 0.5), _m(2, "candidate", 0.8)]
        with pytest.raises(InvalidTransitionError):
            plan_approval(matches, 1)

    def test_second_approval_is_refused(self):
        matches = [_m(1, "approved", 0.5), _m(2, "candidate", 0.8)]
        with pytest.raises(InvalidTransitionError) as exc_info:
            plan_approval(matches, 2)
        assert exc_info.value.detail["approved_pk"] == 1

    def test_unknown_match(self):
        with pytest.raises(ValueError):
            plan_approval([_m(1, "candidate", 0.5)], 99)


class TestPlanRejection:
    def test_rejecting_provisional_best_repoints(self):
        matches = [_m(1, "candidate", 0.9), _m(2, "candidate", 0.5), _m(3, "candidate", 0.5)]
        plan = plan_rejection(matches, 1, current_best=1)
        assert plan.match_statuses[1] == "rejected"
        assert (plan.offer_status, plan.best_match_pk) == ("needs_review", 2)
        assert plan.cascade_rejected == []

    def test_rejecting_other_candidate_keeps_pointer(self):
        matches = [_m(1, "candidate", 0.9), _m(2, "candidate", 0.5)]
        plan = plan_rejection(matches, 1, current_best=2)
        assert (plan.offer_status, plan.best_match_pk) == ("needs_review", 2)

    def test_rejecting_last_candidate_resets_offer(self):
        matches = [_m(1, "rejected", 0.9), _m(2, "candidate", 0.5)]
        plan = plan_rejection(matches, 2, current_best=2)
        assert (plan.offer_status, plan.best_match_pk) == ("new", None)

    def test_reject_again_is_noop(self):
        matches = [_m(1, "rejected", 0.9), _m(2, "candidate", 0.5)]
        plan = plan_rejection(matches, 1, current_best=2)
        assert plan.match_statuses == {1: "rejected", 2: "candidate"}
        assert (plan.offer_status, plan.best_match_pk) == ("needs_review", 2)

    def test_approved_match_cannot_be_rejected(self):
        matches = [_m(1, "approved", 0.9)]
        with pytest.raises(InvalidTransitionError):
            plan_rejection(matches, 1)
