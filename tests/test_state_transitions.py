"""
Tests for the reservation transition table.

Only five (from, to) pairs are legal; every other pair must be rejected
whoever asks, and each legal pair is gated to one party.
"""

import itertools

import pytest

from models.reservation import (
    APPROVED, CANCELLED, CLIENT, COMPLETED, DECLINED, HOST, PENDING,
    RESERVATION_STATUSES, TERMINAL_STATUSES, TRANSITIONS,
    get_transition, get_valid_transitions
)
from utils.errors import ForbiddenError, InvalidTransitionError

LEGAL = {
    (PENDING, APPROVED): HOST,
    (PENDING, DECLINED): HOST,
    (PENDING, CANCELLED): CLIENT,
    (APPROVED, CANCELLED): CLIENT,
    (APPROVED, COMPLETED): HOST,
}

ALL_PAIRS = list(itertools.product(RESERVATION_STATUSES, repeat=2))


class TestTransitionTable:

    def test_table_has_exactly_the_legal_pairs(self):
        assert set(TRANSITIONS) == set(LEGAL)

    @pytest.mark.parametrize('pair', ALL_PAIRS, ids=lambda p: f'{p[0]}->{p[1]}')
    def test_lookup_for_every_pair(self, pair):
        transition = get_transition(*pair)
        if pair in LEGAL:
            assert transition is not None
            assert transition.required_role == LEGAL[pair]
        else:
            assert transition is None

    def test_terminal_statuses_have_no_exits(self):
        for status in TERMINAL_STATUSES:
            assert get_valid_transitions(status) == []

    def test_valid_transitions_from_pending_and_approved(self):
        assert get_valid_transitions(PENDING) == [APPROVED, DECLINED, CANCELLED]
        assert get_valid_transitions(APPROVED) == [CANCELLED, COMPLETED]

    def test_completion_sends_no_notification(self):
        assert get_transition(APPROVED, COMPLETED).notify is None
        assert get_transition(PENDING, APPROVED).notify is not None


def _force_status(reservation_id, status):
    from database import get_db

    db = get_db()
    db.execute('UPDATE reservations SET status = ? WHERE id = ?', (status, reservation_id))
    db.commit()


@pytest.mark.parametrize('pair', [p for p in ALL_PAIRS if p not in LEGAL],
                         ids=lambda p: f'{p[0]}->{p[1]}')
def test_illegal_pairs_rejected_for_both_parties(service, listing_id, users, pair):
    """Illegal moves fail with InvalidTransitionError for host and client alike."""
    current, target = pair
    created = service.create(listing_id, users['client'], 'Carl', 5, '2026-03-11', '2026-03-13')
    _force_status(created['id'], current)

    for user_id in (users['host'], users['client']):
        with pytest.raises(InvalidTransitionError):
            service.update_status(created['id'], user_id, status=target)

    assert service.store.get(created['id'])['status'] == current


@pytest.mark.parametrize('pair', list(LEGAL), ids=lambda p: f'{p[0]}->{p[1]}')
def test_legal_pairs_rejected_for_wrong_party(service, listing_id, users, pair):
    current, target = pair
    created = service.create(listing_id, users['client'], 'Carl', 5, '2026-03-01', '2026-03-03')
    if current == APPROVED:
        service.update_status(created['id'], users['host'], status=APPROVED)

    wrong_party = users['client'] if LEGAL[pair] == HOST else users['host']
    with pytest.raises(ForbiddenError) as exc:
        service.update_status(created['id'], wrong_party, status=target)

    assert f'Only the {LEGAL[pair]} can' in exc.value.message
    assert service.store.get(created['id'])['status'] == current
