"""Tests for post payout helpers."""

import pytest

from easyworth.utils.post import payout_details, display_payout


def _post(**kwargs):
    post = {
        'parent_author': '',
        'max_accepted_payout': '1000000.000 WBD',
        'pending_payout_value': '0.000 WBD',
        'promoted': '0.000 WBD',
        'total_payout_value': '0.000 WBD',
        'curator_payout_value': '0.000 WBD',
        'cashout_time': '2018-03-19T03:43:45',
        'active_votes': [],
    }
    post.update(kwargs)
    return post


def test_pending_post():
    details = payout_details(_post(pending_payout_value='10.000 WBD'))
    assert details['payout'] == pytest.approx(10.0)
    assert details['payout_limit_hit'] is False
    assert details['potential_payout'] == pytest.approx(10.0)
    assert details['cashout_in_time'] == '2018-03-19T03:43:45.000Z'
    assert 'max_accepted_payout' not in details
    assert 'past_payouts' not in details


def test_paid_out_post():
    details = payout_details(_post(total_payout_value='3.000 WBD',
                                   curator_payout_value='1.000 WBD',
                                   cashout_time='1969-12-31T23:59:59'))
    assert details['payout'] == pytest.approx(4.0)
    assert details['past_payouts'] == pytest.approx(4.0)
    assert details['author_payouts'] == pytest.approx(3.0)
    assert details['curator_payouts'] == pytest.approx(1.0)
    assert 'potential_payout' not in details


def test_declined_payout():
    details = payout_details(_post(max_accepted_payout='0.000 WBD',
                                   pending_payout_value='2.000 WBD'))
    assert details['payout'] == 0.0
    assert details['payout_limit_hit'] is True
    assert details['is_payout_declined'] is True


def test_capped_payout():
    details = payout_details(_post(max_accepted_payout='5.000 WBD',
                                   pending_payout_value='8.000 WBD',
                                   promoted='1.500 WBD'))
    assert details['payout'] == pytest.approx(5.0)
    assert details['payout_limit_hit'] is True
    assert details['max_accepted_payout'] == pytest.approx(5.0)
    assert details['promotion_cost'] == pytest.approx(1.5)


def test_unvoted_comment_has_no_active_cashout():
    details = payout_details(_post(parent_author='bob'))
    assert 'cashout_in_time' not in details


def test_display_payout():
    assert display_payout(_post(pending_payout_value='1.250 WBD',
                                total_payout_value='9.000 WBD')) == pytest.approx(1.25)
    assert display_payout(_post(total_payout_value='9.000 WBD',
                                curator_payout_value='2.000 WBD')) == pytest.approx(11.0)
