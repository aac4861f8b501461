"""Tests for derived account metrics."""

from datetime import timedelta

import pytest

from easyworth.utils import account as acct


class TestVotingPower:

    def test_regenerates_linearly(self, account, now):
        account = dict(account, voting_power=5000, last_vote_time='2018-03-11T12:00:00')
        # one day regenerates 2000 bp
        assert acct.voting_power(account, now) == pytest.approx(70.0)

    def test_saturates_after_five_days(self, account, now):
        for start in (0, 1234, 9000, 10000):
            fresh = dict(account, voting_power=start, last_vote_time='2018-03-07T12:00:00')
            assert acct.voting_power(fresh, now) == 100.0
            assert acct.voting_power(fresh, now + timedelta(days=30)) == 100.0

    def test_monotonic_in_time(self, account, now):
        account = dict(account, voting_power=2500, last_vote_time='2018-03-12T00:00:00')
        samples = [acct.voting_power(account, now + timedelta(hours=h))
                   for h in range(0, 24 * 6, 6)]
        assert samples == sorted(samples)
        assert samples[-1] == 100.0


class TestVestingShares:

    def test_net_vesting_shares(self, account):
        account = dict(account,
                       received_vesting_shares='500.000000 VESTS',
                       delegated_vesting_shares='200.000000 VESTS')
        assert acct.net_vesting_shares(account) == pytest.approx(1000300.0)

    def test_over_delegated_is_negative(self, account):
        account = dict(account,
                       vesting_shares='100.000000 VESTS',
                       delegated_vesting_shares='300.000000 VESTS')
        assert acct.net_vesting_shares(account) == pytest.approx(-200.0)

    def test_total_delegated_native(self, account, props):
        account = dict(account,
                       received_vesting_shares='3000000.000000 VESTS',
                       delegated_vesting_shares='1000000.000000 VESTS')
        assert acct.total_delegated_native(account, props) == pytest.approx(1000.0)


class TestVoteValue:

    def test_full_vote(self, account, props, now):
        assert acct.vote_value(account, props, 100.0, now) == pytest.approx(8.0)

    def test_scales_with_weight(self, account, props, now):
        assert acct.vote_value(account, props, 25.0, now) == pytest.approx(2.0)

    def test_downvote_is_negative(self, account, props, now):
        assert acct.vote_value(account, props, -50.0, now) == pytest.approx(-4.0)

    def test_scales_with_voting_power(self, account, props, now):
        account = dict(account, voting_power=5000, last_vote_time='2018-03-12T12:00:00')
        assert acct.vote_value(account, props, 100.0, now) == pytest.approx(4.0)

    def test_weight_out_of_range(self, account, props, now):
        with pytest.raises(ValueError):
            acct.vote_value(account, props, 150.0, now)


class TestBandwidth:

    def test_half_window(self, account, props, now):
        bw = acct.bandwidth(account, props, now)
        assert bw.bytes_allocated == 1000
        assert bw.bytes_used == 500
        assert bw.bytes_remaining == 500
        assert bw.percent_used == pytest.approx(50.0)
        assert bw.percent_remaining == pytest.approx(50.0)

    def test_fully_decayed(self, account, props, now):
        account = dict(account, last_bandwidth_update='2018-03-01T00:00:00')
        bw = acct.bandwidth(account, props, now)
        assert bw.bytes_used == 0
        assert bw.percent_used == 0
        assert bw.bytes_remaining == bw.bytes_allocated

    def test_no_allocation(self, account, props, now):
        account = dict(account, vesting_shares='0.000000 VESTS')
        bw = acct.bandwidth(account, props, now)
        assert bw.bytes_allocated == 0
        assert bw.percent_used is None
        assert bw.percent_remaining is None

    def test_humanize(self, account, props, now):
        out = acct.bandwidth(account, props, now).humanize(2)
        assert out['percents'] == {'used': 50.0, 'remaining': 50.0}
        assert out['bytes'] == {'used': '500 B', 'remaining': '500 B',
                                'allocated': '1000 B'}


def test_account_value(account, props):
    # 2.0 * (10 + 500) + 5 * 1.0
    assert acct.account_value(account, props) == pytest.approx(1025.0)
