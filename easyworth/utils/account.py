"""Derived account metrics: voting power, stake, bandwidth, value."""

from collections import namedtuple

from easyworth.utils.normalize import (
    parse_amount, parse_time, vests_to_native, bytes_to_human, utcnow)

# voting power regenerates 100% (10000 bp) over 5 days
VOTE_REGENERATION_SECONDS = 432000
MAX_VOTING_POWER = 10000
VOTE_DUST_DIVISOR = 50

BANDWIDTH_AVERAGE_WINDOW_SECONDS = 60 * 60 * 24 * 7
BANDWIDTH_PRECISION = 1000000

def _elapsed(since, now=None):
    now = now or utcnow()
    return (now - parse_time(since)).total_seconds()

def voting_power(account, now=None):
    """Current voting power as a percentage in [0, 100]."""
    elapsed = max(_elapsed(account['last_vote_time'], now), 0)
    vpow = account['voting_power'] + MAX_VOTING_POWER * elapsed / VOTE_REGENERATION_SECONDS
    return min(vpow, MAX_VOTING_POWER) / 100

def net_vesting_shares(account):
    """Own plus received minus delegated VESTS. May be negative."""
    return (parse_amount(account['vesting_shares'])
            + parse_amount(account['received_vesting_shares'])
            - parse_amount(account['delegated_vesting_shares']))

def total_delegated_native(account, props):
    """Net WORTH delegated to the account (received minus delegated out)."""
    received = vests_to_native(account['received_vesting_shares'],
                               props.total_vesting_shares,
                               props.total_vesting_fund)
    delegated = vests_to_native(account['delegated_vesting_shares'],
                                props.total_vesting_shares,
                                props.total_vesting_fund)
    return received - delegated

def vote_rshares(account, weight=100.0, now=None):
    """Reward shares a vote at `weight` percent (-100..100) would add."""
    if not -100 <= weight <= 100:
        raise ValueError("vote weight out of range: %r" % weight)
    power_bp = voting_power(account, now) * 100
    weight_bp = weight * 100
    vests = int(net_vesting_shares(account) * 1e6)
    power = power_bp * weight_bp / 10000 / VOTE_DUST_DIVISOR
    return power * vests / 10000

def vote_value(account, props, weight=100.0, now=None):
    """Estimated USD value of a vote by `account` at `weight` percent.

    Requires a complete ChainProperties snapshot.
    """
    rshares = vote_rshares(account, weight, now)
    return rshares / props.recent_claims * props.reward_balance * props.native_rate

class Bandwidth(namedtuple('Bandwidth', [
        'percent_used', 'percent_remaining', 'bytes_used',
        'bytes_remaining', 'bytes_allocated'])):
    """Account bandwidth usage. Percents are None when nothing is allocated."""
    __slots__ = ()

    def humanize(self, decimals=2):
        """Percents rounded, byte counts formatted with units."""
        def _pct(value):
            return None if value is None else round(value, decimals)
        return {
            'percents': {
                'used': _pct(self.percent_used),
                'remaining': _pct(self.percent_remaining)},
            'bytes': {
                'used': bytes_to_human(self.bytes_used, decimals),
                'remaining': bytes_to_human(self.bytes_remaining, decimals),
                'allocated': bytes_to_human(self.bytes_allocated, decimals)}}

def bandwidth(account, props, now=None):
    """Bandwidth allocated to and used by `account`.

    Allocation is the account's share of total VESTS applied to the
    network's max virtual bandwidth. Usage decays linearly to zero over
    the 7-day averaging window.
    """
    vests = (parse_amount(account['vesting_shares'])
             + parse_amount(account['received_vesting_shares']))
    average = int(account['average_bandwidth'])
    elapsed = _elapsed(account['last_bandwidth_update'], now)

    allocated = props.max_virtual_bandwidth * vests / props.total_vesting_shares
    allocated = round(allocated / BANDWIDTH_PRECISION)

    used = 0
    if elapsed < BANDWIDTH_AVERAGE_WINDOW_SECONDS:
        used = ((BANDWIDTH_AVERAGE_WINDOW_SECONDS - elapsed) * average
                / BANDWIDTH_AVERAGE_WINDOW_SECONDS)
    used = round(used / BANDWIDTH_PRECISION)

    if allocated:
        percent_used = 100 * used / allocated
        percent_remaining = 100 - percent_used
    else:
        percent_used = percent_remaining = None

    return Bandwidth(percent_used=percent_used,
                     percent_remaining=percent_remaining,
                     bytes_used=used,
                     bytes_remaining=allocated - used,
                     bytes_allocated=allocated)

def account_value(account, props):
    """Estimated USD value of liquid WORTH, WORTH Power, and WBD."""
    worth_power = vests_to_native(account['vesting_shares'],
                                  props.total_vesting_shares,
                                  props.total_vesting_fund)
    return (props.native_rate * (parse_amount(account['balance']) + worth_power)
            + parse_amount(account['wbd_balance']) * props.stable_rate)
