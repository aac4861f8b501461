"""Shared fixtures for easyworth tests."""

from datetime import datetime
from unittest.mock import AsyncMock

import pytest

from easyworth.state import ChainProperties

NOW = datetime(2018, 3, 12, 12, 0, 0)

REWARD_FUND = {
    'name': 'post',
    'reward_balance': '800000.000 WORTH',
    'recent_claims': '4000000000000000',
}

DGPO = {
    'head_block_number': 20000000,
    'total_vesting_fund_worth': '200000000.000 WORTH',
    'total_vesting_shares': '400000000000.000000 VESTS',
    'max_virtual_bandwidth': '400000000000000',
}

RATES = {'WORTH': 2.0, 'WBD': 1.0}


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def props():
    """Snapshot matching REWARD_FUND/DGPO/RATES."""
    return ChainProperties.from_api(REWARD_FUND, DGPO, RATES['WORTH'],
                                    RATES['WBD'], fetched_at=0.0)


@pytest.fixture
def account():
    """Account with 1M VESTS, full voting power, half-used bandwidth."""
    return {
        'name': 'alice',
        'balance': '10.000 WORTH',
        'wbd_balance': '5.000 WBD',
        'vesting_shares': '1000000.000000 VESTS',
        'received_vesting_shares': '0.000000 VESTS',
        'delegated_vesting_shares': '0.000000 VESTS',
        'voting_power': 10000,
        'last_vote_time': '2018-03-01T12:00:00',
        'average_bandwidth': '1000000000',
        'last_bandwidth_update': '2018-03-09T00:00:00',
    }


@pytest.fixture
def worth():
    """Worth node double serving REWARD_FUND and DGPO."""
    worth = AsyncMock()
    worth.get_reward_fund.return_value = dict(REWARD_FUND)
    worth.get_dynamic_global_properties.return_value = dict(DGPO)
    worth.content_exists.return_value = False
    return worth


@pytest.fixture
def prices():
    """Price feed double serving RATES."""
    prices = AsyncMock()

    async def get_price(symbol, quote='USD'):
        return RATES[symbol]

    prices.get_price.side_effect = get_price
    return prices
