"""Chain properties cache: reward fund, vesting pool, bandwidth, rates."""

import asyncio
import logging
from collections import namedtuple
from time import perf_counter as perf
from time import monotonic

from easyworth.exceptions import PropertiesUnavailable, RefreshFailed
from easyworth.utils.normalize import parse_amount

log = logging.getLogger(__name__)

NATIVE_SYMBOL = 'WORTH'
STABLE_SYMBOL = 'WBD'

_ChainProperties = namedtuple('ChainProperties', [
    'reward_balance', 'recent_claims', 'total_vesting_fund',
    'total_vesting_shares', 'max_virtual_bandwidth', 'native_rate',
    'stable_rate', 'fetched_at'])

class ChainProperties(_ChainProperties):
    """Immutable snapshot of chain-wide values used by derived metrics.

    `native_rate` and `stable_rate` are USD prices of WORTH and WBD.
    `fetched_at` is a monotonic clock reading.
    """
    __slots__ = ()

    @classmethod
    def from_api(cls, reward_fund, dgpo, native_rate, stable_rate, fetched_at=None):
        """Build a snapshot from raw get_reward_fund/dgpo responses."""
        return cls(
            reward_balance=parse_amount(reward_fund['reward_balance']),
            recent_claims=parse_amount(reward_fund['recent_claims']),
            total_vesting_fund=parse_amount(dgpo['total_vesting_fund_worth']),
            total_vesting_shares=parse_amount(dgpo['total_vesting_shares']),
            max_virtual_bandwidth=int(dgpo['max_virtual_bandwidth']),
            native_rate=float(native_rate),
            stable_rate=float(stable_rate),
            fetched_at=monotonic() if fetched_at is None else fetched_at)

    @property
    def worth_per_mvest(self):
        """WORTH backing one million vesting shares."""
        return self.total_vesting_fund / self.total_vesting_shares * 1e6

    def shares_to_native_value(self, rshares):
        """USD value of `rshares` reward shares at current fund and price."""
        return (float(rshares) * self.reward_balance / self.recent_claims
                * self.native_rate)

class ChainState:
    """Holds the last good ChainProperties for one client.

    Two states: empty (no successful refresh yet) and ready. A refresh
    swaps in a fully built snapshot or leaves the old one in place.
    """

    def __init__(self, worth, prices, max_age=60.0, timeout=10.0):
        self._worth = worth
        self._prices = prices
        self._max_age = max_age
        self._timeout = timeout
        self._props = None
        self._inflight = None

    @property
    def is_ready(self):
        return self._props is not None

    @property
    def props(self):
        """Current snapshot; raises PropertiesUnavailable when empty."""
        if self._props is None:
            raise PropertiesUnavailable("chain properties have not been fetched")
        return self._props

    def is_stale(self):
        if self._props is None:
            return True
        if self._max_age is None:
            return False
        return monotonic() - self._props.fetched_at > self._max_age

    async def ensure(self, refresh=None):
        """Return a usable snapshot according to the refresh policy.

        refresh=True always refetches, refresh=False never does, and
        refresh=None refetches only when empty or older than max_age.
        """
        if refresh or (refresh is None and self.is_stale()):
            await self.refresh()
        return self.props

    async def refresh(self):
        """Refetch all chain properties; concurrent calls share one fetch."""
        if self._inflight is None:
            self._inflight = asyncio.ensure_future(self._refresh())
            self._inflight.add_done_callback(self._refresh_done)
        return await asyncio.shield(self._inflight)

    def _refresh_done(self, task):
        # runs even when every awaiting caller was cancelled
        if self._inflight is task:
            self._inflight = None
        if not task.cancelled():
            # failure was already logged in _refresh
            task.exception()

    async def _refresh(self):
        start_time = perf()
        results = await asyncio.gather(
            self._fetch(self._worth.get_reward_fund('post')),
            self._fetch(self._worth.get_dynamic_global_properties()),
            self._fetch(self._prices.get_price(NATIVE_SYMBOL)),
            self._fetch(self._prices.get_price(STABLE_SYMBOL)),
            return_exceptions=True)
        try:
            for result in results:
                if isinstance(result, BaseException):
                    raise result
            props = ChainProperties.from_api(*results)
        except Exception as e:
            log.warning("chain properties refresh failed: %s", repr(e))
            raise RefreshFailed("chain properties refresh failed: %r" % e) from e

        self._props = props
        ms = (perf() - start_time) * 1000
        log.info("[PROPS] refreshed -- %.3f WORTH/MVESTS, $%.4f/WORTH,"
                 " $%.4f/WBD --% 5dms", props.worth_per_mvest,
                 props.native_rate, props.stable_rate, ms)
        return props

    async def _fetch(self, coro):
        return await asyncio.wait_for(coro, self._timeout)

    def gdgp_extended(self):
        """Summary of the cached snapshot (worth_per_mvest, usd rates)."""
        props = self.props
        return {
            'worth_per_mvest': props.worth_per_mvest,
            'usd_per_worth': props.native_rate,
            'usd_per_wbd': props.stable_rate,
            'wbd_per_worth': props.native_rate / props.stable_rate,
        }
