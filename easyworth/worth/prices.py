"""USD price quotes for chain currencies."""

import logging

import aiohttp
import ujson as json

from easyworth.exceptions import EasyWorthError

log = logging.getLogger(__name__)

class PriceClient:
    """Fetches spot prices from a cryptocompare-style `/data/price` API."""

    def __init__(self, url, timeout=10.0, session=None):
        self.url = url
        self._timeout = aiohttp.ClientTimeout(total=timeout)
        self._session = session

    def _get_session(self):
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self._timeout)
        return self._session

    async def get_price(self, symbol, quote='USD'):
        """Price of one `symbol` in `quote` currency."""
        params = {'fsym': symbol, 'tsyms': quote}
        async with self._get_session().get(self.url, params=params) as resp:
            if resp.status != 200:
                raise EasyWorthError("price quote for %s: http %d" % (symbol, resp.status))
            data = json.loads(await resp.text())
        if quote not in data:
            raise EasyWorthError("price quote for %s: %s" % (symbol, data))
        log.debug("price %s/%s: %s", symbol, quote, data[quote])
        return float(data[quote])

    async def close(self):
        if self._session is not None and not self._session.closed:
            await self._session.close()
