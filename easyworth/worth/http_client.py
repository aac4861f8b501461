"""Async JSON-RPC client for worths nodes."""

import logging
from itertools import count

import aiohttp
import ujson as json

from easyworth.exceptions import RPCError

log = logging.getLogger(__name__)

class HttpClient:
    """Minimal JSON-RPC 2.0 client over a shared aiohttp session.

    Calls are not retried; each is bounded by `timeout` seconds.
    """

    def __init__(self, url, timeout=10.0, session=None):
        self.url = url
        self._timeout = aiohttp.ClientTimeout(total=timeout)
        self._session = session
        self._ids = count(1)

    def _get_session(self):
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=self._timeout, json_serialize=json.dumps)
        return self._session

    @staticmethod
    def rpc_body(method, params, _id):
        """Build a JSON-RPC request body for `api.method`."""
        if '.' not in method:
            method = 'condenser_api.' + method
        return {'jsonrpc': '2.0', 'id': _id, 'method': method, 'params': params}

    async def exec(self, method, *params):
        """Execute a call and return its `result` field."""
        body = self.rpc_body(method, list(params), next(self._ids))
        log.debug("rpc %s %s", body['method'], body['params'])
        session = self._get_session()
        async with session.post(self.url, json=body) as resp:
            if resp.status != 200:
                raise RPCError(method, "http %d" % resp.status)
            payload = json.loads(await resp.text())

        if 'error' in payload:
            raise RPCError(method, payload['error'])
        if 'result' not in payload:
            raise RPCError(method, "malformed response: %s" % payload)
        return payload['result']

    async def close(self):
        if self._session is not None and not self._session.closed:
            await self._session.close()
