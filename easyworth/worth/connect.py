"""WorthConnect: OAuth2 delegated-signing service client.

The service holds users' posting keys; apps obtain an access token through
the login redirect and then ask the service to sign and broadcast
operations on the user's behalf.
"""

import logging
from urllib.parse import quote

import aiohttp
import ujson as json

from easyworth.exceptions import ConnectError

log = logging.getLogger(__name__)

class ConnectClient:
    """Thin async wrapper over the WorthConnect REST API."""

    def __init__(self, app, base_url, timeout=10.0, session=None):
        self.app = app
        self.base_url = base_url.rstrip('/')
        self.access_token = None
        self._timeout = aiohttp.ClientTimeout(total=timeout)
        self._session = session

    def login_url(self, scope, callback_url, state=None):
        """URL where users authorize this app."""
        assert self.app, "no WorthConnect app id configured"
        url = '%s/oauth2/authorize?client_id=%s&redirect_uri=%s' % (
            self.base_url, quote(self.app, safe=''), quote(callback_url, safe=''))
        if scope:
            url += '&scope=' + ','.join(scope)
        if state:
            url += '&state=' + quote(state, safe='')
        return url

    def _get_session(self):
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self._timeout)
        return self._session

    async def send(self, route, method='POST', body=None):
        """Call `/api/{route}` with the current access token."""
        headers = {'Accept': 'application/json, text/plain, */*',
                   'Content-Type': 'application/json'}
        if self.access_token:
            headers['Authorization'] = self.access_token
        url = '%s/api/%s' % (self.base_url, route)
        async with self._get_session().request(
                method, url, data=json.dumps(body or {}), headers=headers) as resp:
            text = await resp.text()
            status = resp.status
        data = json.loads(text) if text else {}
        err = data if isinstance(data, dict) else {}
        if status >= 400 or err.get('error'):
            raise ConnectError(err.get('error') or 'http %d' % status,
                               err.get('error_description'), status)
        return data

    async def broadcast(self, operations):
        log.info("broadcast %s", [op[0] for op in operations])
        return await self.send('broadcast', 'POST', {'operations': operations})

    async def me(self):
        return await self.send('me', 'POST')

    async def revoke_token(self):
        result = await self.send('oauth2/token/revoke', 'POST', {'token': self.access_token})
        self.access_token = None
        return result

    async def update_user_metadata(self, metadata):
        return await self.send('me', 'PUT', {'user_metadata': metadata})

    async def vote(self, voter, author, permlink, weight):
        """Vote with `weight` in basis points (-10000..10000)."""
        return await self.broadcast([['vote', {
            'voter': voter, 'author': author,
            'permlink': permlink, 'weight': weight}]])

    async def _custom_follow(self, account, payload):
        return await self.broadcast([['custom_json', {
            'required_auths': [],
            'required_posting_auths': [account],
            'id': 'follow',
            'json': json.dumps(payload)}]])

    async def reblog(self, account, author, permlink):
        return await self._custom_follow(account, ['reblog', {
            'account': account, 'author': author, 'permlink': permlink}])

    async def follow(self, follower, following):
        return await self._custom_follow(follower, ['follow', {
            'follower': follower, 'following': following, 'what': ['blog']}])

    async def unfollow(self, unfollower, unfollowing):
        return await self._custom_follow(unfollower, ['follow', {
            'follower': unfollower, 'following': unfollowing, 'what': []}])

    async def ignore(self, follower, following):
        return await self._custom_follow(follower, ['follow', {
            'follower': follower, 'following': following, 'what': ['ignore']}])

    async def close(self):
        if self._session is not None and not self._session.closed:
            await self._session.close()
