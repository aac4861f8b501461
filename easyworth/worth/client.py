"""Async worths API client."""

import logging

from funcy import last
from toolz import partition_all

from easyworth.worth.http_client import HttpClient

log = logging.getLogger(__name__)

ACCOUNTS_BATCH = 1000
FOLLOWS_PAGE = 1000

class WorthClient:
    """Handles upstream calls to a worths node."""

    def __init__(self, url, timeout=10.0, client=None):
        self._client = client or HttpClient(url, timeout=timeout)

    async def get_reward_fund(self, name='post'):
        """Get reward fund (`reward_balance`, `recent_claims`)."""
        return await self._client.exec('get_reward_fund', name)

    async def get_dynamic_global_properties(self):
        return await self._client.exec('get_dynamic_global_properties')

    async def get_content(self, author, permlink):
        """Get a single post or comment. Missing content has an empty body."""
        return await self._client.exec('get_content', author, permlink)

    async def content_exists(self, author, permlink):
        content = await self.get_content(author, permlink)
        return bool(content and content.get('body'))

    async def get_accounts(self, accounts):
        """Fetch account objects, batching large lists."""
        assert accounts, "no accounts passed to get_accounts"
        ret = []
        for batch in partition_all(ACCOUNTS_BATCH, accounts):
            ret.extend(await self._client.exec('get_accounts', list(batch)))
        return ret

    async def get_active_votes(self, author, permlink):
        return await self._client.exec('get_active_votes', author, permlink)

    async def get_content_replies(self, author, permlink):
        return await self._client.exec('get_content_replies', author, permlink)

    async def get_follow_count(self, account):
        return await self._client.exec('get_follow_count', account)

    async def get_followers(self, account):
        """All accounts following `account` (blog follows)."""
        total = (await self.get_follow_count(account))['follower_count']
        return await self._paged('get_followers', account, 'follower', total)

    async def get_following(self, account):
        """All accounts `account` follows (blog follows)."""
        total = (await self.get_follow_count(account))['following_count']
        return await self._paged('get_following', account, 'following', total)

    async def _paged(self, method, account, field, total):
        # each page starts at (and repeats) the last row of the previous one
        ret = []
        start = ''
        while len(ret) < total:
            page = await self._client.exec(method, account, start, 'blog', FOLLOWS_PAGE)
            if ret and page and page[0][field] == start:
                page = page[1:]
            if not page:
                break
            ret.extend(page)
            start = last(ret)[field]
        log.debug("%s(%s): %d of %d", method, account, len(ret), total)
        return ret

    async def close(self):
        await self._client.close()
