"""EasyWorth: one object for sessions, actions, reads and metrics."""

import logging
from enum import Enum
from urllib.parse import urlparse, parse_qs

import ujson as json
from funcy import merge

from easyworth.conf import Conf
from easyworth.state import ChainState
from easyworth.ordering import OrderBy, order_votes, order_comments
from easyworth.permlink import create_permlink
from easyworth.utils import account as acct
from easyworth.utils.normalize import rep_log10
from easyworth.utils.post import payout_details

log = logging.getLogger(__name__)

MAX_ACCEPTED_PAYOUT = '1000000.000 WBD'
DECLINED_PAYOUT = '0.000 WBD'

class RewardOption(Enum):
    """Author reward split for a new post."""
    CENT_PERCENT_POWER = '100'
    FIFTY_PERCENT_POWER_WBD = '50'
    NONE = '0'

class EasyWorth:
    """Client-side convenience layer for a Wortheum app.

    Owns its chain properties cache; metric methods accept `refresh`:
    True to force a refetch, False to use only what is cached, None
    (default) to refetch when the cache is empty or stale.
    """

    def __init__(self, conf=None, worth=None, prices=None, connect=None):
        conf = conf or Conf()
        self._conf = conf
        self.app_name = conf.get('app_name')
        self.app_version = conf.get('app_version')
        self.account = None
        self.worth = worth or conf.worth()
        self.prices = prices or conf.prices()
        self.connect = connect or conf.connect()
        self.state = ChainState(self.worth, self.prices,
                                max_age=conf.get('props_max_age'),
                                timeout=conf.get('http_timeout'))

    async def close(self):
        for client in (self.worth, self.prices, self.connect):
            await client.close()

    # session

    def login_url(self, scope, callback_url, state=None):
        return self.connect.login_url(scope, callback_url, state)

    def parse_returned_url(self, url):
        """Read account, access token and expiry from the login redirect.

        Sets the account and token on this client.
        """
        query = parse_qs(urlparse(url).query)
        try:
            access_token = query['access_token'][0]
            expires_in = query['expires_in'][0]
            account = query['username'][0]
        except KeyError as e:
            raise ValueError("missing %s in returned url" % e)
        log.info("logged in as @%s", account)
        self.set_access_token(access_token)
        self.set_account(account)
        return {'account': account,
                'access_token': access_token,
                'expires_in': expires_in}

    def set_account(self, account):
        self.account = account

    def set_access_token(self, access_token):
        self.connect.access_token = access_token

    async def logout(self):
        return await self.connect.revoke_token()

    async def me(self):
        return await self.connect.me()

    async def update_user_metadata(self, metadata):
        return await self.connect.update_user_metadata(metadata)

    # actions

    async def upvote(self, author, permlink, weight):
        """Vote on a post; `weight` is a percentage (e.g. 49.99)."""
        return await self.connect.vote(self.account, author, permlink,
                                       int(round(weight * 100)))

    async def downvote(self, author, permlink, weight):
        return await self.upvote(author, permlink, -abs(weight))

    def _comment_options(self, permlink, reward_option, beneficiaries):
        options = {
            'author': self.account,
            'permlink': permlink,
            'allow_votes': True,
            'allow_curation_rewards': True,
            'max_accepted_payout': MAX_ACCEPTED_PAYOUT,
            'percent_worth_dollars': 10000,
        }
        if reward_option == RewardOption.NONE:
            options['max_accepted_payout'] = DECLINED_PAYOUT
        elif reward_option == RewardOption.CENT_PERCENT_POWER:
            options['percent_worth_dollars'] = 0

        if beneficiaries:
            # chain requires beneficiaries sorted by account name
            ordered = sorted(beneficiaries, key=lambda b: b['account'].upper())
            options['extensions'] = [[0, {'beneficiaries': [
                {'account': b['account'], 'weight': int(round(b['weight'] * 100))}
                for b in ordered]}]]
        return options

    def post_operations(self, parent_author, parent_permlink, permlink, title,
                        body, tags=None, reward_option=None,
                        beneficiaries=None, json_metadata=None):
        """Build `comment` (and `comment_options` when needed) ops."""
        if reward_option is not None:
            reward_option = RewardOption(reward_option)
        beneficiaries = beneficiaries or []
        metadata = merge({'tags': list(tags or []),
                          'app': '%s/%s' % (self.app_name, self.app_version),
                          'format': 'markdown'},
                         json_metadata or {})

        ops = [['comment', {
            'parent_author': parent_author,
            'parent_permlink': parent_permlink,
            'author': self.account,
            'permlink': permlink,
            'title': title,
            'body': body,
            'json_metadata': json.dumps(metadata)}]]

        if reward_option in (RewardOption.NONE, RewardOption.CENT_PERCENT_POWER) or beneficiaries:
            ops.append(['comment_options', self._comment_options(
                permlink, reward_option, beneficiaries)])
        return ops

    async def post_operation(self, *args, **kwargs):
        """Broadcast a new or edited post/comment."""
        return await self.connect.broadcast(self.post_operations(*args, **kwargs))

    async def create_post(self, title, body, category, tags=None,
                          reward_option=RewardOption.FIFTY_PERCENT_POWER_WBD,
                          beneficiaries=None, json_metadata=None):
        """Publish a post in `category`; the category leads the tag list."""
        tags = [category] + list(tags or [])
        permlink = await self.create_permlink(title)
        return await self.post_operation('', category, permlink, title, body,
                                         tags, reward_option, beneficiaries,
                                         json_metadata)

    async def update_post(self, permlink, title, body, tags, json_metadata=None,
                          category=None):
        """Edit a post; the category is looked up when not given."""
        if not category:
            content = await self.get_content(self.account, permlink)
            category = content.get('parent_permlink')
            if not category:
                raise ValueError("post @%s/%s not found" % (self.account, permlink))
        return await self.post_operation('', category, permlink, title, body,
                                         tags, None, [], json_metadata)

    async def create_comment(self, parent_author, parent_permlink, body):
        permlink = await self.create_permlink('', parent_author, parent_permlink)
        return await self.post_operation(parent_author, parent_permlink, permlink,
                                         '', body, [],
                                         RewardOption.FIFTY_PERCENT_POWER_WBD)

    async def update_comment(self, permlink, body, parent_author=None,
                             parent_permlink=None):
        """Edit a comment; its parent is looked up when not given."""
        if not (parent_author and parent_permlink):
            content = await self.get_content(self.account, permlink)
            if not content.get('parent_permlink'):
                raise ValueError("comment @%s/%s not found" % (self.account, permlink))
            parent_author = content['parent_author']
            parent_permlink = content['parent_permlink']
        return await self.post_operation(parent_author, parent_permlink,
                                         permlink, '', body)

    async def delete_post_or_comment(self, permlink):
        return await self.connect.broadcast([['delete_comment', {
            'author': self.account, 'permlink': permlink}]])

    async def reblog(self, author, permlink):
        return await self.connect.reblog(self.account, author, permlink)

    async def follow(self, author):
        return await self.connect.follow(self.account, author)

    async def unfollow(self, author):
        return await self.connect.unfollow(self.account, author)

    async def ignore(self, author):
        return await self.connect.ignore(self.account, author)

    # reads

    async def get_content(self, author, permlink):
        return await self.worth.get_content(author, permlink)

    async def get_user_account(self, username):
        return await self.get_user_accounts([username])

    async def get_user_accounts(self, usernames):
        return await self.worth.get_accounts(usernames)

    async def get_followers(self, username):
        return await self.worth.get_followers(username)

    async def get_following(self, username):
        return await self.worth.get_following(username)

    async def get_active_votes(self, author, permlink):
        return await self.worth.get_active_votes(author, permlink)

    async def get_content_replies(self, author, permlink):
        return await self.worth.get_content_replies(author, permlink)

    # metrics

    async def refresh_chain_properties(self):
        return await self.state.refresh()

    async def calculate_vote_value(self, account, weight=100.0, decimals=2,
                                   refresh=None, now=None):
        """USD value of a vote by `account` at `weight` percent."""
        props = await self.state.ensure(refresh)
        return round(acct.vote_value(account, props, weight, now), decimals)

    def calculate_voting_power(self, account, decimals=2, now=None):
        return round(acct.voting_power(account, now), decimals)

    def calculate_user_vesting_shares(self, account):
        return acct.net_vesting_shares(account)

    async def calculate_total_delegated(self, account, decimals=3, refresh=None):
        """Net WORTH Power delegated to `account`."""
        props = await self.state.ensure(refresh)
        return round(acct.total_delegated_native(account, props), decimals)

    async def calculate_bandwidth(self, account, decimals=2, refresh=None, now=None):
        """Bandwidth percents and human-readable byte counts."""
        props = await self.state.ensure(refresh)
        return acct.bandwidth(account, props, now).humanize(decimals)

    def calculate_reputation(self, raw_reputation, decimals=2):
        return rep_log10(raw_reputation, decimals)

    async def calculate_estimated_account_value(self, account, decimals=2,
                                                refresh=None):
        props = await self.state.ensure(refresh)
        return round(acct.account_value(account, props), decimals)

    def calculate_payout(self, post):
        return payout_details(post)

    async def order_votes(self, votes, order_by=OrderBy.PAYOUT):
        """Ordered copy of `votes`; PAYOUT fetches properties if none cached."""
        props = None
        if OrderBy(order_by) == OrderBy.PAYOUT:
            props = await self.state.ensure(refresh=not self.state.is_ready)
        return order_votes(votes, order_by, props)

    async def order_comments(self, comments, order_by=OrderBy.PAYOUT):
        return order_comments(comments, order_by)

    async def create_permlink(self, title, parent_author=None, parent_permlink=None):
        return await create_permlink(self.worth, self.account, title,
                                     parent_author, parent_permlink)
