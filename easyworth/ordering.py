"""Ordering of vote and comment lists.

Both functions return a new list of shallow-copied records with the
derived display field attached; the input list and its dicts are left
unchanged. Sorts are stable, so ties keep their input order.
"""

from enum import Enum

from easyworth.exceptions import PropertiesUnavailable
from easyworth.utils.normalize import parse_time, rep_log10
from easyworth.utils.post import display_payout

class OrderBy(Enum):
    """Sort criteria for votes and comments."""
    REPUTATION = 'REPUTATION'
    PAYOUT = 'PAYOUT'
    PERCENT = 'PERCENT'
    OLDEST = 'OLDEST'
    NEWEST = 'NEWEST'

VOTE_ORDERS = (OrderBy.PAYOUT, OrderBy.REPUTATION, OrderBy.PERCENT)
COMMENT_ORDERS = (OrderBy.PAYOUT, OrderBy.REPUTATION, OrderBy.NEWEST, OrderBy.OLDEST)

def order_votes(votes, order_by=OrderBy.PAYOUT, props=None):
    """Order active votes, highest first.

    PAYOUT attaches `vote_payout` (USD, 3 decimals) and needs `props`;
    REPUTATION attaches `vote_reputation`; PERCENT uses the raw percent.
    """
    order_by = OrderBy(order_by)
    assert order_by in VOTE_ORDERS, "cannot order votes by %s" % order_by.value

    if order_by == OrderBy.PAYOUT:
        if props is None:
            raise PropertiesUnavailable("vote payouts need chain properties")
        # sort on the unrounded value; sub-cent votes all display as 0.0
        values = [props.shares_to_native_value(vote['rshares']) for vote in votes]
        ranked = sorted(zip(values, votes), key=lambda pair: pair[0], reverse=True)
        return [dict(vote, vote_payout=round(value, 3)) for value, vote in ranked]
    elif order_by == OrderBy.REPUTATION:
        out = [dict(vote, vote_reputation=rep_log10(vote['reputation']))
               for vote in votes]
        key = lambda vote: float(vote['vote_reputation'])
    else:
        out = [dict(vote) for vote in votes]
        key = lambda vote: vote['percent']

    return sorted(out, key=key, reverse=True)

def order_comments(comments, order_by=OrderBy.PAYOUT):
    """Order replies; OLDEST is ascending, every other order descending.

    PAYOUT attaches `comment_payout`, REPUTATION `comment_reputation`.
    """
    order_by = OrderBy(order_by)
    assert order_by in COMMENT_ORDERS, "cannot order comments by %s" % order_by.value

    if order_by == OrderBy.PAYOUT:
        out = [dict(post, comment_payout=display_payout(post)) for post in comments]
        key = lambda post: post['comment_payout']
    elif order_by == OrderBy.REPUTATION:
        out = [dict(post, comment_reputation=rep_log10(post['author_reputation']))
               for post in comments]
        key = lambda post: float(post['comment_reputation'])
    else:
        out = [dict(post) for post in comments]
        key = lambda post: parse_time(post['created'])

    return sorted(out, key=key, reverse=order_by != OrderBy.OLDEST)
