# coding=utf-8

"""EasyWorth: client toolkit for social apps on the Wortheum blockchain.

EasyWorth is a convenience layer over the worths RPC API and the
WorthConnect delegated-signing service. It lets an app author, edit, vote
on, and follow content without building raw transactions, and derives
human-meaningful values (vote worth, account value, bandwidth, readable
reputation) from raw chain state.
"""

from easyworth.client import EasyWorth
from easyworth.ordering import OrderBy
from easyworth.client import RewardOption

__all__ = ['EasyWorth', 'OrderBy', 'RewardOption']
