"""Permlink generation for new posts and comments."""

import logging
import re
import secrets

import base58
from slugify import slugify

from easyworth.exceptions import PermlinkLookupFailed
from easyworth.utils.normalize import utcnow

log = logging.getLogger(__name__)

MAX_PERMLINK_LENGTH = 255
MAX_SLUG_LENGTH = 128

_REPLY_TIMESTAMP = re.compile(r'-\d{8}t\d{9}z')
_INVALID_CHARS = re.compile(r'[^a-z0-9-]+')

def random_token():
    """Base58 encoding of 4 random bytes."""
    return base58.b58encode(secrets.token_bytes(4)).decode('ascii')

def slugify_title(title):
    """ASCII, lower-case, dash-separated slug of a post title."""
    return slugify(re.sub(r'[<>]', '', title),
                   max_length=MAX_SLUG_LENGTH, word_boundary=True)

def normalize_permlink(permlink):
    """Keep the last 255 chars, lower-cased, only [a-z0-9-]."""
    if len(permlink) > MAX_PERMLINK_LENGTH:
        permlink = permlink[-MAX_PERMLINK_LENGTH:]
    return _INVALID_CHARS.sub('', permlink.lower())

def comment_permlink(parent_author, parent_permlink, now=None):
    """Reply permlink: `re-{author}-{permlink}-{timestamp}`.

    Any reply timestamp already on the parent permlink is dropped so
    nested replies do not accumulate them.
    """
    now = now or utcnow()
    stamp = now.strftime('%Y%m%dt%H%M%S') + '%03dz' % (now.microsecond // 1000)
    parent_permlink = _REPLY_TIMESTAMP.sub('', parent_permlink)
    return normalize_permlink('re-%s-%s-%s' % (parent_author, parent_permlink, stamp))

async def create_permlink(worth, account, title=None, parent_author=None,
                          parent_permlink=None, now=None):
    """Build a permlink for a new post (from `title`) or a reply.

    Post permlinks are checked against `account`'s existing content and
    get a random prefix on collision. A failed lookup raises
    PermlinkLookupFailed.
    """
    if title and title.strip():
        slug = normalize_permlink(slugify_title(title) or random_token())
        try:
            taken = await worth.content_exists(account, slug)
        except Exception as e:
            log.warning("permlink lookup failed for @%s/%s: %s", account, slug, repr(e))
            raise PermlinkLookupFailed(account, slug, e) from e
        if taken:
            slug = '%s-%s' % (random_token(), slug)
        return normalize_permlink(slug)

    assert parent_author and parent_permlink, "reply permlink needs a parent"
    return comment_permlink(parent_author, parent_permlink, now)
