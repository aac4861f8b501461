"""Methods for normalizing worths API response data."""

import math
import re
from datetime import datetime, timezone

from easyworth.exceptions import AmountParseError

BYTE_SIZES = ['B', 'KB', 'MB', 'GB', 'TB']

_AMOUNT_SUFFIX = re.compile(r'\s[A-Z]*$')

def parse_amount(value):
    """Parse a chain amount (e.g. `12.345 WORTH`) into a float.

    Plain numbers pass through. Raises AmountParseError on anything that
    is not a number once the currency suffix is stripped.
    """
    if isinstance(value, bool):
        raise AmountParseError("invalid amount: %r" % value)
    if isinstance(value, (int, float)):
        out = float(value)
    elif isinstance(value, str):
        try:
            out = float(_AMOUNT_SUFFIX.sub('', value.strip()))
        except ValueError:
            raise AmountParseError("invalid amount: %r" % value)
    else:
        raise AmountParseError("invalid amount: %r" % value)
    if not math.isfinite(out):
        raise AmountParseError("invalid amount: %r" % value)
    return out

def vests_to_native(vesting_shares, total_vesting_shares, total_vesting_fund):
    """Convert vesting shares into WORTH at the current pool ratio.

    A zero `total_vesting_shares` raises ZeroDivisionError.
    """
    vests = parse_amount(vesting_shares)
    total_vests = parse_amount(total_vesting_shares)
    total_fund = parse_amount(total_vesting_fund)
    return total_fund * (vests / total_vests)

def bytes_to_human(num_bytes, decimals=2):
    """Format a byte count with a base-1024 unit; 0 gives `n/a`."""
    if num_bytes == 0:
        return 'n/a'
    sign = '-' if num_bytes < 0 else ''
    num_bytes = abs(num_bytes)
    idx = 0
    while idx < len(BYTE_SIZES) - 1 and num_bytes >= 1024 ** (idx + 1):
        idx += 1
    if idx == 0:
        return '%s%d %s' % (sign, num_bytes, BYTE_SIZES[0])
    return '%s%.*f %s' % (sign, decimals, num_bytes / (1024 ** idx), BYTE_SIZES[idx])

def rep_log10(rep, decimals=2):
    """Convert raw reputation to the readable 25-centered log scale.

    Each order of magnitude above 1e9 is worth 9 points. A raw value of 0
    maps to the 25 baseline.
    """
    try:
        rep = int(rep)
    except (TypeError, ValueError):
        raise AmountParseError("invalid reputation: %r" % (rep,))

    if rep == 0:
        out = 25.0
    else:
        sign = -1 if rep < 0 else 1
        out = max(math.log10(abs(rep)) - 9, 0)
        out = out * 9 * sign + 25
    return '%.*f' % (decimals, out)

def parse_time(block_time):
    """Parse chain timestamp (UTC, no zone) into a naive datetime."""
    if isinstance(block_time, datetime):
        return block_time
    block_time = block_time.rstrip('Z')
    if '.' in block_time:
        block_time = block_time.split('.')[0]
    return datetime.strptime(block_time, '%Y-%m-%dT%H:%M:%S')

def utcnow():
    """Current time as a naive UTC datetime, comparable with parse_time."""
    return datetime.now(timezone.utc).replace(tzinfo=None)
