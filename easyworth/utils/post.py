"""Post payout helpers."""

from easyworth.utils.normalize import parse_amount

# payouts at or above this are treated as "no cap"
MAX_PAYOUT_UNCAPPED = 1000000

def display_payout(post):
    """Pending payout if any, else the settled author + curator payout."""
    pending = parse_amount(post['pending_payout_value'])
    if pending != 0:
        return pending
    return (parse_amount(post['total_payout_value'])
            + parse_amount(post['curator_payout_value']))

def payout_details(post):
    """Summarize payout state of a post the way condenser displays it."""
    details = {}
    max_payout = parse_amount(post['max_accepted_payout'])
    pending = parse_amount(post['pending_payout_value'])
    promoted = parse_amount(post.get('promoted', '0.000 WBD'))
    author_payout = parse_amount(post['total_payout_value'])
    curator_payout = parse_amount(post['curator_payout_value'])
    cashout_time = post['cashout_time']
    is_comment = post['parent_author'] != ''

    payout = pending + author_payout + curator_payout
    payout = min(max(payout, 0.0), max_payout)
    details['payout'] = payout
    details['payout_limit_hit'] = payout >= max_payout

    # cashout is active if there is a pending payout, or if there is a
    # valid cashout_time and it's not a comment with 0 votes
    cashout_active = pending > 0 or (
        not cashout_time.startswith('1969')
        and not (is_comment and not post.get('active_votes')))

    if cashout_active:
        details['potential_payout'] = pending
        details['cashout_in_time'] = cashout_time + '.000Z'

    if promoted > 0:
        details['promotion_cost'] = promoted

    if max_payout == 0:
        details['is_payout_declined'] = True
    elif max_payout < MAX_PAYOUT_UNCAPPED:
        details['max_accepted_payout'] = max_payout

    if author_payout > 0:
        details['past_payouts'] = author_payout + curator_payout
        details['author_payouts'] = author_payout
        details['curator_payouts'] = curator_payout

    return details
