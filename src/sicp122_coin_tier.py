'''
denomination table for counting change
a tier k means coins of the smallest k denominations are available
tier 0 means no coin is available at all
'''

from typing import List


TIER_MAX = 5
COIN_VALUES: List[int] = [1, 5, 10, 25, 100]  # in cents, COIN_VALUES[tier-1]


def value_of_tier(tier: int):
    '''face value of the largest coin in tier, 0 if tier is out of range'''
    if 1 <= tier <= TIER_MAX:
        return COIN_VALUES[tier-1]
    else:
        return 0


def is_valid_tier(tier: int):
    return 0 <= tier <= TIER_MAX


def stringify_tier(tier: int):
    coins = COIN_VALUES[:tier] if is_valid_tier(tier) else []
    return '[%s]' % ', '.join([str(c) for c in coins])


def test_one(tier: int, value_exp: int):
    value = value_of_tier(tier)
    print('value_of_tier(%d) = %d' % (tier, value))
    assert value == value_exp


def test():
    test_one(1, 1)
    test_one(2, 5)
    test_one(3, 10)
    test_one(4, 25)
    test_one(5, 100)
    # out of range
    test_one(0, 0)
    test_one(-1, 0)
    test_one(6, 0)
    test_one(100, 0)
    # values increase with tier
    for tier in range(1, TIER_MAX):
        assert value_of_tier(tier) < value_of_tier(tier+1)
    # validity
    assert is_valid_tier(0) and is_valid_tier(TIER_MAX)
    assert not is_valid_tier(-1) and not is_valid_tier(TIER_MAX+1)
    # stringify
    assert stringify_tier(0) == '[]'
    assert stringify_tier(3) == '[1, 5, 10]'
    assert stringify_tier(5) == '[1, 5, 10, 25, 100]'
    assert stringify_tier(7) == '[]'


if __name__ == '__main__':
    test()
