'''
counting change, see sicp 1.2.2
count the ways to make up an amount of cents with unlimited coins of a tier
the recursion either drops the largest coin of the tier, or uses it at least once

the naive recursion is a tree recursion, exponential in time
the boosted version tabulates (amount, tier) pairs in a memo cache
so each pair is only computed once

the memo cache is an explicit object owned by caller
if caller does not pass one, the cache policy in count_change_config decides:
  fresh: a new cache for every top level call, isolated and deterministic
  shared: one process wide cache, lazily populated and never evicted
'''

import sys
from typing import Dict, List, Optional, Tuple
from sicp122_coin_tier import TIER_MAX, is_valid_tier, stringify_tier, value_of_tier


'''
global config

cache_policy is either 'fresh' or 'shared'
max_calls limits the number of recursive calls per top level call, None means no limit
  it is mainly there to keep a slow naive evaluation from running for too long
trace emits a line for each cache hit

with suppress_panic being True, error is raised as panic instead of exiting process
with suppress_print being True, output is buffered and later dumped by count_change_flush
'''

count_change_config = {
    'cache_policy': 'fresh',
    'max_calls': None,
    'trace': False,
    'suppress_panic': True,
    'suppress_print': True
}


class CountChangePanic(Exception):
    def __init__(self, message: str):
        self.message = message


def count_change_panic(message: str):
    if count_change_config['suppress_panic']:
        raise CountChangePanic(message)
    else:
        print(message, file=sys.stderr)
        sys.exit(1)


_count_change_buf: List[str] = []


def count_change_print(message: str):
    if count_change_config['suppress_print']:
        _count_change_buf.append(message)
    else:
        print(message, end='')


def count_change_flush():
    res = ''.join(_count_change_buf)
    _count_change_buf.clear()
    return res


'''memo cache'''

ChangeKey = Tuple[int, int]  # (amount, tier)


class ChangeCache:
    '''
    maps (amount, tier) to number of ways
    entries are only added, never overwritten or removed
    '''

    def __init__(self):
        self.table: Dict[ChangeKey, int] = {}

    def lookup(self, amount: int, tier: int) -> Optional[int]:
        return self.table.get((amount, tier))

    def add(self, amount: int, tier: int, ways: int):
        # insert only if absent, an earlier writer always wins
        self.table.setdefault((amount, tier), ways)

    def __contains__(self, key: ChangeKey):
        return key in self.table

    def __len__(self):
        return len(self.table)


_shared_cache: Optional[ChangeCache] = None


def get_shared_cache():
    global _shared_cache
    if _shared_cache is None:
        _shared_cache = ChangeCache()
    return _shared_cache


def reset_shared_cache():
    '''must be called if the denomination table ever changes'''
    global _shared_cache
    _shared_cache = None


def resolve_cache():
    policy = count_change_config['cache_policy']
    if policy == 'shared':
        return get_shared_cache()
    elif policy == 'fresh':
        return ChangeCache()
    else:
        count_change_panic('unknown cache policy: %s' % policy)


'''recording statistics of recursive calls'''


class ChangeStatistic:
    def __init__(self):
        self.total_calls = 0
        self.cache_hits = 0
        self.max_depth = 0


def reset_statistic(statistics: ChangeStatistic):
    statistics.total_calls = 0
    statistics.cache_hits = 0
    statistics.max_depth = 0


def merge_statistic(statistics: ChangeStatistic, other: ChangeStatistic):
    statistics.total_calls += other.total_calls
    statistics.cache_hits += other.cache_hits
    statistics.max_depth = max(statistics.max_depth, other.max_depth)


'''counting'''


def count_ways_recur(amount: int, tier: int, cache: Optional[ChangeCache], statistics: ChangeStatistic, depth: int) -> int:
    '''cache being None means naive evaluation'''
    statistics.total_calls += 1
    statistics.max_depth = max(statistics.max_depth, depth)
    max_calls = count_change_config['max_calls']
    if max_calls is not None and statistics.total_calls > max_calls:
        count_change_panic('call limit exceeded: %d' % max_calls)

    if cache is not None:
        looked_up = cache.lookup(amount, tier)
        if looked_up is not None:
            statistics.cache_hits += 1
            if count_change_config['trace']:
                count_change_print('looked up (%d, %d) -> %d\n' % (amount, tier, looked_up))
            return looked_up

    # tier 0 is checked before amount 0, so (0, 0) has 0 ways
    if amount < 0 or tier == 0:
        ways = 0
    elif amount == 0:
        ways = 1
    else:
        ways = count_ways_recur(amount, tier-1, cache, statistics, depth+1) + \
            count_ways_recur(amount-value_of_tier(tier), tier, cache, statistics, depth+1)

    if cache is not None:
        cache.add(amount, tier, ways)
    return ways


def count_ways(amount: int, tier: int, use_cache: bool, cache: Optional[ChangeCache] = None, statistics: Optional[ChangeStatistic] = None):
    '''
    number of ways to make up amount using coins of the tier
    use_cache selects the boosted evaluation, otherwise the naive one which never touches any cache
    an explicitly passed cache overrides the cache policy
    statistics, if passed, accumulates the counters of this call
    '''
    if not is_valid_tier(tier):
        count_change_panic('invalid tier: %d, expect 0 to %d' % (tier, TIER_MAX))
    if use_cache and cache is None:
        cache = resolve_cache()
    call_statistics = ChangeStatistic()
    # one frame deeper per smallest coin taken, so lift the limit for this call
    depth_needed = max(amount, 0) // value_of_tier(1) + TIER_MAX + 50
    recursion_limit = sys.getrecursionlimit()
    sys.setrecursionlimit(recursion_limit + depth_needed)
    try:
        ways = count_ways_recur(amount, tier, cache if use_cache else None, call_statistics, 1)
    finally:
        sys.setrecursionlimit(recursion_limit)
    if statistics is not None:
        merge_statistic(statistics, call_statistics)
    return ways


def test_one(amount: int, tier: int, ways_exp: Optional[int] = None, panic: Optional[str] = None):
    '''run both boosted and naive evaluation, they should agree'''
    try:
        ways_boosted = count_ways(amount, tier, True, ChangeCache())
        ways_naive = count_ways(amount, tier, False)
        print('count_ways(%d, %s) = %d' % (amount, stringify_tier(tier), ways_boosted))
        assert ways_boosted == ways_naive
        if ways_exp is not None:
            assert ways_boosted == ways_exp
        assert panic is None
    except CountChangePanic as err:
        print('count_ways(%d, %d): panic: %s' % (amount, tier, err.message))
        assert err.message == panic


def test_base_cases():
    for tier in range(1, TIER_MAX+1):
        test_one(0, tier, 1)
    for tier in range(0, TIER_MAX+1):
        for amount in [-1, -5, -100]:
            test_one(amount, tier, 0)
    for amount in [0, 1, 5, 100]:
        test_one(amount, 0, 0)


def test_values():
    test_one(0, 5, 1)
    test_one(1, 5, 1)
    test_one(5, 5, 2)
    test_one(5, 1, 1)
    test_one(11, 2, 3)
    test_one(11, 3, 4)
    test_one(10, 5, 4)
    test_one(25, 5, 13)
    test_one(26, 5, 13)
    test_one(50, 4, 49)
    test_one(91, 4, 187)
    test_one(100, 3, 121)
    test_one(100, 4, 242)
    test_one(100, 5, 243)


def test_large_amounts():
    '''only boosted, naive evaluation is far too slow here'''
    recursion_limit = sys.getrecursionlimit()
    assert count_ways(900, 5, True) == 296455
    assert count_ways(1000, 4, True) == 142511
    assert count_ways(1000, 5, True) == 438966
    ways = count_ways(3000, 5, True)
    print('count_ways(3000, %s) = %d' % (stringify_tier(5), ways))
    assert ways > 438966
    assert count_ways(3000, 1, True) == 1
    assert count_ways(-3000, 5, True) == 0
    # the limit is restored, also after a panic
    assert sys.getrecursionlimit() == recursion_limit
    count_change_config['max_calls'] = 10
    try:
        count_ways(2000, 5, True)
        assert False
    except CountChangePanic as err:
        assert err.message == 'call limit exceeded: 10'
    count_change_config['max_calls'] = None
    assert sys.getrecursionlimit() == recursion_limit


def test_agree():
    '''boosted and naive evaluation agree, and adding a tier never decreases the count'''
    cache = ChangeCache()
    for amount in range(-3, 61):
        prev_ways = 0
        for tier in range(0, TIER_MAX+1):
            ways = count_ways(amount, tier, True, cache)
            assert ways == count_ways(amount, tier, False)
            assert ways >= prev_ways
            prev_ways = ways


def test_invalid():
    test_one(10, 6, panic='invalid tier: 6, expect 0 to 5')
    test_one(10, -1, panic='invalid tier: -1, expect 0 to 5')


def test_cache():
    # insert only if absent
    cache = ChangeCache()
    cache.add(7, 2, 2)
    cache.add(7, 2, 999)
    assert cache.lookup(7, 2) == 2
    assert (7, 2) in cache
    assert cache.lookup(2, 7) is None
    assert len(cache) == 1

    # naive evaluation never touches the cache
    cache = ChangeCache()
    assert count_ways(30, 5, False, cache) == 18
    assert len(cache) == 0

    # fresh policy does not keep anything around
    reset_shared_cache()
    count_ways(100, 5, True)
    statistics = ChangeStatistic()
    count_ways(100, 5, True, statistics=statistics)
    assert statistics.total_calls > 1
    assert len(get_shared_cache()) == 0

    # shared policy reuses the process wide cache
    count_change_config['cache_policy'] = 'shared'
    assert count_ways(100, 5, True) == 243
    shared_size = len(get_shared_cache())
    assert shared_size > 0
    statistics = ChangeStatistic()
    assert count_ways(100, 5, True, statistics=statistics) == 243
    assert statistics.total_calls == 1 and statistics.cache_hits == 1
    assert len(get_shared_cache()) == shared_size
    # shared results equal fresh results
    for amount in range(0, 151, 7):
        for tier in range(0, TIER_MAX+1):
            assert count_ways(amount, tier, True) == count_ways(amount, tier, True, ChangeCache())
    assert len(get_shared_cache()) >= shared_size
    reset_shared_cache()
    assert len(get_shared_cache()) == 0

    count_change_config['cache_policy'] = 'lru'
    try:
        count_ways(1, 1, True)
        assert False
    except CountChangePanic as err:
        assert err.message == 'unknown cache policy: lru'
    count_change_config['cache_policy'] = 'fresh'


def test_statistics():
    # (5,1) .. (0,1) plus (5,0) .. (1,0)
    statistics = ChangeStatistic()
    count_ways(5, 1, False, statistics=statistics)
    print('naive count_ways(5, [1]): total_calls = %d, max_depth = %d' %
          (statistics.total_calls, statistics.max_depth))
    assert statistics.total_calls == 11
    assert statistics.max_depth == 6
    assert statistics.cache_hits == 0

    # counters accumulate until reset
    count_ways(5, 1, False, statistics=statistics)
    assert statistics.total_calls == 22
    reset_statistic(statistics)
    assert statistics.total_calls == 0

    stat_naive = ChangeStatistic()
    stat_boosted = ChangeStatistic()
    count_ways(100, 5, False, statistics=stat_naive)
    count_ways(100, 5, True, ChangeCache(), stat_boosted)
    print('count_ways(100, %s): naive total_calls = %d, boosted total_calls = %d, cache_hits = %d' %
          (stringify_tier(5), stat_naive.total_calls, stat_boosted.total_calls, stat_boosted.cache_hits))
    assert stat_boosted.total_calls < stat_naive.total_calls
    assert stat_boosted.cache_hits > 0


def test_max_calls():
    count_change_config['max_calls'] = 10
    test_one(100, 5, panic='call limit exceeded: 10')
    # few enough calls to stay below the limit
    statistics = ChangeStatistic()
    assert count_ways(0, 5, False, statistics=statistics) == 1
    assert statistics.total_calls == 1
    count_change_config['max_calls'] = None


def test_trace():
    count_change_config['trace'] = True
    assert count_ways(10, 2, True) == 3
    output_str = count_change_flush()
    print('* output: %s' % output_str, end='')
    assert output_str == 'looked up (5, 1) -> 1\n'
    # nothing to look up without cache
    assert count_ways(10, 2, False) == 3
    assert count_change_flush() == ''
    count_change_config['trace'] = False


def test():
    test_base_cases()
    test_values()
    test_large_amounts()
    test_agree()
    test_invalid()
    test_cache()
    test_statistics()
    test_max_calls()
    test_trace()
    print('count_ways(391, %s) = %d' % (stringify_tier(5), count_ways(391, 5, True)))


if __name__ == '__main__':
    test()
