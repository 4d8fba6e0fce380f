from jobmatch.cache import ResultsCache


def test_get_before_put_is_none(clock):
    assert ResultsCache(60, clock=clock).get() is None


def test_entry_expires_after_ttl(clock, make_job):
    cache = ResultsCache(60, clock=clock)
    entry = cache.put([make_job()])
    clock.advance(59)
    assert cache.get() is entry
    assert cache.age_seconds() == 59
    clock.advance(1)
    assert cache.get() is None


def test_put_replaces_whole_snapshot(clock, make_job):
    cache = ResultsCache(60, clock=clock)
    jobs = [make_job()]
    first = cache.put(jobs)
    jobs.append(make_job())
    assert len(first.jobs) == 1
    second = cache.put(jobs)
    assert cache.get() is second
    assert len(first.jobs) == 1


def test_invalidate(clock, make_job):
    cache = ResultsCache(60, clock=clock)
    cache.put([make_job()])
    cache.invalidate()
    assert cache.get() is None
    assert cache.age_seconds() == 0


def test_zero_ttl_never_serves(clock, make_job):
    cache = ResultsCache(0, clock=clock)
    cache.put([make_job()])
    assert cache.get() is None
