OVERVIEW = """
TOPIC: overview
===============

retrier runs an async operation (the subject) until it succeeds or the
retry policy gives up.

BASIC USAGE:
    from retrier import retrier

    value = await retrier(fetch, {"constant_delay": {"delay": 100, "max_retries": 3}})

HOW A RUN PROCEEDS:
    1. Call the subject.
    2. Success: the run returns its value.
    3. Failure: pass the exception to the decision function.
       Returns normally -> go to 1.
       Raises           -> the run raises that exception.

    Attempts and decisions strictly alternate. retrier itself never gives
    up; limits and delays belong to the policy.

DECORATOR:
    from retrier import retrying

    @retrying({"constant_delay": {"delay": 500, "max_retries": 2}})
    async def fetch(url: str) -> bytes: ...

RELATED TOPICS:
    retrier help policies     Descriptors and registration
"""
