POLICIES = """
TOPIC: policies
===============

A policy descriptor is either a decision function or a single-entry
mapping naming a registered policy and its arguments.

DECISION FUNCTION:
    async def decide(reason: Exception) -> None:
        ...              # return -> retry
        raise reason     # raise  -> give up with this reason

NAMED POLICY:
    {"constant_delay": {"delay": 100, "max_retries": 3}}

    delay        number, in RETRIER_RETRY_DELAY_UNIT seconds (default ms)
    max_retries  number; 0 means a single attempt

    Fractions are truncated toward zero. Negative or non-finite values
    are rejected.

REGISTERING A POLICY:
    from retrier import Param, ParamType, policy

    @policy("capped", Param("max_retries", ParamType.NUMBER))
    def capped(max_retries): ...   # returns a decision function

ERRORS (raised by retrier() before any attempt):
    InvalidPolicyDescriptor   not callable, not a single-entry mapping
    UnknownPolicy             name not registered
    MissingParameter          declared parameter absent
    ParameterTypeMismatch     parameter has the wrong type
    InvalidParameterValue     right type, unusable value
"""
