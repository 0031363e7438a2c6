# tests/test_retry_policy.py

from app.core.config import Settings
from app.core.retry import RetryPolicy


def test_fixed_spacing_by_default():
    policy = RetryPolicy(max_attempts=3, base_delay=2.0)
    assert list(policy.delays()) == [2.0, 2.0, 2.0]


def test_exponential_backoff_is_capped():
    policy = RetryPolicy(max_attempts=5, base_delay=1.0, factor=2.0, max_delay=5.0)
    assert list(policy.delays()) == [1.0, 2.0, 4.0, 5.0, 5.0]


def test_attempt_below_one_is_treated_as_first():
    assert RetryPolicy(base_delay=1.5).delay_for(0) == 1.5


def test_zero_attempts_yields_no_delays():
    assert list(RetryPolicy(max_attempts=0).delays()) == []


def test_built_from_settings():
    policy = RetryPolicy.from_settings(Settings(retry_attempts=4, retry_delay=1.0, retry_backoff=2.0))
    assert policy.max_attempts == 4
    assert policy.delay_for(3) == 4.0
