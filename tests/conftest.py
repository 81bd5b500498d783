"""
Shared test doubles: a controllable clock and a rate source stub that
records every fetch.
"""

import pytest

from domain.exceptions.currency import ConnectivityError


SAMPLE_RATES = {
    'USD': 1.0,
    'EUR': 0.85,
    'BRL': 5.0,
    'ARS': 350.0,
    'COP': 4000.0,
    'MXN': 17.0,
    'GBP': 0.75,
    'JPY': 150.0,
    'CAD': 1.35,
    'CHF': 0.9,
    'NGN': 1500.0,  # not supported, must be filtered out
}


class FakeClock:
    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class StubRateSource:
    """Returns queued results in order; an Exception instance is raised instead."""

    name = 'stub'

    def __init__(self, *results):
        self.results = list(results)
        self.calls: list[str] = []

    async def fetch_latest(self, base: str) -> dict[str, float]:
        self.calls.append(base)
        if not self.results:
            raise AssertionError('Rate source was not expected to be called')
        result = self.results.pop(0) if len(self.results) > 1 else self.results[0]
        if isinstance(result, Exception):
            raise result
        return dict(result)


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def sample_rates():
    return dict(SAMPLE_RATES)


@pytest.fixture
def rate_source():
    return StubRateSource(dict(SAMPLE_RATES))


@pytest.fixture
def failing_source():
    return StubRateSource(ConnectivityError('Request failed: ConnectError'))


@pytest.fixture
def make_source():
    return StubRateSource
