# nosec B101


import io

import pytest
from rich.console import Console

from application.services.conversion_service import ConversionService
from application.services.history_service import ConversionHistory
from cli.console import ConverterConsole
from cli.main import build_parser
from infrastructure.cache.rate_cache import RateCache


def scripted(*answers):
    queue = list(answers)

    def ask(prompt: str) -> str:
        return queue.pop(0)

    return ask


@pytest.fixture
def output():
    return io.StringIO()


@pytest.fixture
def service(rate_source, fake_clock):
    return ConversionService(RateCache(rate_source, clock=fake_clock), ConversionHistory())


def make_app(service, output, *answers, history_limit=10):
    console = Console(file=output, width=120, color_system=None)
    return ConverterConsole(service, console=console, ask=scripted(*answers), history_limit=history_limit)


@pytest.mark.asyncio
async def test_convert_then_exit(service, output):
    app = make_app(service, output, '1', 'usd', 'eur', '100', '0')

    await app.run()

    text = output.getvalue()
    assert 'CONVERSION SUCCESSFUL' in text
    assert '85.00 EUR' in text
    assert len(service.history) == 1


@pytest.mark.asyncio
async def test_same_currency_is_not_converted(service, output):
    app = make_app(service, output, '1', 'USD', 'usd', '0')

    await app.run()

    assert 'are the same' in output.getvalue()
    assert len(service.history) == 0


@pytest.mark.asyncio
async def test_unsupported_currency_lists_supported(service, output):
    app = make_app(service, output, '1', 'xyz', '0')

    await app.run()

    text = output.getvalue()
    assert "'xyz' is not supported" in text
    assert 'Swiss Franc' in text


@pytest.mark.asyncio
@pytest.mark.parametrize('amount,message', [('abc', 'not a valid number'), ('-5', 'must not be negative')])
async def test_bad_amount_is_reported(service, output, amount, message):
    app = make_app(service, output, '1', 'USD', 'EUR', amount, '0')

    await app.run()

    assert message in output.getvalue()
    assert len(service.history) == 0


@pytest.mark.asyncio
async def test_rate_failure_is_reported_not_raised(failing_source, fake_clock, output):
    service = ConversionService(RateCache(failing_source, clock=fake_clock), ConversionHistory())
    app = make_app(service, output, '1', 'USD', 'EUR', '10', '3', '0')

    await app.run()

    text = output.getvalue()
    assert 'Could not fetch exchange rates' in text
    assert 'Error:' in text


@pytest.mark.asyncio
async def test_history_shows_most_recent_first_and_truncation_note(service, output):
    for amount in range(1, 4):
        await service.convert('USD', 'EUR', amount)
    app = make_app(service, output, '4', '0', history_limit=2)

    await app.run()

    text = output.getvalue()
    assert text.index('3.00 USD') < text.index('2.00 USD')
    assert '1.00 USD' not in text
    assert 'last 2 of 3' in text


@pytest.mark.asyncio
async def test_rates_cache_and_clear_options(service, output):
    app = make_app(service, output, '3', '5', '7', '5', '6', '8', '9', '0')

    await app.run()

    text = output.getvalue()
    assert 'base: USD' in text
    assert '0.850000' in text
    assert '10 currencies cached' in text
    assert 'Rate cache: empty' in text
    assert 'history cleared' in text
    assert 'How to use' in text
    assert 'Invalid option' in text


def test_parser_one_shot_arguments():
    args = build_parser().parse_args(['--from', 'usd', '--to', 'eur', '--amount', '12.5'])

    assert args.from_currency == 'usd'
    assert args.to_currency == 'eur'
    assert args.amount == 12.5
    assert args.list is False
