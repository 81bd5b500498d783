import argparse
import asyncio
import logging
import sys

from rich.console import Console

from application.services import ServiceFactory
from cli.console import ConverterConsole
from config.settings import Settings, get_settings
from domain.exceptions.currency import CurrencyException

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
	parser = argparse.ArgumentParser(
		prog='currency-converter',
		description='Convert amounts between supported currencies using live exchange rates.',
	)
	parser.add_argument('--from', dest='from_currency', help='Source currency code, e.g. USD')
	parser.add_argument('--to', dest='to_currency', help='Target currency code, e.g. EUR')
	parser.add_argument('--amount', type=float, help='Amount to convert')
	parser.add_argument('--list', action='store_true', help='List supported currencies and exit')
	parser.add_argument('--rates', action='store_true', help='Show current USD rates and exit')
	return parser


def configure_logging(settings: Settings) -> None:
	logging.basicConfig(
		level=settings.LOG_LEVEL.upper(),
		format='%(asctime)s | %(levelname)-8s | %(name)-20s | %(message)s',
		datefmt='%H:%M:%S',
	)
	logging.getLogger('httpx').setLevel(logging.WARNING)


async def run(args: argparse.Namespace, settings: Settings, console: Console) -> int:
	factory = ServiceFactory(settings)
	service = factory.create_conversion_service()
	app = ConverterConsole(service, console=console, history_limit=settings.HISTORY_DISPLAY_LIMIT)

	try:
		if args.list:
			app.show_currencies()
		elif args.rates:
			await app.show_rates()
		elif args.from_currency or args.to_currency or args.amount is not None:
			if not (args.from_currency and args.to_currency and args.amount is not None):
				console.print('[red]--from, --to and --amount must be given together.[/red]')
				return 2
			record = await service.convert(args.from_currency, args.to_currency, args.amount)
			console.print(record.detailed_summary())
		else:
			await app.run()
	except CurrencyException as e:
		console.print(f'[red]Error: {e}[/red]')
		return 1
	finally:
		await factory.close()
	return 0


def main(argv: list[str] | None = None) -> int:
	args = build_parser().parse_args(argv)
	settings = get_settings()
	configure_logging(settings)

	try:
		return asyncio.run(run(args, settings, Console()))
	except (KeyboardInterrupt, EOFError):
		logger.info('Interrupted by user')
		return 130


if __name__ == '__main__':
	sys.exit(main())
