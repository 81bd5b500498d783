import inspect
import logging
from collections.abc import Callable

from rich.console import Console
from rich.prompt import Prompt
from rich.table import Table

from application.services import ConversionService
from domain.currencies import BASE_CURRENCY, display_name, normalize_code
from domain.exceptions.currency import (
	CurrencyException,
	InvalidAmountError,
	RateUnavailableError,
	UnsupportedCurrencyError,
)
from domain.models.currency import ConversionRecord

logger = logging.getLogger(__name__)

MENU = (
	('1', 'Convert currency'),
	('2', 'List supported currencies'),
	('3', 'Show current exchange rates'),
	('4', 'Show conversion history'),
	('5', 'Show rate cache status'),
	('6', 'Clear conversion history'),
	('7', 'Clear rate cache'),
	('8', 'Help'),
	('0', 'Exit'),
)


class ConverterConsole:
	"""Interactive menu on top of ``ConversionService``."""

	def __init__(
		self,
		service: ConversionService,
		console: Console | None = None,
		ask: Callable[[str], str] | None = None,
		history_limit: int = 10,
	):
		self.service = service
		self.console = console or Console()
		self._ask = ask or (lambda text: Prompt.ask(text, console=self.console))
		self.history_limit = history_limit
		self._actions = {
			'1': self.convert,
			'2': self.show_currencies,
			'3': self.show_rates,
			'4': self.show_history,
			'5': self.show_cache_status,
			'6': self.clear_history,
			'7': self.clear_cache,
			'8': self.show_help,
		}

	async def run(self) -> None:
		self.console.rule('[bold blue]Currency Converter')
		while True:
			self._print_menu()
			choice = self._ask('Select an option').strip()
			if choice == '0':
				self.console.print('[green]Thanks for using the currency converter![/green]')
				return

			action = self._actions.get(choice)
			if action is None:
				self.console.print('[red]Invalid option, please try again.[/red]')
				continue

			try:
				result = action()
				if inspect.isawaitable(result):
					await result
			except CurrencyException as e:
				self.console.print(f'[red]Error: {e}[/red]')

	def _print_menu(self) -> None:
		self.console.print('\n[bold]MAIN MENU[/bold]')
		for key, label in MENU:
			self.console.print(f'{key}. {label}')

	def _ask_currency(self, label: str) -> str | None:
		raw = self._ask(f'{label} currency (e.g. {BASE_CURRENCY})')
		code = normalize_code(raw)
		if code is None:
			self.console.print(f'[red]{label} currency {raw.strip()!r} is not supported.[/red]')
			self.show_currencies()
		return code

	async def convert(self) -> None:
		from_currency = self._ask_currency('Source')
		if from_currency is None:
			return
		to_currency = self._ask_currency('Target')
		if to_currency is None:
			return
		if from_currency == to_currency:
			self.console.print('[yellow]Source and target currencies are the same.[/yellow]')
			return

		raw_amount = self._ask('Amount to convert')
		try:
			amount = float(raw_amount.strip())
		except ValueError:
			self.console.print(f'[red]{raw_amount!r} is not a valid number.[/red]')
			return

		try:
			record = await self.service.convert(from_currency, to_currency, amount)
		except (InvalidAmountError, UnsupportedCurrencyError) as e:
			self.console.print(f'[red]{e}[/red]')
			return
		except RateUnavailableError as e:
			self.console.print(f'[red]Could not fetch exchange rates: {e}[/red]')
			return

		self._print_record(record)

	def _print_record(self, record: ConversionRecord) -> None:
		self.console.print('\n[bold green]CONVERSION SUCCESSFUL[/bold green]')
		self.console.print(
			f'Original amount: {record.amount:.2f} {record.from_currency} '
			f'({display_name(record.from_currency)})'
		)
		self.console.print(
			f'Exchange rate: 1 {record.from_currency} = {record.rate:.6f} {record.to_currency}'
		)
		self.console.print(
			f'Result: [bold]{record.converted_amount:.2f} {record.to_currency}[/bold] '
			f'({display_name(record.to_currency)})'
		)
		self.console.print(f'Date: {record.timestamp:%d/%m/%Y %H:%M:%S}')

	def show_currencies(self) -> None:
		table = Table(title='Supported currencies')
		table.add_column('Code', style='bold')
		table.add_column('Name')
		for code, name in self.service.supported_currencies().items():
			table.add_row(code, name)
		self.console.print(table)

	async def show_rates(self) -> None:
		refresh = await self.service.current_rates()
		if refresh.stale:
			self.console.print(
				f'[yellow]Showing cached rates, refresh failed: {refresh.warning}[/yellow]'
			)

		table = Table(title=f'Current exchange rates (base: {BASE_CURRENCY})')
		table.add_column('Code', style='bold')
		table.add_column(f'1 {BASE_CURRENCY} =', justify='right')
		table.add_column('Name')
		for code, rate in sorted(refresh.rates.items()):
			table.add_row(code, f'{rate:.6f}', display_name(code))
		self.console.print(table)

	def show_history(self) -> None:
		history = self.service.history
		if not len(history):
			self.console.print('[yellow]No conversions yet.[/yellow]')
			return

		table = Table(title='Conversion history (most recent first)')
		table.add_column('#', justify='right')
		table.add_column('From', justify='right')
		table.add_column('To', justify='right')
		table.add_column('Rate', justify='right')
		table.add_column('Date')
		for index, record in enumerate(history.latest(self.history_limit), start=1):
			table.add_row(
				str(index),
				f'{record.amount:.2f} {record.from_currency}',
				f'{record.converted_amount:.2f} {record.to_currency}',
				f'{record.rate:.6f}',
				f'{record.timestamp:%d/%m/%Y %H:%M:%S}',
			)
		self.console.print(table)

		if len(history) > self.history_limit:
			self.console.print(
				f'[yellow]... showing the last {self.history_limit} of {len(history)} conversions[/yellow]'
			)

	def show_cache_status(self) -> None:
		self.console.print(f'Rate cache: {self.service.cache_info()}')

	def clear_history(self) -> None:
		self.service.history.clear()
		self.console.print('[green]Conversion history cleared.[/green]')

	def clear_cache(self) -> None:
		self.service.clear_cache()
		self.console.print('[green]Rate cache cleared; the next conversion fetches fresh rates.[/green]')

	def show_help(self) -> None:
		self.console.print('\n[bold]How to use the converter[/bold]')
		self.console.print('1. Choose option 1 to convert an amount')
		self.console.print(f'2. Enter the three-letter source currency code (e.g. {BASE_CURRENCY})')
		self.console.print('3. Enter the target currency code (e.g. EUR)')
		self.console.print('4. Enter the amount, using a dot for decimals (e.g. 123.45)')
		self.console.print(
			'\nRates are fetched with USD as base and cached for a few minutes. '
			'If the rate service cannot be reached, the last fetched rates are used.'
		)
