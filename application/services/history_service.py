from __future__ import annotations

from domain.models.currency import ConversionRecord


class ConversionHistory:
	"""Append-only, in-memory log of completed conversions."""

	def __init__(self):
		self._records: list[ConversionRecord] = []

	def record(self, entry: ConversionRecord) -> None:
		self._records.append(entry)

	def list(self) -> list[ConversionRecord]:
		return list(self._records)

	def latest(self, limit: int) -> list[ConversionRecord]:
		"""Return up to ``limit`` records, most recent first."""
		if limit <= 0:
			return []
		return self._records[-limit:][::-1]

	def clear(self) -> None:
		self._records.clear()

	def __len__(self) -> int:
		return len(self._records)
