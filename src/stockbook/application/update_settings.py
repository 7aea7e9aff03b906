"""Application service: Update Settings use case."""

from __future__ import annotations

from stockbook.domain.model.reference import AppSettings
from stockbook.domain.repository.ledger_repository import LedgerRepository
from stockbook.domain.service import catalog


class UpdateSettingsHandler:

    def __init__(self, ledger_repo: LedgerRepository) -> None:
        self._ledger_repo = ledger_repo

    def handle(self, **changes) -> AppSettings:
        """Merge the given fields into the stored settings.

        A currency change only affects invoices written afterwards.
        """
        state = self._ledger_repo.load()
        new_state = catalog.update_settings(state, **changes)
        self._ledger_repo.save(new_state)
        return new_state.settings
