"""Domain layer for ledgerkit application.

Services are imported from their modules directly; importing them here would
create a cycle with ``ledgerkit.database.base``.
"""
