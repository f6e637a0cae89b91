"""Domain layer for banksync.

Services are imported from their modules (``banksync.domain.item`` and so
on); the database layer imports ``banksync.domain.entities`` and must not
pull the services in with it.
"""
