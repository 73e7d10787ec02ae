"""Domain services: identity, allocations, scoring, votes and registries.

Routes import from here so the transport layer stays free of validation
rules, transactions and scoring arithmetic.
"""
