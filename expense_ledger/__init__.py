"""
Expense Ledger - Source Package

A record store for organizational expense claims, their budget
categories and the approval workflow between them.

DESIGN PRINCIPLES:
1. Every mutation is gated by an authorization check
2. Validate fully, then mutate (no partial writes)
3. Identifiers are never reused
4. Approved spend is accumulated exactly once
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Expense Ledger Team"
