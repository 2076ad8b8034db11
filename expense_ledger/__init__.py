"""
Expense Ledger - Source Package

A small personal finance ledger: record income and expenses, keep them
in a delimited text file, and summarize them by month and category.

DESIGN PRINCIPLES:
1. The data file is the single source of truth; last full save wins
2. Every interactive entry is on disk before the next prompt
3. Bad rows in an import are reported, never fatal to the batch
4. Bad rows in the ledger's own file are fatal to the load by default
5. Storage is swappable behind an interface
"""

__version__ = "1.0.0"
__author__ = "Expense Ledger Team"
