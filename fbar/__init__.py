"""
FBAR Facts - Source Package

Loads a user's financial account dataset and resolves the exchange
rates needed to report foreign account balances in USD.

DESIGN PRINCIPLES:
1. Fail early, fail visibly
2. No silent corrections
3. User-provided facts win over reference facts
4. Every conversion must be traceable to its rate source
"""

__version__ = "1.0.0"
__author__ = "FBAR Facts Team"
