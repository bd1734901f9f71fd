"""
Settlement Gateway - Agent-to-Agent Micropayment Authorization Service

A FastAPI-based microservice that authenticates settlement requests,
enforces spending policy, and issues simulated ledger transactions.
"""

__version__ = "0.1.0"
