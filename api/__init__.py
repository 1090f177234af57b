"""
Module 08 - Minimal API (FastAPI)

HTTP API for ballot whitelists:
- POST /whitelist/generate - Build root and proofs from addresses
- POST /whitelist/verify - Check a proof against a root
- /ballots - Create ballots, vote, finalize, read results
- GET /health - Health check

Usage:
    uvicorn api.app:app --reload
"""

__version__ = "0.1.0"
