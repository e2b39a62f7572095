"""ORM Models - SQLAlchemy declarative models for the ledger tables.

Invariants:
    - All models inherit from Base (db/base.py)
    - Token is the root; supply, balances and events reference brc20_tokens.id

Design Decisions:
    - One file per table for locality
    - All models imported here so Base.metadata is complete before create_all/autogenerate
"""

from brc20_api.models.token import Brc20Token  # noqa: F401
from brc20_api.models.supply import Brc20Supply  # noqa: F401
from brc20_api.models.balance import Brc20Balance  # noqa: F401
from brc20_api.models.ledger_event import Brc20LedgerEvent  # noqa: F401
