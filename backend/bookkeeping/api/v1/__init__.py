# bookkeeping.api.v1 package - exports the routers mounted by bookkeeping.main
from . import auth, bank_accounts, categories, health, transactions, users

__all__ = ["auth", "bank_accounts", "categories", "health", "transactions", "users"]
