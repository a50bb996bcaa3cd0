# reset_password.py
import sys

from bookkeeping.core.config import settings
from bookkeeping.db.session import Database
from bookkeeping.services.errors import NotFound
from bookkeeping.services.users import UserService

def reset_password(database: Database, email: str, new_password: str) -> int:
    db = database.session()
    try:
        UserService(db).reset_password(email, new_password)
        print(f"Password reset for {email}")
        return 0
    except NotFound:
        print("User not found:", email)
        return 1
    finally:
        db.close()

if __name__ == "__main__":
    if len(sys.argv) < 3:
        print("Usage: python reset_password.py <email> <new_password>")
        sys.exit(2)
    database = Database(settings.DATABASE_URL)
    database.connect()
    try:
        code = reset_password(database, sys.argv[1], sys.argv[2])
    finally:
        database.dispose()
    sys.exit(code)
