"""
User Repository - PostgreSQL storage for user accounts

Storage: PostgreSQL (users table)
"""
import logging
from typing import Optional
import asyncpg

from models.domain.company import Company
from models.domain.user import User, UserRole

logger = logging.getLogger(__name__)

USER_COLUMNS = "id, email, name, role, company_id, created_at"


def row_to_user(row) -> User:
    return User(
        id=row['id'],
        email=row['email'],
        name=row['name'],
        role=row['role'],
        company_id=row['company_id'],
        created_at=row['created_at'],
    )


class UserRepository:
    """
    Repository for User domain model

    Passwords are not stored; see api.auth.login.
    """

    def __init__(self, db_pool: asyncpg.Pool):
        self.db_pool = db_pool

    # =========================================================================
    # READ OPERATIONS
    # =========================================================================

    async def get_by_id(self, user_id: str) -> Optional[User]:
        """
        Retrieve user by ID.

        Args:
            user_id: User UUID

        Returns:
            User model or None
        """
        async with self.db_pool.acquire() as conn:
            row = await conn.fetchrow(f"""
                SELECT {USER_COLUMNS} FROM users WHERE id = $1
            """, user_id)
            return row_to_user(row) if row else None

    async def get_by_email(self, email: str) -> Optional[User]:
        """
        Retrieve user by email.

        Emails are matched case-insensitively (they are stored lowercased).

        Args:
            email: User email address

        Returns:
            User model or None
        """
        async with self.db_pool.acquire() as conn:
            row = await conn.fetchrow(f"""
                SELECT {USER_COLUMNS} FROM users WHERE lower(email) = lower($1)
            """, email)
            return row_to_user(row) if row else None

    # =========================================================================
    # CREATE OPERATIONS
    # =========================================================================

    async def create(self, user: User, conn: Optional[asyncpg.Connection] = None) -> User:
        """
        Create a new user.

        Args:
            user: User model (id generated in __post_init__ if not set)
            conn: Connection of an enclosing transaction, if any

        Returns:
            Created user with database timestamps
        """
        if conn is None:
            async with self.db_pool.acquire() as conn:
                return await self.create(user, conn)

        user.email = user.email.lower()
        row = await conn.fetchrow("""
            INSERT INTO users (id, email, name, role, company_id, created_at)
            VALUES ($1, $2, $3, $4, $5, NOW())
            RETURNING created_at
        """, user.id, user.email, user.name, user.role, user.company_id)

        user.created_at = row['created_at']
        logger.info(f"Created user {user.id} ({user.email}) in company {user.company_id}")
        return user

    async def bootstrap_admin(self, email: str, company_name: str) -> User:
        """
        Create the development admin and, if needed, its demo company.

        The company is looked up by name first, so repeated bootstraps
        (e.g. after the admin row was deleted) reuse it.
        """
        async with self.db_pool.acquire() as conn:
            async with conn.transaction():
                row = await conn.fetchrow("""
                    SELECT id, name, subscription_status, created_at
                    FROM companies WHERE name = $1
                    ORDER BY created_at LIMIT 1
                """, company_name)

                if row:
                    company_id = row['id']
                else:
                    company = Company(id="", name=company_name)
                    await conn.execute("""
                        INSERT INTO companies (id, name, subscription_status, created_at)
                        VALUES ($1, $2, $3, NOW())
                    """, company.id, company.name, company.subscription_status)
                    company_id = company.id
                    logger.info(f"Created demo company {company_id} ({company_name})")

                user = User(
                    id="",
                    email=email,
                    name="Admin User",
                    role=UserRole.ADMIN.value,
                    company_id=company_id,
                )
                return await self.create(user, conn)
