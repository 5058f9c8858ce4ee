"""
Celery tasks - housekeeping that does not belong in a request.
"""

import asyncio

from farm_registry.db.repositories import AccessTokenRepository, UserRepository
from farm_registry.db.session import async_session_maker
from farm_registry.queue.celery_app import celery_app
from farm_registry.services.auth_service import AuthService


def _run_async(coro):
    """Run async function from sync Celery task."""
    loop = asyncio.new_event_loop()
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


async def purge_expired_tokens(session_maker=async_session_maker) -> int:
    async with session_maker() as session:
        removed = await AuthService(UserRepository(session), AccessTokenRepository(session)).purge_expired_tokens()
        await session.commit()
        return removed


@celery_app.task(bind=True, max_retries=3)
def purge_expired_tokens_task(self) -> int:
    """Delete access tokens past their expiry."""
    try:
        return _run_async(purge_expired_tokens())
    except Exception as exc:
        raise self.retry(exc=exc, countdown=30)
