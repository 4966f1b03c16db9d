# supercart/services/popularity_service.py
from typing import Iterable, List, Tuple

from supercart.celery_worker import celery_app
from supercart.data.database import SessionLocal
from supercart.repos.product_repo import ProductRepo
from supercart.utils.logging import get_logger

logger = get_logger(__name__)


class PopularityService:
    """
    Counts how often products end up in saved carts.

    The counter is the ``popularity`` field ranked by ``most_selected``;
    updates run in a Celery worker, outside the request.
    """

    @staticmethod
    def record_selection(selection: Iterable[Tuple[int, int]]):
        pairs = [[int(pid), int(qty)] for pid, qty in selection]
        if not pairs:
            return
        record_selection_task.delay(pairs)


@celery_app.task(name="supercart.services.popularity_service.record_selection_task")
def record_selection_task(pairs: List[List[int]]):
    db = SessionLocal()
    try:
        repo = ProductRepo(db)
        updated = 0
        for product_id, quantity in pairs:
            updated += repo.increment_popularity(product_id, quantity)
        repo.commit()
        logger.info(f"Popularity updated for {updated} of {len(pairs)} products")
        return {"updated": updated}
    finally:
        db.close()
