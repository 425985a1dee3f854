import logging
import sys

from app.database import SessionLocal, init_db
from app.services import teacher_service

logger = logging.getLogger(__name__)


def recalculate_ratings() -> int:
    try:
        init_db()
        db = SessionLocal()
        try:
            result = teacher_service.recalculate_all_ratings(db)
        finally:
            db.close()
        print(
            f"{result['message']}: {result['updated_count']} of "
            f"{result['total_teachers']} teachers updated"
        )
        return 0
    except Exception as exc:
        logger.exception("Rating recalculation failed")
        print(f"Rating recalculation failed: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s %(message)s")
    raise SystemExit(recalculate_ratings())
