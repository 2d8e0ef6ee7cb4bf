# scripts/seed_data.py
import os
import sys
import random
import logging
import uuid

# Add project root to sys.path to allow importing 'app' modules
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.append(project_root)

from app.config import settings
from app.storage import JsonFileStore, STORE_TIMES, STORE_OVERWRITES

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

OPEN_TIME = "09:00"
CLOSE_TIME = "18:00"


def build_store_times(rng=random):
    """One rule per weekday, each randomly open 09:00-18:00 or closed."""
    store_times = []
    for day_of_week in range(7):
        is_open = rng.random() < 0.5
        store_times.append({
            "id": str(uuid.uuid4()),
            "day_of_week": day_of_week,
            "is_open": is_open,
            "start_time": OPEN_TIME if is_open else None,
            "end_time": CLOSE_TIME if is_open else None,
        })
    return store_times


def seed_data(data_dir=None):
    data_dir = data_dir or settings.data_dir
    os.makedirs(data_dir, exist_ok=True)
    store = JsonFileStore(data_dir)

    store_times = build_store_times()
    logger.info(f"Writing {len(store_times)} store times to {store.path_for(STORE_TIMES)}")
    store.save(STORE_TIMES, store_times)

    # Overwrites are entered by hand; only make sure the file exists
    overwrites_path = store.path_for(STORE_OVERWRITES)
    if not os.path.exists(overwrites_path):
        logger.info(f"Creating empty store overwrites file at {overwrites_path}")
        store.save(STORE_OVERWRITES, [])
    else:
        logger.info(f"Keeping existing store overwrites at {overwrites_path}")


if __name__ == "__main__":
    seed_data()
