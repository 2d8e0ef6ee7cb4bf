# app/routes/store_times.py
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path, status

from .. import crud
from ..models import MessageResponse, StoreTime, StoreTimeCreate, StoreTimeUpdate
from ..storage import STORE_TIMES, JsonFileStore, get_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/store-times", tags=["store-times"])

NOT_FOUND = {404: {"model": MessageResponse}}


@router.get("", response_model=List[StoreTime], summary="Get all store times")
def list_store_times(store: JsonFileStore = Depends(get_store)):
    return crud.list_records(store, STORE_TIMES)


@router.get("/day/{day_of_week}",
            response_model=List[StoreTime],
            summary="Get store times for a day of the week",
            responses=NOT_FOUND)
def get_store_times_by_day(
    day_of_week: int = Path(..., ge=0, le=6, description="Day of the week (0-6)"),
    store: JsonFileStore = Depends(get_store)
):
    matches = crud.find_records(store, STORE_TIMES, day_of_week=day_of_week)
    if not matches:
        logger.warning(f"No store times found for day_of_week {day_of_week}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not found")
    return matches


@router.get("/{id}", response_model=StoreTime, summary="Get a store time by id", responses=NOT_FOUND)
def get_store_time(
    id: str = Path(..., description="Store time ID"),
    store: JsonFileStore = Depends(get_store)
):
    record = crud.get_record(store, STORE_TIMES, id)
    if record is None:
        logger.warning(f"Store time not found for id: {id}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not found")
    return record


@router.post("",
             response_model=StoreTime,
             status_code=status.HTTP_201_CREATED,
             summary="Create a new store time")
def create_store_time(payload: StoreTimeCreate, store: JsonFileStore = Depends(get_store)):
    record = crud.create_record(store, STORE_TIMES, payload.model_dump())
    logger.info(f"Created store time {record['id']} for day_of_week {record['day_of_week']}")
    return record


@router.put("/{id}", response_model=StoreTime, summary="Update a store time by id", responses=NOT_FOUND)
def update_store_time(
    payload: StoreTimeUpdate,
    id: str = Path(..., description="Store time ID"),
    store: JsonFileStore = Depends(get_store)
):
    # Only the fields the caller actually sent are merged
    changes = payload.model_dump(exclude_unset=True)
    record = crud.update_record(store, STORE_TIMES, id, changes)
    if record is None:
        logger.warning(f"Update failed, store time not found for id: {id}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not found")
    logger.info(f"Updated store time {id}: {sorted(changes)}")
    return record


@router.delete("/{id}", response_model=MessageResponse, summary="Delete a store time by id", responses=NOT_FOUND)
def delete_store_time(
    id: str = Path(..., description="Store time ID"),
    store: JsonFileStore = Depends(get_store)
):
    if not crud.delete_record(store, STORE_TIMES, id):
        logger.warning(f"Delete failed, store time not found for id: {id}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not found")
    logger.info(f"Deleted store time {id}")
    return {"message": "Deleted"}
