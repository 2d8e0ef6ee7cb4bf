# app/routes/store_overwrites.py
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path, status

from .. import crud
from ..models import MessageResponse, StoreOverwrite, StoreOverwriteCreate, StoreOverwriteUpdate
from ..storage import STORE_OVERWRITES, JsonFileStore, get_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/store-overwrites", tags=["store-overwrites"])

NOT_FOUND = {404: {"model": MessageResponse}}


@router.get("", response_model=List[StoreOverwrite], summary="Get all store overwrites")
def list_store_overwrites(store: JsonFileStore = Depends(get_store)):
    return crud.list_records(store, STORE_OVERWRITES)


@router.get("/date/{month}/{day}",
            response_model=List[StoreOverwrite],
            summary="Get store overwrites for a specific date",
            responses=NOT_FOUND)
def get_store_overwrites_by_date(
    month: int = Path(..., ge=1, le=12, description="Month (1-12)"),
    day: int = Path(..., ge=1, le=31, description="Day (1-31)"),
    store: JsonFileStore = Depends(get_store)
):
    matches = crud.find_records(store, STORE_OVERWRITES, month=month, day=day)
    if not matches:
        logger.warning(f"No store overwrites found for {month}/{day}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not found")
    return matches


@router.get("/{id}", response_model=StoreOverwrite, summary="Get a store overwrite by id", responses=NOT_FOUND)
def get_store_overwrite(
    id: str = Path(..., description="Store overwrite ID"),
    store: JsonFileStore = Depends(get_store)
):
    record = crud.get_record(store, STORE_OVERWRITES, id)
    if record is None:
        logger.warning(f"Store overwrite not found for id: {id}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not found")
    return record


@router.post("",
             response_model=StoreOverwrite,
             status_code=status.HTTP_201_CREATED,
             summary="Create a new store overwrite",
             responses={400: {"model": MessageResponse}})
def create_store_overwrite(payload: StoreOverwriteCreate, store: JsonFileStore = Depends(get_store)):
    # Day/month ranges were already checked by StoreOverwriteCreate, before any file access
    record = crud.create_record(store, STORE_OVERWRITES, payload.model_dump())
    logger.info(f"Created store overwrite {record['id']} for {record['month']}/{record['day']}")
    return record


@router.put("/{id}", response_model=StoreOverwrite, summary="Update a store overwrite by id", responses=NOT_FOUND)
def update_store_overwrite(
    payload: StoreOverwriteUpdate,
    id: str = Path(..., description="Store overwrite ID"),
    store: JsonFileStore = Depends(get_store)
):
    changes = payload.model_dump(exclude_unset=True)
    record = crud.update_record(store, STORE_OVERWRITES, id, changes)
    if record is None:
        logger.warning(f"Update failed, store overwrite not found for id: {id}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not found")
    logger.info(f"Updated store overwrite {id}: {sorted(changes)}")
    return record


@router.delete("/{id}", response_model=MessageResponse, summary="Delete a store overwrite by id", responses=NOT_FOUND)
def delete_store_overwrite(
    id: str = Path(..., description="Store overwrite ID"),
    store: JsonFileStore = Depends(get_store)
):
    if not crud.delete_record(store, STORE_OVERWRITES, id):
        logger.warning(f"Delete failed, store overwrite not found for id: {id}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not found")
    logger.info(f"Deleted store overwrite {id}")
    return {"message": "Deleted"}
