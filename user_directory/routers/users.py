from __future__ import annotations

import logging

from fastapi import APIRouter, Body, Depends, HTTPException, Query, Response, status

from user_directory.deps import get_user_store
from user_directory.errors import DuplicateEmailError, InvalidUserInputError, UserNotFoundError
from user_directory.models import CountResponse, ExistsResponse, UserCreateRequest, UserResponse, UserUpdateRequest
from user_directory.user_store import InMemoryUserStore

logger = logging.getLogger("user_directory.audit")

router = APIRouter(prefix="/api/users", tags=["users"])


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(
    payload: UserCreateRequest = Body(...),
    store: InMemoryUserStore = Depends(get_user_store),
) -> UserResponse:
    try:
        record = store.create(first_name=payload.first_name, last_name=payload.last_name, email=payload.email)
    except InvalidUserInputError as e:
        logger.warning("Rejected create: %s", e)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except DuplicateEmailError as e:
        logger.warning("Rejected create: duplicate email %s", e.email)
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    logger.info("Created user id=%s email=%s", record.id, record.email)
    return UserResponse.from_record(record)


@router.get("", response_model=list[UserResponse])
def list_users(store: InMemoryUserStore = Depends(get_user_store)) -> list[UserResponse]:
    return [UserResponse.from_record(r) for r in store.list_all()]


@router.get("/search", response_model=list[UserResponse])
def search_users(
    name: str = Query(..., description="Case-insensitive substring of the first or last name"),
    store: InMemoryUserStore = Depends(get_user_store),
) -> list[UserResponse]:
    return [UserResponse.from_record(r) for r in store.search_by_name(name)]


@router.get("/count", response_model=CountResponse)
def count_users(store: InMemoryUserStore = Depends(get_user_store)) -> CountResponse:
    return CountResponse(count=store.count())


@router.get("/email/{email:path}", response_model=UserResponse)
def get_user_by_email(email: str, store: InMemoryUserStore = Depends(get_user_store)) -> UserResponse:
    try:
        return UserResponse.from_record(store.get_by_email(email))
    except UserNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.get("/{user_id}", response_model=UserResponse)
def get_user(user_id: str, store: InMemoryUserStore = Depends(get_user_store)) -> UserResponse:
    try:
        return UserResponse.from_record(store.get_by_id(user_id))
    except UserNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.get("/{user_id}/exists", response_model=ExistsResponse)
def user_exists(user_id: str, store: InMemoryUserStore = Depends(get_user_store)) -> ExistsResponse:
    return ExistsResponse(exists=store.exists(user_id))


@router.put("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: str,
    payload: UserUpdateRequest = Body(...),
    store: InMemoryUserStore = Depends(get_user_store),
) -> UserResponse:
    try:
        record = store.update(
            user_id,
            first_name=payload.first_name,
            last_name=payload.last_name,
            email=payload.email,
        )
    except InvalidUserInputError as e:
        logger.warning("Rejected update of %s: %s", user_id, e)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except UserNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except DuplicateEmailError as e:
        logger.warning("Rejected update of %s: duplicate email %s", user_id, e.email)
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    logger.info("Updated user id=%s", record.id)
    return UserResponse.from_record(record)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def delete_user(user_id: str, store: InMemoryUserStore = Depends(get_user_store)) -> Response:
    try:
        store.delete(user_id)
    except UserNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    logger.info("Deleted user id=%s", user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
